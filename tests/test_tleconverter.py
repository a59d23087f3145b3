from datetime import datetime, timezone

import pytest

from tle_io.errors import (
    InvalidChecksum,
    InvalidEccentricity,
    InvalidFormat,
    InvalidNumber,
    MissingLine,
    ParseError,
)
from tle_io.keplerelement import OrbitalElements, TleRecord, semimajor_axis_from_mean_motion
from tle_io.tleconverter import (
    TLEConverter,
    compute_checksum,
    parse_tle,
    parse_tle_exponent,
    parse_tle_record,
)


ISS_NAME = "ISS (ZARYA)"
ISS_L1 = "1 25544U 98067A   20097.82871450  .00000874  00000-0  24271-4 0  9992"
ISS_L2 = "2 25544  51.6465 341.5807 0003880  94.4223  26.1197 15.48685836220958"
ISS_TLE = "\n".join([ISS_NAME, ISS_L1, ISS_L2])

NOAA16_L1 = "1 26536U 00055A   20116.52380576 -.00000007  00000-0  19116-4 0  9998"
NOAA16_L2 = "2 26536  98.7361 186.8634 0009660 233.4374 126.5910 14.13250159306768"

GOES16_L1 = "1 41866U 16071A   20097.54907407 -.00000280  00000-0  00000+0 0  9994"
GOES16_L2 = "2 41866   0.0162 290.6937 0000598  42.6052 343.2534  1.00271173 12978"


def _parse(l1, l2, current_year=2026):
    return TLEConverter.parse([l1, l2], current_year=current_year)


def test_parse_extracts_expected_kepler_elements():
    result = parse_tle(ISS_TLE, current_year=2026)

    assert isinstance(result, OrbitalElements)
    assert result.inclination_deg == pytest.approx(51.6465)
    assert result.raan_deg == pytest.approx(341.5807)
    assert result.eccentricity == pytest.approx(0.0003880)
    assert result.arg_perigee_deg == pytest.approx(94.4223)
    assert result.mean_anomaly_deg == pytest.approx(26.1197)
    assert result.mean_motion_rev_per_day == pytest.approx(15.48685836)
    assert result.semimajor_axis_km == pytest.approx(6798.706, abs=1e-2)


def test_parse_record_keeps_every_field():
    record = parse_tle_record(ISS_TLE, current_year=2026)

    assert isinstance(record, TleRecord)
    assert record.name == ISS_NAME
    assert record.catalog_number == 25544
    assert record.classification == "U"
    assert record.international_designator == "98067A"
    assert record.epoch_year == 2020
    assert record.epoch_day == pytest.approx(97.82871450)
    assert record.mean_motion_dot == pytest.approx(0.00000874)
    assert record.mean_motion_ddot == 0.0
    assert record.bstar == pytest.approx(0.24271e-4)
    assert record.ephemeris_type == 0
    assert record.element_set_number == 999
    assert record.revolution_number == 22095


def test_epoch_is_utc_datetime():
    epoch = parse_tle(ISS_TLE, current_year=2026).epoch

    assert epoch.tzinfo == timezone.utc
    assert (epoch.year, epoch.month, epoch.day) == (2020, 4, 6)
    assert (epoch.hour, epoch.minute) == (19, 53)


def test_two_line_set_without_name():
    record = parse_tle_record(ISS_L1 + "\n" + ISS_L2, current_year=2026)

    assert record.name == ""
    assert record.catalog_number == 25544


def test_blank_lines_and_trailing_whitespace_are_ignored():
    text = "\n" + ISS_NAME + "\n\n" + ISS_L1 + "   \r\n" + ISS_L2 + "  \n\n"

    record = parse_tle_record(text, current_year=2026)

    assert record.name == ISS_NAME
    assert record.revolution_number == 22095


def test_other_satellites_parse():
    noaa = _parse(NOAA16_L1, NOAA16_L2)
    assert noaa.inclination_deg == pytest.approx(98.7361)
    assert noaa.mean_motion_dot == pytest.approx(-0.00000007)
    assert noaa.epoch_year == 2020

    goes = _parse(GOES16_L1, GOES16_L2)
    assert goes.bstar == 0.0
    assert goes.revolution_number == 1297
    assert round(goes.to_elements().semimajor_axis_km) == 42165


def test_geostationary_semimajor_axis():
    assert semimajor_axis_from_mean_motion(1.00271173) == pytest.approx(42164.90, abs=1e-2)


@pytest.mark.parametrize("n_lines", [0, 1, 4])
def test_wrong_number_of_lines(n_lines):
    text = "\n".join([ISS_L1] * n_lines)

    with pytest.raises(MissingLine) as excinfo:
        parse_tle(text)

    assert excinfo.value.actual == n_lines
    assert excinfo.value.expected == 3


def test_short_line_is_invalid_format():
    with pytest.raises(InvalidFormat, match="Line 1 too short"):
        _parse(ISS_L1[:60], ISS_L2)

    with pytest.raises(InvalidFormat, match="Line 2 too short"):
        _parse(ISS_L1, ISS_L2[:68])


def test_swapped_lines_are_invalid_format():
    with pytest.raises(InvalidFormat):
        _parse(ISS_L2, ISS_L1)


def test_checksum_of_valid_lines():
    for line in (ISS_L1, ISS_L2, NOAA16_L1, NOAA16_L2, GOES16_L1, GOES16_L2):
        assert compute_checksum(line) == int(line[68])


@pytest.mark.parametrize("delta", range(1, 10))
def test_any_wrong_checksum_digit_is_rejected(delta):
    actual = int(ISS_L1[68])
    wrong = (actual + delta) % 10
    l1 = ISS_L1[:68] + str(wrong)

    with pytest.raises(InvalidChecksum) as excinfo:
        _parse(l1, ISS_L2)

    assert excinfo.value.line == 1
    assert excinfo.value.expected == wrong
    assert excinfo.value.actual == actual


def test_wrong_checksum_on_line_two():
    l2 = ISS_L2[:68] + "0"

    with pytest.raises(InvalidChecksum) as excinfo:
        _parse(ISS_L1, l2)

    assert excinfo.value.line == 2
    assert excinfo.value.actual == 8


def test_non_digit_checksum_is_invalid_format():
    with pytest.raises(InvalidFormat):
        _parse(ISS_L1[:68] + "X", ISS_L2)


def test_two_digit_years_use_sliding_window():
    cases = {
        "1 25544U 98067A   57097.82871450  .00000874  00000-0  24271-4 0  9992": 2057,
        "1 25544U 98067A   99097.82871450  .00000874  00000-0  24271-4 0  9998": 1999,
        "1 25544U 98067A   76097.82871450  .00000874  00000-0  24271-4 0  9993": 2076,
        "1 25544U 98067A   77097.82871450  .00000874  00000-0  24271-4 0  9994": 1977,
        ISS_L1: 2020,
    }
    for l1, year in cases.items():
        assert _parse(l1, ISS_L2, current_year=2026).epoch_year == year


def test_eccentricity_at_or_above_one():
    l2 = "2 25544  51.6465 341.5807 5e1      94.4223  26.1197 15.48685836220955"

    with pytest.raises(InvalidEccentricity) as excinfo:
        _parse(ISS_L1, l2)

    assert excinfo.value.value >= 1.0


def test_garbage_in_numeric_field():
    l2 = "2 25544  51.6X65 341.5807 0003880  94.4223  26.1197 15.48685836220954"

    with pytest.raises(InvalidNumber) as excinfo:
        _parse(ISS_L1, l2)

    assert excinfo.value.field == "inclination"
    assert excinfo.value.raw_value == "51.6X65"


def test_garbage_in_mean_motion():
    l2 = "2 25544  51.6465 341.5807 0003880  94.4223  26.1197 15.4868X836220953"

    with pytest.raises(InvalidNumber) as excinfo:
        _parse(ISS_L1, l2)

    assert excinfo.value.field == "mean_motion"


def test_garbage_in_bstar():
    l1 = "1 25544U 98067A   20097.82871450  .00000874  00000-0  2427A-4 0  9991"

    with pytest.raises(InvalidNumber) as excinfo:
        _parse(l1, ISS_L2)

    assert excinfo.value.field == "bstar"


def test_negative_bstar():
    l1 = "1 25544U 98067A   20097.82871450  .00000874  00000-0 -24271-4 0  9993"

    assert _parse(l1, ISS_L2).bstar == pytest.approx(-0.24271e-4)


def test_signed_drag_terms():
    l1 = "1 25544U 98067A   20097.82871450 -.00000874 -12345-5  24271+2 0  9991"

    record = _parse(l1, ISS_L2)

    assert record.mean_motion_dot == pytest.approx(-0.00000874)
    assert record.mean_motion_ddot == pytest.approx(-0.12345e-5)
    assert record.bstar == pytest.approx(24.271)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12345-3", 0.12345e-3),
        ("-12345-3", -0.12345e-3),
        (" 24271-4", 0.24271e-4),
        ("+24271+2", 24.271),
        ("00000-0", 0.0),
        ("00000+0", 0.0),
        ("        ", 0.0),
    ],
)
def test_tle_exponent_notation(raw, expected):
    assert parse_tle_exponent(raw, "bstar") == pytest.approx(expected)


def test_parse_errors_share_a_base_class():
    for exc in (MissingLine, InvalidFormat, InvalidNumber, InvalidChecksum, InvalidEccentricity):
        assert issubclass(exc, ParseError)
        assert issubclass(exc, ValueError)


def test_elements_reject_hyperbolic_orbit():
    with pytest.raises(ValueError):
        OrbitalElements.from_mean_motion(
            eccentricity=1.0,
            inclination_deg=10.0,
            raan_deg=0.0,
            arg_perigee_deg=0.0,
            mean_anomaly_deg=0.0,
            mean_motion_rev_per_day=15.0,
            epoch=datetime(2020, 1, 1),
        )


@pytest.mark.parametrize(
    "l1, l2, field",
    [
        (ISS_L1, "2 25544  51.6465      nan 0003880  94.4223  26.1197 15.48685836220950", "raan"),
        (ISS_L1, "2 25544  51.6465 341.5807 0003880  94.4223  26.1197         nan220954", "mean_motion"),
        ("1 25544U 98067A   20         inf  .00000874  00000-0  24271-4 0  9991", ISS_L2, "epoch_day"),
        ("1 25544U 98067A   20         nan  .00000874  00000-0  24271-4 0  9991", ISS_L2, "epoch_day"),
        (ISS_L1, "2 25544  51.6465 3_41.580 0003880  94.4223  26.1197 15.48685836220951", "raan"),
    ],
)
def test_non_finite_or_underscored_numbers_are_rejected(l1, l2, field):
    with pytest.raises(InvalidNumber) as excinfo:
        _parse(l1, l2)

    assert excinfo.value.field == field


def test_unicode_digits_in_bstar_are_rejected():
    l1 = "1 25544U 98067A   20097.82871450  .00000874  00000-0  2427X-4 0  9991".replace("X", "²")

    with pytest.raises(InvalidNumber) as excinfo:
        _parse(l1, ISS_L2)

    assert excinfo.value.field == "bstar"


def test_unicode_digits_in_catalog_number_are_rejected():
    l1 = "1 2554XU 98067A   20097.82871450  .00000874  00000-0  24271-4 0  9998".replace("X", "٣")

    with pytest.raises(InvalidNumber) as excinfo:
        _parse(l1, ISS_L2)

    assert excinfo.value.field == "catalog_number"


def test_unicode_digit_is_not_counted_in_checksum():
    l1 = "1 25544U 98067X   20097.82871450  .00000874  00000-0  24271-4 0  9992".replace("X", "²")

    assert compute_checksum(l1) == 2
    assert _parse(l1, ISS_L2).international_designator == "98067²"


def test_unicode_checksum_column_is_invalid_format():
    with pytest.raises(InvalidFormat):
        _parse(ISS_L1[:68] + "²", ISS_L2)


@pytest.mark.parametrize("raw", ["1_345-3", "12345-²", "123²5-3", "nan", "-inf", "12345-"])
def test_malformed_tle_exponent(raw):
    with pytest.raises(InvalidNumber):
        parse_tle_exponent(raw, "bstar")


def test_elements_print_readably():
    elements = parse_tle(ISS_TLE, current_year=2026)

    text = str(elements)

    assert text.startswith(f"Orbital Elements (epoch {elements.epoch.isoformat()})")
    assert "Eccentricity (e): 0.0003880" in text
    assert "Inclination (i): 51.6465 deg" in text
    assert "Mean Motion (n): 15.48685836 rev/day" in text
