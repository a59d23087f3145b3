import logging
import math

from tle_io.errors import (
    InvalidChecksum,
    InvalidEccentricity,
    InvalidFormat,
    InvalidNumber,
)
from tle_io.keplerelement import TleRecord
from tle_io.tleload import TLELoader
from timekeeping.julian import resolve_two_digit_year

logger = logging.getLogger(__name__)

TLE_LINE_LENGTH = 69
DIGITS = "0123456789"


def compute_checksum(line):
    """mod 10 sum of the digits in columns 1-68, '-' counts as 1"""
    total = 0
    for ch in line[:68]:
        if ch in DIGITS:
            total += int(ch)
        elif ch == "-":
            total += 1
    return total % 10


def validate_checksum(line, line_number):
    found = line[68]
    if found not in DIGITS:
        raise InvalidFormat(f"Line {line_number} checksum character is not a digit")

    expected = int(found)
    actual = compute_checksum(line)
    if expected != actual:
        raise InvalidChecksum(line=line_number, expected=expected, actual=actual)


def parse_tle_exponent(raw, field):
    """
    TLE packed scientific notation with an assumed leading decimal point.
        "12345-3"  -> 0.12345e-3
        "-12345-3" -> -0.12345e-3
        "00000+0"  -> 0.0
    """
    text = raw.strip()
    if not text:
        return 0.0

    sign = 1.0
    if text[0] in "+-":
        if text[0] == "-":
            sign = -1.0
        text = text[1:].lstrip()

    split = max(text.rfind("+"), text.rfind("-"))
    if split <= 0:
        # no exponent, plain number
        return sign * _to_float(text, field, raw.strip())

    mantissa = text[:split].strip()
    exponent = text[split + 1:]
    if not (mantissa.isascii() and mantissa.isdigit()):
        raise InvalidNumber(field, raw.strip())
    if not (exponent.isascii() and exponent.isdigit()):
        raise InvalidNumber(field, raw.strip())

    power = int(exponent)
    if text[split] == "-":
        power = -power
    return sign * float("0." + mantissa) * 10.0 ** power


def _to_float(text, field, raw=None):
    """plain ascii decimal, finite. raw is what gets reported on failure"""
    raw = text if raw is None else raw
    if not text.isascii() or "_" in text:
        raise InvalidNumber(field, raw)
    try:
        value = float(text)
    except ValueError:
        raise InvalidNumber(field, raw) from None
    if not math.isfinite(value):
        raise InvalidNumber(field, raw)
    return value


def _float(line, start, stop, field):
    return _to_float(line[start:stop].strip(), field)


def _int(line, start, stop, field, blank=None):
    text = line[start:stop].strip()
    if not text and blank is not None:
        return blank
    if not text.isascii() or "_" in text:
        raise InvalidNumber(field, text)
    try:
        return int(text)
    except ValueError:
        raise InvalidNumber(field, text) from None


class TLEConverter:

    @staticmethod
    def parse(lines, current_year=None):
        """
        Parse 2 or 3 TLE lines (optional name first) into a TleRecord.
        Columns are 0-indexed slices of the 1-indexed NORAD layout.
        """
        name, l1, l2 = TLELoader.split_name(lines)

        if len(l1) < TLE_LINE_LENGTH:
            raise InvalidFormat("Line 1 too short")
        if len(l2) < TLE_LINE_LENGTH:
            raise InvalidFormat("Line 2 too short")
        if l1[0] != "1":
            raise InvalidFormat(f"Line 1 must start with '1', got '{l1[0]}'")
        if l2[0] != "2":
            raise InvalidFormat(f"Line 2 must start with '2', got '{l2[0]}'")

        validate_checksum(l1, 1)
        validate_checksum(l2, 2)

        # line 1
        catalog_number = _int(l1, 2, 7, "catalog_number")
        classification = l1[7]
        designator = l1[9:17].strip()
        year_2d = _int(l1, 18, 20, "epoch_year")
        epoch_day = _float(l1, 20, 32, "epoch_day")
        ndot = _float(l1, 33, 43, "mean_motion_dot")
        nddot = parse_tle_exponent(l1[44:52], "mean_motion_ddot")
        bstar = parse_tle_exponent(l1[53:61], "bstar")
        ephemeris_type = _int(l1, 62, 63, "ephemeris_type", blank=0)
        element_set_number = _int(l1, 64, 68, "element_set_number", blank=0)

        # line 2
        i_deg = _float(l2, 8, 16, "inclination")
        raan_deg = _float(l2, 17, 25, "raan")
        ecc_str = l2[26:33].strip() # 7 digits, no decimal
        w_deg = _float(l2, 34, 42, "arg_perigee")
        M_deg = _float(l2, 43, 51, "mean_anomaly")
        mmotion_rev = _float(l2, 52, 63, "mean_motion")
        revolution_number = _int(l2, 63, 68, "revolution_number", blank=0)

        e = _to_float("0." + ecc_str, "eccentricity", ecc_str)
        if e >= 1.0:
            raise InvalidEccentricity(e)

        if not 0.0 <= i_deg <= 180.0:
            raise InvalidFormat(f"inclination {i_deg} outside [0, 180]")
        if mmotion_rev <= 0.0:
            raise InvalidNumber("mean_motion", l2[52:63].strip())

        record = TleRecord(
            name=name,
            catalog_number=catalog_number,
            classification=classification,
            international_designator=designator,
            epoch_year=resolve_two_digit_year(year_2d, current_year),
            epoch_day=epoch_day,
            mean_motion_dot=ndot,
            mean_motion_ddot=nddot,
            bstar=bstar,
            ephemeris_type=ephemeris_type,
            element_set_number=element_set_number,
            inclination_deg=i_deg,
            raan_deg=raan_deg % 360.0,
            eccentricity=e,
            arg_perigee_deg=w_deg % 360.0,
            mean_anomaly_deg=M_deg % 360.0,
            mean_motion_rev_per_day=mmotion_rev,
            revolution_number=revolution_number,
        )
        logger.debug(f"Parsed TLE {record.catalog_number} ({record.name or 'unnamed'}) "
                     f"epoch {record.epoch_year} day {record.epoch_day}")
        return record


def parse_tle_record(text, current_year=None):
    """TLE text -> TleRecord"""
    return TLEConverter.parse(TLELoader.read_lines(text), current_year=current_year)


def parse_tle(text, current_year=None):
    """TLE text -> OrbitalElements ready for propagation"""
    return parse_tle_record(text, current_year=current_year).to_elements()
