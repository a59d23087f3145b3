from datetime import datetime, timedelta, timezone

import numpy as np

from math_equations.constants import (
    DAYS_PER_JULIAN_CENTURY,
    J2000_JD,
    SECONDS_PER_DAY,
    TWOPI,
    UNIX_EPOCH_JD,
)


def as_utc(dt):
    """Ensure timezone-aware UTC. Naive datetimes are taken to already be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_to_julian_date(dt_utc):
    """
    UTC datetime to a Julian Date (day boundary at noon).
    """
    dt_utc = as_utc(dt_utc)

    year = dt_utc.year
    month = dt_utc.month
    day = dt_utc.day

    if month <= 2:
        year -= 1
        month += 12

    A = int(year / 100)
    B = 2 - A + int(A / 4)

    julian = int(365.25 * (year + 4716)) + int(30.6001 * (month + 1)) + day + B - 1524.5

    # fractional part for the time of day
    seconds = (dt_utc.hour * 3600.0 + dt_utc.minute * 60.0 + dt_utc.second
               + dt_utc.microsecond / 1e6)

    return julian + seconds / SECONDS_PER_DAY


def julian_centuries(julian):
    """Julian centuries since J2000.0"""
    return (julian - J2000_JD) / DAYS_PER_JULIAN_CENTURY


def gmst_angle_rad(date):
    """
    Greenwich Mean Sidereal Time (IAU 1982) in rad, [0, 2pi).

    The polynomial is evaluated at 0h UT of the day and the time of day is
    added at the sidereal rate.
    """
    julian = utc_to_julian_date(date)

    julian_0h = np.floor(julian - 0.5) + 0.5
    fractional_day = julian - julian_0h
    T = julian_centuries(julian_0h)

    gmst0 = (24110.54841
             + 8640184.812866 * T
             + 0.093104 * T**2
             - 6.2e-6 * T**3)

    gmst_sec = np.mod(gmst0 + 1.00273790935 * SECONDS_PER_DAY * fractional_day, SECONDS_PER_DAY)

    return float(gmst_sec * TWOPI / SECONDS_PER_DAY)


def julian_date_to_utc(julian):
    """Julian Date -> aware UTC datetime"""
    return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(days=julian - UNIX_EPOCH_JD)


def tle_epoch_to_utc(epoch_year, epoch_day):
    """
    TLE epoch (4 digit year, fractional day of year) -> aware UTC datetime.
    Day 1.0 is Jan 1 00:00 UTC.
    """
    return datetime(epoch_year, 1, 1, tzinfo=timezone.utc) + timedelta(days=epoch_day - 1.0)


def resolve_two_digit_year(two_digit_year, current_year=None):
    """
    Sliding +/-50 year window around the current year for 2 digit TLE years.
    e.g. in 2026: 20 -> 2020, 57 -> 2057, 99 -> 1999
    """
    if current_year is None:
        current_year = datetime.now(timezone.utc).year

    century = (current_year // 100) * 100
    year = century + two_digit_year

    if year > current_year + 50:
        year -= 100
    elif year < current_year - 50:
        year += 100

    return year
