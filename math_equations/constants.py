"""
Physical and numerical constants shared by the tracking core.

Units are km, s and rad unless the name says otherwise.
"""

import numpy as np

# WGS84 ellipsoid
WGS84_A = 6378.137  # km, equatorial radius
WGS84_E2 = 0.00669437999014  # first eccentricity squared
WGS84_B = WGS84_A * np.sqrt(1.0 - WGS84_E2)  # km, polar radius
WGS84_EP2 = WGS84_E2 / (1.0 - WGS84_E2)  # second eccentricity squared

MU_E = 398600.4418  # km^3/s^2 standard gravitational parameter for Earth
EARTH_OMEGA = 7.2921159e-5  # rad/s

SECONDS_PER_DAY = 86400.0
DAYS_PER_JULIAN_CENTURY = 36525.0
J2000_JD = 2451545.0
UNIX_EPOCH_JD = 2440587.5

TWOPI = 2.0 * np.pi

# newton-raphson defaults for kepler's equation
DEFAULT_TOLERANCE = 1e-5
MAX_ITERATIONS = 500
