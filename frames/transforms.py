"""
Coordinate transformations for the tracking pipeline.

    ECI -> ECEF (GMST rotation) -> geodetic (WGS84, Bowring)
                                -> ENU (observer tangent plane) -> az/el/range

All distances in km, velocities in km/s, public angles in degrees.
"""

import numpy as np

from frames.geodetic import GeodeticCoordinate
from frames.state import Frame, StateVector
from math_equations.constants import EARTH_OMEGA, WGS84_A, WGS84_B, WGS84_E2, WGS84_EP2
from math_equations.math_eqs import about_z, wrap_180, wrap_360
from timekeeping.julian import gmst_angle_rad

OMEGA_EARTH = np.array([0.0, 0.0, EARTH_OMEGA])

BOWRING_MAX_ITER = 5
BOWRING_TOL = 1e-12 # rad
POLE_TOL = 1e-9 # km off the spin axis treated as on it


def eci_to_ecef(r_eci, theta):
    """ rotate the frame by gmst theta (rad) about z """
    return about_z(-theta) @ np.asarray(r_eci, dtype=float)


def ecef_to_eci(r_ecef, theta):
    """ inverse of eci_to_ecef """
    return about_z(theta) @ np.asarray(r_ecef, dtype=float)


def eci_velocity_to_ecef(r_eci, v_eci, theta):
    """v_ecef = R v_eci - w_earth x r_ecef"""
    r_ecef = eci_to_ecef(r_eci, theta)
    return eci_to_ecef(v_eci, theta) - np.cross(OMEGA_EARTH, r_ecef)


def state_to_ecef(state):
    """ECI StateVector -> ECEF StateVector at the same instant"""
    if state.frame == Frame.ECEF:
        return state

    theta = gmst_angle_rad(state.time)
    r_ecef = eci_to_ecef(state.position, theta)
    v_ecef = None
    if state.velocity is not None:
        v_ecef = eci_velocity_to_ecef(state.position, state.velocity, theta)
    return StateVector(position=r_ecef, velocity=v_ecef, frame=Frame.ECEF, time=state.time)


def geodetic_to_ecef(lat, lon, alt):
    """
    Convert geodetic coordinates to ECEF.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees
        alt: Height above the ellipsoid in km

    Returns:
        np.array([x, y, z]) in km
    """
    lat_rad = np.radians(lat)
    lon_rad = np.radians(lon)

    # radius of curvature in prime vertical
    N = WGS84_A / np.sqrt(1 - WGS84_E2 * np.sin(lat_rad) ** 2)

    x = (N + alt) * np.cos(lat_rad) * np.cos(lon_rad)
    y = (N + alt) * np.cos(lat_rad) * np.sin(lon_rad)
    z = (N * (1 - WGS84_E2) + alt) * np.sin(lat_rad)

    return np.array([x, y, z])


def ecef_to_geodetic(r_ecef):
    """
    Convert ECEF (km) to a GeodeticCoordinate.
    Bowring's initial estimate, then fixed point refinement of the latitude.
    """
    x, y, z = (float(c) for c in r_ecef)
    p = np.hypot(x, y)

    if p < POLE_TOL:
        # on the spin axis longitude is undefined
        lat = 90.0 * np.sign(z)
        return GeodeticCoordinate(float(lat), 0.0, float(abs(z) - WGS84_B))

    lon = np.arctan2(y, x)

    theta = np.arctan2(z * WGS84_A, p * WGS84_B)
    lat = np.arctan2(z + WGS84_EP2 * WGS84_B * np.sin(theta) ** 3,
                     p - WGS84_E2 * WGS84_A * np.cos(theta) ** 3)

    for _ in range(BOWRING_MAX_ITER):
        N = WGS84_A / np.sqrt(1 - WGS84_E2 * np.sin(lat) ** 2)
        alt = p * np.cos(lat) + z * np.sin(lat) - WGS84_A**2 / N
        lat_next = np.arctan2(z, p * (1 - WGS84_E2 * N / (N + alt)))
        converged = abs(lat_next - lat) < BOWRING_TOL
        lat = lat_next
        if converged:
            break

    N = WGS84_A / np.sqrt(1 - WGS84_E2 * np.sin(lat) ** 2)
    # stable at high latitude, unlike p / cos(lat) - N
    alt = p * np.cos(lat) + z * np.sin(lat) - WGS84_A**2 / N

    return GeodeticCoordinate(
        latitude_deg=float(np.degrees(lat)),
        longitude_deg=wrap_180(np.degrees(lon)),
        altitude_km=float(alt),
    )


def ecef_to_enu(r_sat, r_obs, lat, lon):
    """
    Relative position satellite - observer rotated into the observer's
    East-North-Up frame. lat, lon in degrees.
    """
    d = np.asarray(r_sat, dtype=float) - np.asarray(r_obs, dtype=float)

    lat_rad = np.radians(lat)
    lon_rad = np.radians(lon)
    sin_lat, cos_lat = np.sin(lat_rad), np.cos(lat_rad)
    sin_lon, cos_lon = np.sin(lon_rad), np.cos(lon_rad)

    R = np.array([
        [-sin_lon,            cos_lon,           0.0    ],
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [ cos_lat * cos_lon,  cos_lat * sin_lon, sin_lat],
    ])

    return R @ d


def enu_to_horizontal(enu):
    """ENU -> (azimuth deg [0, 360), elevation deg [-90, 90], range km)"""
    east, north, up = (float(c) for c in enu)

    range_horizontal = np.hypot(east, north)
    elevation = float(np.degrees(np.arctan2(up, range_horizontal)))
    azimuth = wrap_360(np.degrees(np.arctan2(east, north)))
    rng = float(np.sqrt(east**2 + north**2 + up**2))

    return azimuth, elevation, rng


def range_rate(r_sat, v_sat, r_obs):
    """d(range)/dt in km/s for a stationary observer, positive when receding"""
    los = np.asarray(r_sat, dtype=float) - np.asarray(r_obs, dtype=float)
    rng = np.linalg.norm(los)
    if rng == 0.0:
        return 0.0
    return float(np.dot(los, v_sat) / rng)


def apply_refraction(elevation_deg):
    """
    Bennett's formula for apparent elevation. Not applied below -1 deg where
    the formula is unstable.
    """
    if elevation_deg <= -1.0:
        return elevation_deg

    h = elevation_deg + 7.31 / (elevation_deg + 4.4)
    correction_arcmin = 1.0 / np.tan(np.radians(h))

    return float(min(elevation_deg + correction_arcmin / 60.0, 90.0))
