import numpy as np

from math_equations.constants import TWOPI


def about_x(theta):
    """rotation about x axis by theta. used for inclination"""
    c = np.cos(theta)
    s = np.sin(theta)
    return np.array([[1.0, 0.0, 0.0],
                     [0.0,   c,  -s],
                     [0.0,   s,   c]])


def about_z(theta):
    """rotation about z axis by theta. used for raan, perigee and eci <-> ecef"""
    c = np.cos(theta)
    s = np.sin(theta)
    return np.array([[c,   -s, 0.0  ],
                     [s,    c,  0.0 ],
                     [0.0, 0.0, 1.0]])


def wrap_two_pi(angle):
    """ angle (rad) -> [0, 2pi) """
    wrapped = float(np.mod(angle, TWOPI))
    # np.mod can round a tiny negative up to exactly 2pi
    if wrapped >= TWOPI:
        return 0.0
    return wrapped


def wrap_360(angle_deg):
    """ angle (deg) -> [0, 360) """
    wrapped = float(np.mod(angle_deg, 360.0))
    if wrapped >= 360.0:
        return 0.0
    return wrapped


def wrap_180(angle_deg):
    """ angle (deg) -> [-180, 180] """
    wrapped = wrap_360(angle_deg)
    if wrapped > 180.0:
        wrapped -= 360.0
    return wrapped
