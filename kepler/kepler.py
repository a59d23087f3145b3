import numpy as np

from frames.state import Frame, StateVector
from kepler.errors import SingularityReached
from math_equations.constants import DEFAULT_TOLERANCE, MAX_ITERATIONS, MU_E
from math_equations.math_eqs import about_x, about_z, wrap_360, wrap_two_pi
from timekeeping.julian import as_utc


def kepler_solve_E(M, e, tol=DEFAULT_TOLERANCE, max_iter=MAX_ITERATIONS):
    """newton's method for solving inverse kepler equation E - e sin(E) = M"""
    #https://en.wikipedia.org/wiki/Kepler%27s_equation#Numerical_approximation_of_inverse_problem

    if not 0.0 <= e < 1.0:
        raise SingularityReached(f"Kepler's equation has no elliptic solution for e = {e}")

    M = wrap_two_pi(M)
    E = M

    for _ in range(max_iter):

        f = E - e*np.sin(E) - M
        fp = 1 - e*np.cos(E)
        dE = -f / fp
        E += dE

        if abs(dE) < tol:
            return float(E)

    raise SingularityReached(
        f"Kepler's equation did not converge in {max_iter} iterations (e = {e}, M = {M})"
    )


def true_anomaly(E, e):
    """eccentric -> true anomaly (rad), half angle form, [0, 2pi)"""
    if not 0.0 <= e < 1.0:
        raise SingularityReached(f"true anomaly undefined for e = {e}")

    nu = 2.0 * np.arctan2(np.sqrt(1.0 + e) * np.sin(E / 2.0),
                          np.sqrt(1.0 - e) * np.cos(E / 2.0))
    return wrap_two_pi(nu)


def true_anomaly_deg(E, e):
    """true anomaly in degrees, [0, 360)"""
    return wrap_360(np.rad2deg(true_anomaly(E, e)))


def mean_anomaly_at(el, when):
    """M(t) = M0 + n (t - epoch), rad in [0, 2pi)"""
    dt = (as_utc(when) - el.epoch).total_seconds()
    return wrap_two_pi(np.deg2rad(el.mean_anomaly_deg) + el.mean_motion_rad_per_sec * dt)


class KeplerToRV:

    def __init__(self, tol=DEFAULT_TOLERANCE, max_iter=MAX_ITERATIONS):
        self.tol = tol
        self.max_iter = max_iter

    def rv_eci(self, el, M=None):
        """
        r [km], v [km/s] in ECI for the elements at mean anomaly M (rad).
        M defaults to the mean anomaly at epoch.
        """
        i = np.deg2rad(el.inclination_deg)
        raan = np.deg2rad(el.raan_deg)
        e = el.eccentricity
        w = np.deg2rad(el.arg_perigee_deg)
        a = el.semimajor_axis_km
        if M is None:
            M = np.deg2rad(el.mean_anomaly_deg)

        E = kepler_solve_E(M, e, self.tol, self.max_iter)
        nu = true_anomaly(E, e)
        cos_nu = np.cos(nu)
        sin_nu = np.sin(nu)

        p = a * (1 - e**2) # semi-latus rectum
        r = p / (1 + e*cos_nu)

        # position and velocity in perifocal frame
        r_pf = np.array([r*cos_nu, r*sin_nu, 0.0])

        v_pf = np.sqrt(MU_E / p) * np.array(
            [-sin_nu,
             e + cos_nu,
             0.0]
        )

        # R_z(raan) R_x(i) R_z(w), perigee rotation applied first
        R = about_z(raan) @ about_x(i) @ about_z(w)

        r_eci = R @ r_pf
        v_eci = R @ v_pf

        return r_eci, v_eci


def propagate(elements, when, tol=DEFAULT_TOLERANCE, max_iter=MAX_ITERATIONS):
    """two body position/velocity of the elements at a UTC instant, ECI frame"""
    when = as_utc(when)
    M = mean_anomaly_at(elements, when)
    r_eci, v_eci = KeplerToRV(tol, max_iter).rv_eci(elements, M)
    return StateVector(position=r_eci, velocity=v_eci, frame=Frame.ECI, time=when)
