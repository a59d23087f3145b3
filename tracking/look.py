from dataclasses import dataclass
from datetime import datetime

from frames.transforms import (
    apply_refraction as bennett_refraction,
    ecef_to_enu,
    ecef_to_geodetic,
    enu_to_horizontal,
    geodetic_to_ecef,
    range_rate,
    state_to_ecef,
)
from kepler.kepler import propagate


@dataclass(frozen=True)
class Topocentric:
    """
    Satellite as seen from an observer.

    azimuth clockwise from north [0, 360), elevation above horizon [-90, 90],
    range [km], range rate [km/s] positive when moving away.
    """

    time: datetime
    azimuth_deg: float
    elevation_deg: float
    range_km: float
    range_rate_km_s: float


def observer_ecef(observer):
    return geodetic_to_ecef(observer.latitude_deg, observer.longitude_deg, observer.altitude_km)


def topocentric(elements, observer, when, apply_refraction=False):
    """look angles, range and range rate of the satellite from the observer at `when`"""
    sat = state_to_ecef(propagate(elements, when))
    r_obs = observer_ecef(observer)

    enu = ecef_to_enu(sat.position, r_obs, observer.latitude_deg, observer.longitude_deg)
    azimuth, elevation, rng = enu_to_horizontal(enu)

    if apply_refraction:
        elevation = bennett_refraction(elevation)

    return Topocentric(
        time=sat.time,
        azimuth_deg=azimuth,
        elevation_deg=elevation,
        range_km=rng,
        range_rate_km_s=range_rate(sat.position, sat.velocity, r_obs),
    )


def subpoint(elements, when):
    """sub-satellite point, GeodeticCoordinate with altitude above the ellipsoid"""
    sat = state_to_ecef(propagate(elements, when))
    return ecef_to_geodetic(sat.position)
