from dataclasses import dataclass


def _check_lat_lon(latitude_deg, longitude_deg):
    if not -90.0 <= latitude_deg <= 90.0:
        raise ValueError(f"latitude must be in [-90, 90], got {latitude_deg}")
    if not -180.0 <= longitude_deg <= 180.0:
        raise ValueError(f"longitude must be in [-180, 180], got {longitude_deg}")


@dataclass(frozen=True)
class GeodeticCoordinate:
    """WGS84 latitude/longitude [deg] and height above the ellipsoid [km]"""

    latitude_deg: float
    longitude_deg: float
    altitude_km: float

    def __post_init__(self):
        _check_lat_lon(self.latitude_deg, self.longitude_deg)


@dataclass(frozen=True)
class Observer:
    """
    Fixed ground station. Same shape as GeodeticCoordinate, altitude in km
    above the WGS84 ellipsoid (not above sea level).
    """

    latitude_deg: float
    longitude_deg: float
    altitude_km: float = 0.0

    def __post_init__(self):
        _check_lat_lon(self.latitude_deg, self.longitude_deg)

