from dataclasses import dataclass
from datetime import datetime

from math_equations.constants import MU_E, SECONDS_PER_DAY, TWOPI
from math_equations.math_eqs import wrap_360
from timekeeping.julian import as_utc, tle_epoch_to_utc


def semimajor_axis_from_mean_motion(mean_motion_rev_per_day):
    """kepler's third law, a = (mu / n^2)^(1/3) with n in rad/s. returns km"""
    n = mean_motion_rev_per_day * TWOPI / SECONDS_PER_DAY
    return float((MU_E / n**2) ** (1.0 / 3.0))


@dataclass(frozen=True)
class OrbitalElements:
    """Classical elements at epoch. Angles in degrees, distances in km."""

    semimajor_axis_km: float
    eccentricity: float
    inclination_deg: float
    raan_deg: float # right ascension of ascending node
    arg_perigee_deg: float
    mean_anomaly_deg: float
    mean_motion_rev_per_day: float
    epoch: datetime

    def __post_init__(self):
        if not self.semimajor_axis_km > 0.0:
            raise ValueError(f"semimajor axis must be positive, got {self.semimajor_axis_km}")
        if not 0.0 <= self.eccentricity < 1.0:
            raise ValueError(f"eccentricity must be in [0, 1), got {self.eccentricity}")
        if not 0.0 <= self.inclination_deg <= 180.0:
            raise ValueError(f"inclination must be in [0, 180], got {self.inclination_deg}")
        if not self.mean_motion_rev_per_day > 0.0:
            raise ValueError(f"mean motion must be positive, got {self.mean_motion_rev_per_day}")

        # frozen, so normalise through object.__setattr__
        object.__setattr__(self, "raan_deg", wrap_360(self.raan_deg))
        object.__setattr__(self, "arg_perigee_deg", wrap_360(self.arg_perigee_deg))
        object.__setattr__(self, "mean_anomaly_deg", wrap_360(self.mean_anomaly_deg))
        object.__setattr__(self, "epoch", as_utc(self.epoch))

    @classmethod
    def from_mean_motion(cls, eccentricity, inclination_deg, raan_deg, arg_perigee_deg,
                         mean_anomaly_deg, mean_motion_rev_per_day, epoch):
        """elements where only n is known (the TLE case)"""
        return cls(
            semimajor_axis_km=semimajor_axis_from_mean_motion(mean_motion_rev_per_day),
            eccentricity=eccentricity,
            inclination_deg=inclination_deg,
            raan_deg=raan_deg,
            arg_perigee_deg=arg_perigee_deg,
            mean_anomaly_deg=mean_anomaly_deg,
            mean_motion_rev_per_day=mean_motion_rev_per_day,
            epoch=epoch,
        )

    @property
    def mean_motion_rad_per_sec(self):
        return self.mean_motion_rev_per_day * TWOPI / SECONDS_PER_DAY

    @property
    def period_seconds(self):
        return SECONDS_PER_DAY / self.mean_motion_rev_per_day

    def __str__(self):
        return (
            f"Orbital Elements (epoch {self.epoch.isoformat()}):\n"
            f"  Semi-major Axis (a): {self.semimajor_axis_km:.3f} km\n"
            f"  Eccentricity (e): {self.eccentricity:.7f}\n"
            f"  Inclination (i): {self.inclination_deg:.4f} deg\n"
            f"  RAAN (Ω): {self.raan_deg:.4f} deg\n"
            f"  Argument of Perigee (ω): {self.arg_perigee_deg:.4f} deg\n"
            f"  Mean Anomaly (M): {self.mean_anomaly_deg:.4f} deg\n"
            f"  Mean Motion (n): {self.mean_motion_rev_per_day:.8f} rev/day"
        )


@dataclass(frozen=True)
class TleRecord:
    """Every field of a NORAD two-line element set, as parsed."""

    name: str
    catalog_number: int
    classification: str
    international_designator: str
    epoch_year: int # 4 digit
    epoch_day: float # fractional day of year, 1.0 = Jan 1 00:00
    mean_motion_dot: float # rev/day^2 (first derivative / 2 as published)
    mean_motion_ddot: float # rev/day^3 (second derivative / 6 as published)
    bstar: float # 1/earth radii
    ephemeris_type: int
    element_set_number: int

    inclination_deg: float
    raan_deg: float
    eccentricity: float
    arg_perigee_deg: float
    mean_anomaly_deg: float
    mean_motion_rev_per_day: float
    revolution_number: int

    @property
    def epoch(self):
        return tle_epoch_to_utc(self.epoch_year, self.epoch_day)

    def to_elements(self):
        return OrbitalElements.from_mean_motion(
            eccentricity=self.eccentricity,
            inclination_deg=self.inclination_deg,
            raan_deg=self.raan_deg,
            arg_perigee_deg=self.arg_perigee_deg,
            mean_anomaly_deg=self.mean_anomaly_deg,
            mean_motion_rev_per_day=self.mean_motion_rev_per_day,
            epoch=self.epoch,
        )
