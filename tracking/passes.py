"""
Pass prediction: when does a satellite rise above, culminate and set below a
minimum elevation for a ground observer.

    1. coarse scan of elevation - threshold on a fixed step grid
    2. bisection of every sign change down to refine_tol_s (AOS / LOS)
    3. golden section search for the highest elevation between AOS and LOS
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from time import perf_counter

import numpy as np

from kepler.errors import InvalidRange, SingularityReached
from timekeeping.julian import as_utc
from tracking.config import PassSearchConfig
from tracking.look import topocentric
from tracking.tracks import sample_offsets

logger = logging.getLogger(__name__)

INV_PHI = (np.sqrt(5.0) - 1.0) / 2.0 # 1 / golden ratio


@dataclass(frozen=True)
class PassPoint:
    time: datetime
    azimuth_deg: float
    elevation_deg: float


@dataclass(frozen=True)
class PassWindow:
    aos: PassPoint # acquisition of signal
    max: PassPoint # highest elevation
    los: PassPoint # loss of signal

    @property
    def duration_seconds(self):
        return (self.los.time - self.aos.time).total_seconds()


class PassSearch:
    """
    Search core, independent of orbits.

    look(t) -> (azimuth_deg, elevation_deg) for t in seconds from the start
    of the window. Events come back as (t, azimuth_deg, elevation_deg).
    """

    def __init__(self, look, min_elevation_deg, cfg=None):
        self.look = look
        self.min_el = min_elevation_deg
        self.cfg = cfg if cfg is not None else PassSearchConfig()

    def _el(self, t):
        return self.look(t)[1]

    def _point(self, t):
        az, el = self.look(t)
        return t, az, el

    def run(self, offsets):
        """offsets: increasing sample times, first is the window start, last the end"""
        samples = [(t, self._el(t) - self.min_el) for t in offsets]
        passes = []
        if len(samples) < 2:
            return passes

        aos_t = None
        for (t_prev, g_prev), (t, g) in zip(samples, samples[1:]):
            if g_prev < 0.0 <= g:
                aos_t = self._bisect(t_prev, t, rising=True)

            elif g_prev >= 0.0 > g:
                if aos_t is None:
                    logger.debug(f"Skipping pass already in progress at window start (LOS near t={t:.1f} s)")
                    continue
                los_t = self._bisect(t_prev, t, rising=False)
                found = self._build(aos_t, los_t)
                if found is not None:
                    passes.append(found)
                aos_t = None

        if aos_t is not None:
            logger.debug(f"Skipping pass still in progress at window end (AOS t={aos_t:.1f} s)")

        return passes

    def _bisect(self, left, right, rising):
        """
        Shrink [left, right] around the threshold crossing.
        Rising returns the first time at/above threshold, falling the last.
        """
        tol = self.cfg.refine_tol_s
        iterations = 0
        while right - left > tol:
            if iterations >= self.cfg.max_bisection_iter:
                raise SingularityReached(
                    f"Bisection did not reach {tol} s in {self.cfg.max_bisection_iter} iterations"
                )
            mid = 0.5 * (left + right)
            above = self._el(mid) >= self.min_el
            if above == rising:
                right = mid
            else:
                left = mid
            iterations += 1

        return right if rising else left

    def _golden(self, a, b):
        """time of maximum elevation in [a, b], elevation assumed unimodal there"""
        tol = self.cfg.refine_tol_s
        c = b - INV_PHI * (b - a)
        d = a + INV_PHI * (b - a)
        fc = self._el(c)
        fd = self._el(d)

        iterations = 0
        while b - a > tol:
            if iterations >= self.cfg.max_golden_iter:
                raise SingularityReached(
                    f"Golden section did not reach {tol} s in {self.cfg.max_golden_iter} iterations"
                )
            if fc >= fd:
                b, d, fd = d, c, fc
                c = b - INV_PHI * (b - a)
                fc = self._el(c)
            else:
                a, c, fc = c, d, fd
                d = a + INV_PHI * (b - a)
                fd = self._el(d)
            iterations += 1

        return 0.5 * (a + b)

    def _build(self, aos_t, los_t):
        aos = self._point(aos_t)
        peak = self._point(self._golden(aos_t, los_t))
        los = self._point(los_t)

        if not aos[0] < peak[0] <= los[0] or peak[2] < self.min_el:
            logger.debug(f"Discarding degenerate pass between t={aos_t:.1f} s and t={los_t:.1f} s")
            return None
        return aos, peak, los


def predict_passes(elements, observer, start, end, min_elevation_deg=0.0, step_seconds=60.0, config=None):
    """
    All complete passes with AOS and LOS inside [start, end].

    Passes already above min_elevation_deg at start, or still above it at
    end, are left out.
    """
    cfg = config if config is not None else PassSearchConfig()
    start = as_utc(start)
    end = as_utc(end)
    if end < start:
        raise InvalidRange(start, end)

    offsets = sample_offsets((end - start).total_seconds(), step_seconds)

    def at(t):
        return start + timedelta(seconds=t)

    def look(t):
        topo = topocentric(elements, observer, at(t), cfg.apply_refraction)
        return topo.azimuth_deg, topo.elevation_deg

    def to_point(event):
        t, az, el = event
        return PassPoint(time=at(t), azimuth_deg=az, elevation_deg=el)

    t_wall0 = perf_counter()
    found = PassSearch(look, min_elevation_deg, cfg).run(offsets)

    passes = []
    for aos, peak, los in found:
        window = PassWindow(aos=to_point(aos), max=to_point(peak), los=to_point(los))
        # offsets are rounded to whole microseconds on the way to datetimes
        if not window.aos.time < window.max.time <= window.los.time:
            continue
        logger.debug(f"Pass AOS {window.aos.time.isoformat()} max {window.max.elevation_deg:.1f} deg "
                     f"LOS {window.los.time.isoformat()}")
        passes.append(window)

    logger.info(f"Found {len(passes)} passes above {min_elevation_deg} deg in {len(offsets)} samples "
                f"({perf_counter() - t_wall0:.3f} s)")
    return passes
