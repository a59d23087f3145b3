import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

import numpy as np

from kepler.errors import InvalidRange
from timekeeping.julian import as_utc
from tracking.look import subpoint, topocentric

logger = logging.getLogger(__name__)

_ALIGN_EPS = 1e-9 # s


@dataclass(frozen=True)
class GroundTrackPoint:
    time: datetime
    latitude_deg: float
    longitude_deg: float
    altitude_km: float


def sample_offsets(span_s, step_s):
    """
    [0, step, 2*step, ...] seconds, with the last offset forced to exactly span_s.
    An aligned span gives floor(span/step) + 1 offsets.
    """
    if step_s <= 0.0:
        raise ValueError(f"step must be positive, got {step_s}")

    n = int(np.floor(span_s / step_s))
    offsets = [k * step_s for k in range(n + 1)]

    if span_s - offsets[-1] > _ALIGN_EPS:
        offsets.append(span_s)
    else:
        offsets[-1] = span_s
    return offsets


def sample_times(start, end, step_s):
    """UTC datetimes from start to end inclusive, see sample_offsets"""
    start = as_utc(start)
    end = as_utc(end)
    if end < start:
        raise InvalidRange(start, end)

    span = (end - start).total_seconds()
    offsets = sample_offsets(span, step_s)
    return [start + timedelta(seconds=o) for o in offsets[:-1]] + [end]


def ground_track(elements, start, end, step_seconds):
    """sub-satellite points from start to end every step_seconds"""
    track = []
    for t in sample_times(start, end, step_seconds):
        point = subpoint(elements, t)
        track.append(GroundTrackPoint(
            time=t,
            latitude_deg=point.latitude_deg,
            longitude_deg=point.longitude_deg,
            altitude_km=point.altitude_km,
        ))

    logger.debug(f"Ground track: {len(track)} points, step {step_seconds} s")
    return track


def sky_track(elements, observer, start, end, step_seconds, apply_refraction=False):
    """look angles from the observer from start to end every step_seconds"""
    track = [topocentric(elements, observer, t, apply_refraction)
             for t in sample_times(start, end, step_seconds)]

    logger.debug(f"Sky track: {len(track)} points, step {step_seconds} s")
    return track
