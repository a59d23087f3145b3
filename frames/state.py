from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

import numpy as np


class Frame(str, Enum):
    ECI = "ECI"
    ECEF = "ECEF"


def _frozen_vector(v):
    arr = np.array(v, dtype=float, copy=True).reshape(3)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class StateVector:
    """position [km] and optional velocity [km/s] tagged with their frame"""

    position: np.ndarray
    velocity: Optional[np.ndarray]
    frame: Frame
    time: datetime

    def __post_init__(self):
        object.__setattr__(self, "position", _frozen_vector(self.position))
        if self.velocity is not None:
            object.__setattr__(self, "velocity", _frozen_vector(self.velocity))
        object.__setattr__(self, "frame", Frame(self.frame))

    @property
    def radius(self):
        return float(np.linalg.norm(self.position))

    @property
    def speed(self):
        if self.velocity is None:
            return None
        return float(np.linalg.norm(self.velocity))
