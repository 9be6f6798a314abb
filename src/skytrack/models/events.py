from dataclasses import dataclass
from enum import Enum

from .time import MJD


class CrossingDirection(Enum):
    RISING = "rising"
    SETTING = "setting"


class CulminationKind(Enum):
    MAX = "max"
    MIN = "min"


class AzimuthExtremumKind(Enum):
    MAX = "max"
    MIN = "min"


class PhaseKind(Enum):
    NEW_MOON = "new_moon"
    FIRST_QUARTER = "first_quarter"
    FULL_MOON = "full_moon"
    LAST_QUARTER = "last_quarter"


@dataclass(frozen=True)
class CrossingEvent:
    """A threshold crossing; ``value`` is the function at the root."""

    time: MJD
    direction: CrossingDirection
    value: float


@dataclass(frozen=True)
class CulminationEvent:
    time: MJD
    value: float
    kind: CulminationKind


@dataclass(frozen=True)
class AzimuthCrossingEvent:
    """A bearing crossing; RISING means the azimuth is increasing.

    ``value`` is the azimuth at the root in [0, 360).
    """

    time: MJD
    direction: CrossingDirection
    value: float


@dataclass(frozen=True)
class AzimuthExtremum:
    time: MJD
    azimuth_deg: float
    kind: AzimuthExtremumKind


@dataclass(frozen=True)
class PhaseEvent:
    time: MJD
    kind: PhaseKind
