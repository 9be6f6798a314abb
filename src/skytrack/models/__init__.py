from .time import MJD, JulianDate, Period, J2000, intersect_periods, timescale
from .frames import Frame, has_frame_transform, has_horizontal_transform
from .orbit import Orbit, OrbitReferenceCenter, BodycentricParams
from .centers import (
    Center,
    CenterKind,
    BARYCENTRIC,
    HELIOCENTRIC,
    GEOCENTRIC,
    has_center_transform,
)
from .coordinates import (
    Direction,
    Position,
    BodycentricPosition,
    Geodetic,
    LengthUnit,
)
from .bodies import Body, Planet, PLANETS, SOLAR_SYSTEM_BODIES, get_body
from .events import (
    CrossingDirection,
    CrossingEvent,
    CulminationKind,
    CulminationEvent,
    AzimuthCrossingEvent,
    AzimuthExtremum,
    AzimuthExtremumKind,
    PhaseKind,
    PhaseEvent,
)

__all__ = [
    "MJD",
    "JulianDate",
    "Period",
    "J2000",
    "intersect_periods",
    "timescale",
    "Frame",
    "has_frame_transform",
    "has_horizontal_transform",
    "Orbit",
    "OrbitReferenceCenter",
    "BodycentricParams",
    "Center",
    "CenterKind",
    "BARYCENTRIC",
    "HELIOCENTRIC",
    "GEOCENTRIC",
    "has_center_transform",
    "Direction",
    "Position",
    "BodycentricPosition",
    "Geodetic",
    "LengthUnit",
    "Body",
    "Planet",
    "PLANETS",
    "SOLAR_SYSTEM_BODIES",
    "get_body",
    "CrossingDirection",
    "CrossingEvent",
    "CulminationKind",
    "CulminationEvent",
    "AzimuthCrossingEvent",
    "AzimuthExtremum",
    "AzimuthExtremumKind",
    "PhaseKind",
    "PhaseEvent",
]
