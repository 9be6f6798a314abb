"""Directions, positions and geodetic locations.

Cartesian components are stored as plain float tuples so values compare and
hash like the other frozen models; ``.vector`` exposes them as a numpy array.
"""

import dataclasses
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

import numpy as np
from skyfield.api import wgs84
from skyfield.constants import AU_KM, AU_M
from skyfield.units import Angle, Distance

from ..errors import InvalidTransformError
from .centers import GEOCENTRIC, Center, CenterKind
from .frames import Frame

UNIT_NORM_TOLERANCE = 1e-9

_EQUATORIAL_FRAMES = (
    Frame.ICRS,
    Frame.ICRF,
    Frame.EQUATORIAL_MEAN_J2000,
    Frame.EQUATORIAL_MEAN_OF_DATE,
    Frame.EQUATORIAL_TRUE_OF_DATE,
)


class LengthUnit(Enum):
    AU = "au"
    KM = "km"
    M = "m"

    @property
    def per_au(self) -> float:
        """Number of this unit in one astronomical unit."""
        return _UNITS_PER_AU[self]


_UNITS_PER_AU = {
    LengthUnit.AU: 1.0,
    LengthUnit.KM: AU_KM,
    LengthUnit.M: AU_M,
}


def convert_length(values, source: LengthUnit, target: LengthUnit):
    if source is target:
        return values
    return values * (target.per_au / source.per_au)


def _as_tuple(values: Iterable[float]) -> tuple[float, float, float]:
    x, y, z = (float(v) for v in values)
    return (x, y, z)


def spherical_to_vector(lon_deg: float, lat_deg: float) -> np.ndarray:
    lon = math.radians(lon_deg)
    lat = math.radians(lat_deg)
    return np.array(
        [
            math.cos(lat) * math.cos(lon),
            math.cos(lat) * math.sin(lon),
            math.sin(lat),
        ]
    )


def _lon_lat(x: float, y: float, z: float) -> tuple[float, float]:
    """Longitude in [0, 360) and latitude in [-90, 90], degrees."""
    lon = math.degrees(math.atan2(y, x)) % 360.0
    lat = math.degrees(math.atan2(z, math.hypot(x, y)))
    return lon, lat


@dataclass(frozen=True)
class Direction:
    """A unit vector tagged with a frame. Directions carry no origin."""

    frame: Frame
    xyz: tuple[float, float, float]

    def __post_init__(self):
        xyz = _as_tuple(self.xyz)
        norm = math.sqrt(xyz[0] ** 2 + xyz[1] ** 2 + xyz[2] ** 2)
        if abs(norm - 1.0) > UNIT_NORM_TOLERANCE:
            raise ValueError(f"Direction must be a unit vector, got norm {norm!r}")
        object.__setattr__(self, "xyz", xyz)

    @classmethod
    def from_vector(cls, frame: Frame, vector) -> "Direction":
        vector = np.asarray(vector, dtype=np.float64)
        norm = np.linalg.norm(vector)
        if norm == 0.0:
            raise ValueError("Cannot build a direction from a zero vector")
        return cls(frame, vector / norm)

    @classmethod
    def from_spherical(cls, frame: Frame, lon_deg: float, lat_deg: float) -> "Direction":
        return cls(frame, spherical_to_vector(lon_deg, lat_deg))

    @property
    def vector(self) -> np.ndarray:
        return np.array(self.xyz)

    @property
    def lon_deg(self) -> float:
        return _lon_lat(*self.xyz)[0]

    @property
    def lat_deg(self) -> float:
        return _lon_lat(*self.xyz)[1]

    @property
    def lon(self) -> Angle:
        return Angle(degrees=self.lon_deg)

    @property
    def lat(self) -> Angle:
        return Angle(degrees=self.lat_deg)

    @property
    def ra(self) -> Angle:
        self._require_frames(_EQUATORIAL_FRAMES, "right ascension")
        return Angle(degrees=self.lon_deg, preference="hours")

    @property
    def dec(self) -> Angle:
        self._require_frames(_EQUATORIAL_FRAMES, "declination")
        return self.lat

    @property
    def azimuth(self) -> Angle:
        self._require_frames((Frame.HORIZONTAL,), "azimuth")
        return self.lon

    @property
    def altitude(self) -> Angle:
        self._require_frames((Frame.HORIZONTAL,), "altitude")
        return self.lat

    def _require_frames(self, frames, component: str) -> None:
        if self.frame not in frames:
            raise AttributeError(f"{self.frame} directions have no {component}")

    def separation(self, other: "Direction") -> Angle:
        """Angular distance to a direction in the same frame."""
        if other.frame is not self.frame:
            raise ValueError(
                f"Cannot compare directions in {self.frame} and {other.frame}"
            )
        cos_sep = float(np.clip(np.dot(self.vector, other.vector), -1.0, 1.0))
        return Angle(radians=math.acos(cos_sep))


def is_valid_combination(center: Center, frame: Frame) -> bool:
    """Whether a position may be expressed with this (center, frame) pair."""
    if frame is Frame.HORIZONTAL:
        return center.kind is CenterKind.TOPOCENTRIC
    if frame is Frame.ECEF:
        return center.kind in (CenterKind.GEOCENTRIC, CenterKind.TOPOCENTRIC)
    return True


@dataclass(frozen=True)
class Position:
    """A point in space: cartesian components tagged with center, frame and unit."""

    center: Center
    frame: Frame
    xyz: tuple[float, float, float]
    unit: LengthUnit = LengthUnit.AU

    def __post_init__(self):
        if not is_valid_combination(self.center, self.frame):
            raise InvalidTransformError(str(self.center), str(self.frame), kind="center/frame")
        object.__setattr__(self, "xyz", _as_tuple(self.xyz))

    @classmethod
    def from_spherical(
        cls,
        center: Center,
        frame: Frame,
        lon_deg: float,
        lat_deg: float,
        distance: float,
        unit: LengthUnit = LengthUnit.AU,
    ) -> "Position":
        return cls(center, frame, spherical_to_vector(lon_deg, lat_deg) * distance, unit)

    @property
    def vector(self) -> np.ndarray:
        return np.array(self.xyz)

    @property
    def vector_au(self) -> np.ndarray:
        return convert_length(self.vector, self.unit, LengthUnit.AU)

    @property
    def distance(self) -> Distance:
        return Distance(au=float(np.linalg.norm(self.vector_au)))

    @property
    def direction(self) -> Direction:
        return Direction.from_vector(self.frame, self.vector)

    def to_unit(self, unit: LengthUnit) -> "Position":
        if unit is self.unit:
            return self
        return dataclasses.replace(
            self, xyz=convert_length(self.vector, self.unit, unit), unit=unit
        )

    def with_vector(self, vector) -> "Position":
        """Same tags, new components (in this position's unit)."""
        return dataclasses.replace(self, xyz=vector)

    def distance_to(self, other: "Position") -> Distance:
        if other.center != self.center or other.frame is not self.frame:
            raise ValueError("Positions must share center and frame")
        delta = self.vector_au - other.vector_au
        return Distance(au=float(np.linalg.norm(delta)))


@dataclass(frozen=True)
class BodycentricPosition(Position):
    """A position measured from an orbiting body.

    ``source_center`` records the standard center the position was derived
    from, so the inverse transform can restore it.
    """

    source_center: Center = field(default=GEOCENTRIC)

    def __post_init__(self):
        super().__post_init__()
        if self.center.kind is not CenterKind.BODYCENTRIC:
            raise ValueError("BodycentricPosition requires a Bodycentric center")

    @property
    def params(self):
        return self.center.params


@dataclass(frozen=True)
class Geodetic:
    """A WGS84 geodetic location (geocentric center, ECEF frame)."""

    lon_deg: float
    lat_deg: float
    height_m: float = 0.0

    def __post_init__(self):
        if not -90.0 <= self.lat_deg <= 90.0:
            raise ValueError(f"Latitude {self.lat_deg}° outside valid range [-90, 90]")

    @property
    def lon(self) -> Angle:
        return Angle(degrees=self.lon_deg)

    @property
    def lat(self) -> Angle:
        return Angle(degrees=self.lat_deg)

    def skyfield_position(self):
        return wgs84.latlon(self.lat_deg, self.lon_deg, elevation_m=self.height_m)

    def ecef_vector_au(self) -> np.ndarray:
        return np.asarray(self.skyfield_position().itrs_xyz.au, dtype=np.float64)

    def to_cartesian(self, unit: LengthUnit = LengthUnit.M) -> Position:
        position = Position(GEOCENTRIC, Frame.ECEF, self.ecef_vector_au())
        return position.to_unit(unit)
