"""Reference frames and the table of frame rotations that exist between them.

ICRS is the hub: every celestial frame has a rotation to and from ICRS, and
any other pair is composed through it. Horizontal depends on an observer and
an instant, so it never takes part in the generic table and is reached only
through ``to_horizontal``.
"""

from enum import Enum

from ..errors import InvalidTransformError


class Frame(Enum):
    ICRS = "ICRS"
    ICRF = "ICRF"
    EQUATORIAL_MEAN_J2000 = "EquatorialMeanJ2000"
    EQUATORIAL_MEAN_OF_DATE = "EquatorialMeanOfDate"
    EQUATORIAL_TRUE_OF_DATE = "EquatorialTrueOfDate"
    ECLIPTIC_MEAN_J2000 = "EclipticMeanJ2000"
    HORIZONTAL = "Horizontal"
    GALACTIC = "Galactic"
    ECEF = "ECEF"

    @property
    def is_local(self) -> bool:
        """True for frames tied to the rotating Earth or an observer."""
        return self in (Frame.HORIZONTAL, Frame.ECEF)

    @property
    def spherical_names(self) -> tuple[str, str]:
        return SPHERICAL_NAMES.get(self, ("longitude", "latitude"))

    def __str__(self) -> str:
        return self.value


HUB_FRAME = Frame.ICRS

SPHERICAL_NAMES = {
    Frame.ICRS: ("right_ascension", "declination"),
    Frame.ICRF: ("right_ascension", "declination"),
    Frame.EQUATORIAL_MEAN_J2000: ("right_ascension", "declination"),
    Frame.EQUATORIAL_MEAN_OF_DATE: ("right_ascension", "declination"),
    Frame.EQUATORIAL_TRUE_OF_DATE: ("right_ascension", "declination"),
    Frame.HORIZONTAL: ("azimuth", "altitude"),
    Frame.GALACTIC: ("l", "b"),
    Frame.ECLIPTIC_MEAN_J2000: ("ecliptic_longitude", "ecliptic_latitude"),
}

# Frames with a direct rotation to and from the hub.
_SPOKES = (
    Frame.ICRF,
    Frame.EQUATORIAL_MEAN_J2000,
    Frame.EQUATORIAL_MEAN_OF_DATE,
    Frame.EQUATORIAL_TRUE_OF_DATE,
    Frame.ECLIPTIC_MEAN_J2000,
    Frame.GALACTIC,
    Frame.ECEF,
)

# Time-dependent frames need precession, nutation or Earth rotation at the
# requested instant.
TIME_DEPENDENT_FRAMES = frozenset(
    {
        Frame.EQUATORIAL_MEAN_OF_DATE,
        Frame.EQUATORIAL_TRUE_OF_DATE,
        Frame.ECEF,
    }
)


def _build_frame_table() -> frozenset:
    pairs = set()
    for spoke in _SPOKES:
        pairs.add((HUB_FRAME, spoke))
        pairs.add((spoke, HUB_FRAME))
    for a in _SPOKES:
        for b in _SPOKES:
            if a is not b:
                pairs.add((a, b))
    return frozenset(pairs)


FRAME_TRANSFORMS = _build_frame_table()

HORIZONTAL_SOURCES = frozenset({HUB_FRAME, *_SPOKES})


def has_frame_transform(source: Frame, target: Frame) -> bool:
    """Whether a rotation from ``source`` to ``target`` is registered."""
    if source is target:
        return True
    return (source, target) in FRAME_TRANSFORMS


def has_horizontal_transform(frame: Frame) -> bool:
    """Whether ``to_horizontal`` accepts values expressed in ``frame``."""
    return frame in HORIZONTAL_SOURCES or frame is Frame.HORIZONTAL


def require_frame_transform(source: Frame, target: Frame) -> None:
    if not has_frame_transform(source, target):
        raise InvalidTransformError(str(source), str(target), kind="frame")
