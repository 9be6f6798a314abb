"""Reference centers (coordinate origins) and the center shifts between them.

Barycentric, Heliocentric and Geocentric are plain origins. Topocentric and
Bodycentric are parameterized by an observer site or an orbiting body, so a
``Center`` is a (kind, params) pair rather than a bare enum member.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from ..errors import InvalidTransformError
from .orbit import BodycentricParams, OrbitReferenceCenter

if TYPE_CHECKING:
    from .coordinates import Geodetic


class CenterKind(Enum):
    BARYCENTRIC = "Barycentric"
    HELIOCENTRIC = "Heliocentric"
    GEOCENTRIC = "Geocentric"
    TOPOCENTRIC = "Topocentric"
    BODYCENTRIC = "Bodycentric"

    @property
    def is_parameterized(self) -> bool:
        return self in (CenterKind.TOPOCENTRIC, CenterKind.BODYCENTRIC)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Center:
    kind: CenterKind
    params: Optional[Union["Geodetic", BodycentricParams]] = None

    def __post_init__(self):
        if self.kind.is_parameterized and self.params is None:
            raise ValueError(f"{self.kind} center requires parameters")
        if not self.kind.is_parameterized and self.params is not None:
            raise ValueError(f"{self.kind} center does not take parameters")
        if self.kind is CenterKind.BODYCENTRIC and not isinstance(
            self.params, BodycentricParams
        ):
            raise ValueError("Bodycentric center requires BodycentricParams")

    @classmethod
    def topocentric(cls, site: "Geodetic") -> "Center":
        return cls(CenterKind.TOPOCENTRIC, site)

    @classmethod
    def bodycentric(cls, params: BodycentricParams) -> "Center":
        return cls(CenterKind.BODYCENTRIC, params)

    @property
    def site(self) -> "Geodetic":
        if self.kind is not CenterKind.TOPOCENTRIC:
            raise AttributeError(f"{self.kind} center has no observer site")
        return self.params

    def __str__(self) -> str:
        return str(self.kind)


BARYCENTRIC = Center(CenterKind.BARYCENTRIC)
HELIOCENTRIC = Center(CenterKind.HELIOCENTRIC)
GEOCENTRIC = Center(CenterKind.GEOCENTRIC)

STANDARD_CENTERS = {
    CenterKind.BARYCENTRIC: BARYCENTRIC,
    CenterKind.HELIOCENTRIC: HELIOCENTRIC,
    CenterKind.GEOCENTRIC: GEOCENTRIC,
}

ORBIT_CENTERS = {
    OrbitReferenceCenter.BARYCENTRIC: BARYCENTRIC,
    OrbitReferenceCenter.HELIOCENTRIC: HELIOCENTRIC,
    OrbitReferenceCenter.GEOCENTRIC: GEOCENTRIC,
}

CENTER_TRANSFORMS = frozenset(
    {
        (CenterKind.BARYCENTRIC, CenterKind.HELIOCENTRIC),
        (CenterKind.HELIOCENTRIC, CenterKind.BARYCENTRIC),
        (CenterKind.BARYCENTRIC, CenterKind.GEOCENTRIC),
        (CenterKind.GEOCENTRIC, CenterKind.BARYCENTRIC),
        (CenterKind.HELIOCENTRIC, CenterKind.GEOCENTRIC),
        (CenterKind.GEOCENTRIC, CenterKind.HELIOCENTRIC),
        (CenterKind.GEOCENTRIC, CenterKind.TOPOCENTRIC),
        (CenterKind.TOPOCENTRIC, CenterKind.GEOCENTRIC),
    }
)


def _kind(center: Union[Center, CenterKind]) -> CenterKind:
    return center.kind if isinstance(center, Center) else center


def has_center_transform(
    source: Union[Center, CenterKind], target: Union[Center, CenterKind]
) -> bool:
    """Whether a center shift from ``source`` to ``target`` is registered.

    Identity is always valid. For parameterized centers identity means the
    same parameters, so two different observer sites are not interchangeable.
    """
    if isinstance(source, Center) and isinstance(target, Center):
        if source == target:
            return True
        if source.kind is target.kind and source.kind.is_parameterized:
            return False
    source_kind = _kind(source)
    target_kind = _kind(target)
    if source_kind is target_kind:
        return True
    return (source_kind, target_kind) in CENTER_TRANSFORMS


def require_center_transform(source: Center, target: Center) -> None:
    if not has_center_transform(source, target):
        raise InvalidTransformError(str(source), str(target), kind="center")
