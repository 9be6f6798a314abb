from dataclasses import dataclass, field
from enum import Enum

from .time import J2000, MJD


class OrbitReferenceCenter(Enum):
    """Standard center that a set of orbital elements is referred to."""

    BARYCENTRIC = "Barycentric"
    HELIOCENTRIC = "Heliocentric"
    GEOCENTRIC = "Geocentric"


@dataclass(frozen=True)
class Orbit:
    """Keplerian elements referred to the mean ecliptic and equinox of J2000."""

    semi_major_axis_au: float
    eccentricity: float
    inclination_deg: float
    lon_ascending_node_deg: float
    arg_perihelion_deg: float
    mean_anomaly_deg: float
    epoch: MJD = field(default=J2000)

    def __post_init__(self):
        if self.semi_major_axis_au <= 0.0:
            raise ValueError(
                f"Semi-major axis must be positive, got {self.semi_major_axis_au}"
            )
        if not 0.0 <= self.eccentricity < 1.0:
            raise ValueError(
                f"Only elliptical orbits are supported (0 <= e < 1), got {self.eccentricity}"
            )


@dataclass(frozen=True)
class BodycentricParams:
    """An orbiting body used as a coordinate origin."""

    orbit: Orbit
    orbit_center: OrbitReferenceCenter = OrbitReferenceCenter.HELIOCENTRIC

    @classmethod
    def heliocentric(cls, orbit: Orbit) -> "BodycentricParams":
        return cls(orbit, OrbitReferenceCenter.HELIOCENTRIC)

    @classmethod
    def geocentric(cls, orbit: Orbit) -> "BodycentricParams":
        return cls(orbit, OrbitReferenceCenter.GEOCENTRIC)

    @classmethod
    def barycentric(cls, orbit: Orbit) -> "BodycentricParams":
        return cls(orbit, OrbitReferenceCenter.BARYCENTRIC)
