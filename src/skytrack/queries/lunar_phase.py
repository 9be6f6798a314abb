"""Lunar phase geometry, principal phase events and illumination periods.

The phase is measured from the geocenter unless a site is given. The
waxing/waning sense comes from the Moon's ecliptic longitude relative to the
Sun: 0° is new moon, 90° first quarter, 180° full moon, 270° last quarter.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from skytrack.ephemeris.provider import EphemerisProvider, get_default_provider
from skytrack.models.coordinates import Geodetic
from skytrack.models.events import CrossingDirection, PhaseEvent, PhaseKind
from skytrack.models.time import MJD, Period
from skytrack.search import engine
from skytrack.search.options import SearchOptions
from skytrack.transforms.horizontal import topocentric_offset

# Elongation changes by about 12 degrees a day, so six-hour samples bracket
# every quarter without ambiguity.
PHASE_SEARCH_OPTIONS = SearchOptions(scan_step_days=0.25)

PHASE_LONGITUDES = {
    PhaseKind.NEW_MOON: 0.0,
    PhaseKind.FIRST_QUARTER: 90.0,
    PhaseKind.FULL_MOON: 180.0,
    PhaseKind.LAST_QUARTER: 270.0,
}


class MoonPhaseLabel(Enum):
    NEW_MOON = "New Moon"
    WAXING_CRESCENT = "Waxing Crescent"
    FIRST_QUARTER = "First Quarter"
    WAXING_GIBBOUS = "Waxing Gibbous"
    FULL_MOON = "Full Moon"
    WANING_GIBBOUS = "Waning Gibbous"
    LAST_QUARTER = "Last Quarter"
    WANING_CRESCENT = "Waning Crescent"


# Eight 45-degree sectors of Moon-minus-Sun longitude, starting at new moon.
_LABEL_SECTORS = (
    MoonPhaseLabel.NEW_MOON,
    MoonPhaseLabel.WAXING_CRESCENT,
    MoonPhaseLabel.FIRST_QUARTER,
    MoonPhaseLabel.WAXING_GIBBOUS,
    MoonPhaseLabel.FULL_MOON,
    MoonPhaseLabel.WANING_GIBBOUS,
    MoonPhaseLabel.LAST_QUARTER,
    MoonPhaseLabel.WANING_CRESCENT,
)


@dataclass(frozen=True)
class MoonPhaseGeometry:
    """
    Sun-Moon geometry at one instant.

    Attributes:
        phase_angle_rad: Sun-Moon-observer angle in [0, pi]
        illuminated_fraction: Lit fraction of the disc in [0, 1]
        elongation_rad: Angular Sun-Moon separation seen by the observer
        waxing: True between new moon and full moon
    """

    phase_angle_rad: float
    illuminated_fraction: float
    elongation_rad: float
    waxing: bool

    @property
    def phase_angle_deg(self) -> float:
        return math.degrees(self.phase_angle_rad)

    @property
    def phase_longitude_deg(self) -> float:
        """Equivalent Moon-minus-Sun longitude: 0 new, 180 full."""
        offset = 180.0 - self.phase_angle_deg
        return offset if self.waxing else (360.0 - offset) % 360.0


def _ecliptic_longitude(vector: np.ndarray) -> float:
    return math.degrees(math.atan2(vector[1], vector[0])) % 360.0


def _sun_and_moon(
    time: MJD, site: Optional[Geodetic], provider: Optional[EphemerisProvider]
) -> tuple[np.ndarray, np.ndarray]:
    provider = provider or get_default_provider()
    moon = provider.moon_geocentric(time)
    sun = -provider.earth_heliocentric(time)
    if site is not None:
        offset = topocentric_offset(site, time)
        moon = moon - offset
        sun = sun - offset
    return sun, moon


def _geometry(sun: np.ndarray, moon: np.ndarray) -> MoonPhaseGeometry:
    sun_distance = float(np.linalg.norm(sun))
    moon_distance = float(np.linalg.norm(moon))
    cos_elongation = float(np.dot(sun, moon)) / (sun_distance * moon_distance)
    elongation = math.acos(max(-1.0, min(1.0, cos_elongation)))

    phase_angle = math.atan2(
        sun_distance * math.sin(elongation),
        moon_distance - sun_distance * math.cos(elongation),
    )
    fraction = (1.0 + math.cos(phase_angle)) / 2.0
    waxing = (_ecliptic_longitude(moon) - _ecliptic_longitude(sun)) % 360.0 < 180.0
    return MoonPhaseGeometry(phase_angle, fraction, elongation, waxing)


def phase_geocentric(
    time: MJD, provider: Optional[EphemerisProvider] = None
) -> MoonPhaseGeometry:
    sun, moon = _sun_and_moon(time, None, provider)
    return _geometry(sun, moon)


def phase_topocentric(
    time: MJD, site: Geodetic, provider: Optional[EphemerisProvider] = None
) -> MoonPhaseGeometry:
    sun, moon = _sun_and_moon(time, site, provider)
    return _geometry(sun, moon)


def phase_label(geometry: MoonPhaseGeometry) -> MoonPhaseLabel:
    sector = int(((geometry.phase_longitude_deg + 22.5) % 360.0) // 45.0)
    return _LABEL_SECTORS[sector]


def is_waxing(label: MoonPhaseLabel) -> bool:
    return label in (
        MoonPhaseLabel.WAXING_CRESCENT,
        MoonPhaseLabel.FIRST_QUARTER,
        MoonPhaseLabel.WAXING_GIBBOUS,
    )


def is_waning(label: MoonPhaseLabel) -> bool:
    return label in (
        MoonPhaseLabel.WANING_GIBBOUS,
        MoonPhaseLabel.LAST_QUARTER,
        MoonPhaseLabel.WANING_CRESCENT,
    )


def illuminated_percent(geometry: MoonPhaseGeometry) -> float:
    return geometry.illuminated_fraction * 100.0


def moon_sun_longitude(time: MJD, provider: Optional[EphemerisProvider] = None) -> float:
    """Geocentric Moon-minus-Sun ecliptic longitude in [0, 360)."""
    sun, moon = _sun_and_moon(time, None, provider)
    return (_ecliptic_longitude(moon) - _ecliptic_longitude(sun)) % 360.0


def find_phase_events(
    window: Period,
    options: SearchOptions = PHASE_SEARCH_OPTIONS,
    provider: Optional[EphemerisProvider] = None,
) -> list[PhaseEvent]:
    """New moons, quarters and full moons inside ``window``, in time order."""

    def longitude(t: MJD) -> float:
        return moon_sun_longitude(t, provider)

    events = []
    for kind, bearing in PHASE_LONGITUDES.items():
        for crossing in engine.circular_crossings(longitude, bearing, window, options):
            # Elongation only increases; a decreasing pass is sampling noise.
            if crossing.direction is CrossingDirection.RISING:
                events.append(PhaseEvent(crossing.time, kind))
    return sorted(events, key=lambda event: event.time)


def _fraction_function(provider: Optional[EphemerisProvider]):
    return lambda t: phase_geocentric(t, provider).illuminated_fraction


def _check_fraction(value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"Illuminated fraction must be within [0, 1], got {value}")


def illumination_above(
    window: Period,
    k_min: float,
    options: SearchOptions = PHASE_SEARCH_OPTIONS,
    provider: Optional[EphemerisProvider] = None,
) -> list[Period]:
    """Periods when the geocentric illuminated fraction is at least ``k_min``."""
    _check_fraction(k_min)
    return engine.above_threshold(_fraction_function(provider), k_min, window, options)


def illumination_below(
    window: Period,
    k_max: float,
    options: SearchOptions = PHASE_SEARCH_OPTIONS,
    provider: Optional[EphemerisProvider] = None,
) -> list[Period]:
    _check_fraction(k_max)
    return engine.below_threshold(_fraction_function(provider), k_max, window, options)


def illumination_range(
    window: Period,
    k_min: float,
    k_max: float,
    options: SearchOptions = PHASE_SEARCH_OPTIONS,
    provider: Optional[EphemerisProvider] = None,
) -> list[Period]:
    _check_fraction(k_min)
    _check_fraction(k_max)
    return engine.range_periods(_fraction_function(provider), k_min, k_max, window, options)
