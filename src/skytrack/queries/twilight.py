"""Sunrise, sunset, twilight and night-quality queries."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from skytrack.ephemeris.provider import EphemerisProvider
from skytrack.models.bodies import Body
from skytrack.models.coordinates import Geodetic
from skytrack.models.events import CrossingEvent
from skytrack.models.time import MJD, Period, intersect_periods
from skytrack.search.options import DEFAULT_OPTIONS, SearchOptions
from skytrack.targets.body import BodyTarget

# Share of the score removed when the Moon is up for the whole day.
MOON_INTERFERENCE_WEIGHT = 0.7


class Twilight(Enum):
    """Sun altitude thresholds in degrees."""

    # Upper limb on the horizon, including standard refraction.
    HORIZON = -0.833
    CIVIL = -6.0
    NAUTICAL = -12.0
    ASTRONOMICAL = -18.0

    @property
    def degrees(self) -> float:
        return self.value


def night_periods(
    site: Geodetic,
    window: Period,
    twilight: Twilight = Twilight.ASTRONOMICAL,
    options: SearchOptions = DEFAULT_OPTIONS,
    provider: Optional[EphemerisProvider] = None,
) -> list[Period]:
    """Periods with the Sun below the twilight threshold."""
    sun = BodyTarget(Body.SUN, provider)
    return sun.below_threshold(site, window, twilight.degrees, options)


def sunrise_sunset(
    site: Geodetic,
    window: Period,
    options: SearchOptions = DEFAULT_OPTIONS,
    provider: Optional[EphemerisProvider] = None,
) -> list[CrossingEvent]:
    """Sunrises (RISING) and sunsets (SETTING) in time order."""
    sun = BodyTarget(Body.SUN, provider)
    return sun.crossings(site, window, Twilight.HORIZON.degrees, options)


def moon_up_periods(
    site: Geodetic,
    window: Period,
    options: SearchOptions = DEFAULT_OPTIONS,
    provider: Optional[EphemerisProvider] = None,
) -> list[Period]:
    moon = BodyTarget(Body.MOON, provider)
    return moon.above_threshold(site, window, 0.0, options)


def dark_periods(
    site: Geodetic,
    window: Period,
    options: SearchOptions = DEFAULT_OPTIONS,
    provider: Optional[EphemerisProvider] = None,
) -> list[Period]:
    """Astronomical night with the Moon below the horizon."""
    night = night_periods(site, window, Twilight.ASTRONOMICAL, options, provider)
    moon = BodyTarget(Body.MOON, provider)
    moon_down = moon.below_threshold(site, window, 0.0, options)
    return intersect_periods(night, moon_down)


@dataclass(frozen=True)
class NightScore:
    start: MJD
    dark_hours: float
    moon_up_hours: float
    score: float


def score_night(
    site: Geodetic,
    start: MJD,
    options: SearchOptions = DEFAULT_OPTIONS,
    provider: Optional[EphemerisProvider] = None,
) -> NightScore:
    """
    Rate the 24 hours from ``start`` for deep-sky observing.

    score = dark_hours * (1 - 0.7 * min(moon_up_hours / 24, 1))
    """
    window = Period(start, start + 1.0)
    dark_hours = sum(
        p.duration("hours")
        for p in night_periods(site, window, Twilight.ASTRONOMICAL, options, provider)
    )
    moon_hours = sum(
        p.duration("hours") for p in moon_up_periods(site, window, options, provider)
    )
    interference = min(moon_hours / 24.0, 1.0)
    score = dark_hours * (1.0 - MOON_INTERFERENCE_WEIGHT * interference)
    return NightScore(start, dark_hours, moon_hours, score)
