from .twilight import (
    NightScore,
    Twilight,
    dark_periods,
    moon_up_periods,
    night_periods,
    score_night,
    sunrise_sunset,
)
from .lunar_phase import (
    MoonPhaseGeometry,
    MoonPhaseLabel,
    find_phase_events,
    illuminated_percent,
    illumination_above,
    illumination_below,
    illumination_range,
    is_waning,
    is_waxing,
    phase_geocentric,
    phase_label,
    phase_topocentric,
)

__all__ = [
    "NightScore",
    "Twilight",
    "dark_periods",
    "moon_up_periods",
    "night_periods",
    "score_night",
    "sunrise_sunset",
    "MoonPhaseGeometry",
    "MoonPhaseLabel",
    "find_phase_events",
    "illuminated_percent",
    "illumination_above",
    "illumination_below",
    "illumination_range",
    "is_waning",
    "is_waxing",
    "phase_geocentric",
    "phase_label",
    "phase_topocentric",
]
