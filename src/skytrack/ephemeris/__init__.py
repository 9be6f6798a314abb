from .provider import EphemerisProvider, get_default_provider, set_default_provider
from .kepler import GM_EARTH, GM_SUN, propagate, propagate_about, solve_kepler
from .analytical import AnalyticalEphemeris
from .skyfield_provider import SkyfieldEphemeris

__all__ = [
    "EphemerisProvider",
    "get_default_provider",
    "set_default_provider",
    "GM_EARTH",
    "GM_SUN",
    "propagate",
    "propagate_about",
    "solve_kepler",
    "AnalyticalEphemeris",
    "SkyfieldEphemeris",
]
