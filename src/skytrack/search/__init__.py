from .options import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_SCAN_STEP_DAYS,
    DEFAULT_TIME_TOLERANCE_DAYS,
    SearchOptions,
)
from .brent import find_root
from .engine import (
    above_threshold,
    below_threshold,
    circular_crossings,
    circular_extrema,
    circular_range_periods,
    find_crossings,
    find_extrema,
    find_periods,
    range_periods,
    sample,
    wrap_degrees,
)

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_SCAN_STEP_DAYS",
    "DEFAULT_TIME_TOLERANCE_DAYS",
    "SearchOptions",
    "find_root",
    "above_threshold",
    "below_threshold",
    "circular_crossings",
    "circular_extrema",
    "circular_range_periods",
    "find_crossings",
    "find_extrema",
    "find_periods",
    "range_periods",
    "sample",
    "wrap_degrees",
]
