"""Sampling, bracketing and refinement of scalar functions of time.

Every search takes ``f(time: MJD) -> float`` and a window, samples ``f`` on
an even grid (see ``SearchOptions``), brackets sign changes of ``f`` or of
its first difference, and refines each bracket. Roots that fall closer
together than one sample interval are not detected.
"""

import logging
import warnings
from typing import Callable

import numpy as np
from scipy.optimize import minimize_scalar

from skytrack.errors import ConvergenceWarning
from skytrack.models.events import (
    AzimuthCrossingEvent,
    AzimuthExtremum,
    AzimuthExtremumKind,
    CrossingDirection,
    CrossingEvent,
    CulminationEvent,
    CulminationKind,
)
from skytrack.models.time import MJD, Period

from .brent import find_root
from .options import DEFAULT_OPTIONS, SearchOptions

logger = logging.getLogger(__name__)

TimeFunction = Callable[[MJD], float]


def wrap_degrees(angle):
    """Reduce an angle (or array of angles) to [-180, 180)."""
    return ((angle + 180.0) % 360.0) - 180.0


def sample(
    f: TimeFunction, window: Period, options: SearchOptions = DEFAULT_OPTIONS
) -> tuple[np.ndarray, np.ndarray]:
    """Evaluate ``f`` on the sampling grid; returns (MJD floats, values)."""
    times = options.sample_times(window)
    values = np.array([float(f(MJD(t))) for t in times])
    return times, values


def _as_float_function(f: TimeFunction) -> Callable[[float], float]:
    def g(x: float) -> float:
        return float(f(MJD(x)))

    return g


def _sign_changes(values: np.ndarray):
    """Changes of strict sign in ``values``, as (a, b, rising) index triples.

    When ``a != b`` the root lies strictly between samples ``a`` and ``b``.
    When ``a == b`` the sample itself is the root: the first zero of a run
    whose neighbours have opposite signs, or a zero at a window end that the
    function leaves (or reaches) with a definite sign. A zero with the same
    sign on both sides is a touch and yields nothing.
    """
    signs = np.sign(values)
    nonzero = np.flatnonzero(signs)
    if len(nonzero) == 0:
        return
    last = len(values) - 1

    if nonzero[0] > 0:
        yield 0, 0, bool(signs[nonzero[0]] > 0)
    for k, j in zip(nonzero[:-1], nonzero[1:]):
        if signs[k] == signs[j]:
            continue
        rising = bool(signs[k] < 0)
        if j == k + 1:
            yield k, j, rising
        else:
            yield k + 1, k + 1, rising
    if nonzero[-1] < last:
        yield last, last, bool(signs[nonzero[-1]] < 0)


def _direction(rising: bool) -> CrossingDirection:
    return CrossingDirection.RISING if rising else CrossingDirection.SETTING


def find_crossings(
    f: TimeFunction,
    window: Period,
    options: SearchOptions = DEFAULT_OPTIONS,
    threshold: float = 0.0,
) -> list[CrossingEvent]:
    """
    Times at which ``f`` crosses ``threshold``.

    Going from below to above is RISING; the reverse is SETTING. Each event
    carries ``f`` at the refined root. A root exactly on the window start is
    reported when ``f`` then moves away from the threshold.
    """

    def offset(t: MJD) -> float:
        return float(f(t)) - threshold

    times, values = sample(offset, window, options)
    g = _as_float_function(offset)

    events = []
    for a, b, rising in _sign_changes(values):
        if a == b:
            root = float(times[a])
            value = threshold + float(values[a])
        else:
            root = find_root(g, times[a], times[b], options)
            value = float(f(MJD(root)))
        events.append(CrossingEvent(MJD(root), _direction(rising), value))

    logger.debug(
        "Found %d crossings in [%.6f, %.6f] from %d samples",
        len(events),
        window.start.value,
        window.end.value,
        len(times),
    )
    return events


def _refine_extremum(
    g: Callable[[float], float],
    a: float,
    b: float,
    maximum: bool,
    options: SearchOptions,
) -> float:
    def objective(x):
        value = g(x)
        return -value if maximum else value

    result = minimize_scalar(
        objective,
        bounds=(a, b),
        method="bounded",
        options={"xatol": options.time_tolerance_days, "maxiter": options.max_iterations},
    )
    if not result.success:
        logger.warning("Extremum refinement in [%r, %r] did not converge", a, b)
        warnings.warn(
            f"Extremum refinement did not converge in [{a!r}, {b!r}]; "
            f"returning best estimate",
            ConvergenceWarning,
            stacklevel=3,
        )
    return float(result.x)


def _extremum_brackets(values: np.ndarray):
    """Indices k where the first difference changes sign around sample k.

    Yields (k, is_maximum), classified by the second difference.
    """
    diffs = np.diff(values)
    for k in range(1, len(values) - 1):
        before = diffs[k - 1]
        after = diffs[k]
        if (before > 0.0 and after <= 0.0) or (before < 0.0 and after >= 0.0):
            second = values[k + 1] - 2.0 * values[k] + values[k - 1]
            if second == 0.0:
                continue
            yield k, second < 0.0


def find_extrema(
    f: TimeFunction, window: Period, options: SearchOptions = DEFAULT_OPTIONS
) -> list[CulminationEvent]:
    """Local maxima and minima of ``f`` strictly inside the window."""
    times, values = sample(f, window, options)
    g = _as_float_function(f)

    events = []
    for k, is_maximum in _extremum_brackets(values):
        t = _refine_extremum(g, times[k - 1], times[k + 1], is_maximum, options)
        kind = CulminationKind.MAX if is_maximum else CulminationKind.MIN
        events.append(CulminationEvent(MJD(t), g(t), kind))
    return events


def find_periods(
    f: TimeFunction, window: Period, options: SearchOptions = DEFAULT_OPTIONS
) -> list[Period]:
    """
    Maximal sub-intervals of ``window`` on which ``f >= 0``.

    Periods are bounded by crossings, or truncated by the window ends when
    ``f`` is already non-negative there.
    """
    crossings = find_crossings(f, window, options)
    boundaries = [window.start.value]
    boundaries += [event.time.value for event in crossings]
    boundaries.append(window.end.value)

    periods: list[Period] = []
    for a, b in zip(boundaries[:-1], boundaries[1:]):
        if b <= a:
            continue
        if f(MJD((a + b) / 2.0)) < 0.0:
            continue
        if periods and periods[-1].end.value == a:
            periods[-1] = Period(periods[-1].start, MJD(b))
        else:
            periods.append(Period(MJD(a), MJD(b)))
    return periods


def above_threshold(
    f: TimeFunction,
    threshold: float,
    window: Period,
    options: SearchOptions = DEFAULT_OPTIONS,
) -> list[Period]:
    return find_periods(lambda t: f(t) - threshold, window, options)


def below_threshold(
    f: TimeFunction,
    threshold: float,
    window: Period,
    options: SearchOptions = DEFAULT_OPTIONS,
) -> list[Period]:
    return find_periods(lambda t: threshold - f(t), window, options)


def range_periods(
    f: TimeFunction,
    lower: float,
    upper: float,
    window: Period,
    options: SearchOptions = DEFAULT_OPTIONS,
) -> list[Period]:
    """Periods on which ``lower <= f <= upper``."""
    if upper < lower:
        raise ValueError(f"Empty range: lower={lower} is above upper={upper}")

    def inside(t: MJD) -> float:
        value = f(t)
        return min(value - lower, upper - value)

    return find_periods(inside, window, options)


def circular_crossings(
    f: TimeFunction,
    bearing_deg: float,
    window: Period,
    options: SearchOptions = DEFAULT_OPTIONS,
) -> list[AzimuthCrossingEvent]:
    """
    Times at which an angle in degrees passes ``bearing_deg``.

    The difference is wrapped to [-180, 180) so a pass through north is a
    single crossing. The jump where the wrapped difference goes through
    +-180 (the opposite bearing) is not a crossing and is skipped. Each
    event carries the angle at the root, reduced to [0, 360).
    """

    def difference(t: MJD) -> float:
        return float(wrap_degrees(f(t) - bearing_deg))

    times, values = sample(difference, window, options)
    g = _as_float_function(difference)

    events = []
    for a, b, rising in _sign_changes(values):
        if a == b:
            root = float(times[a])
        elif abs(values[b] - values[a]) > 180.0:
            continue
        else:
            root = find_root(g, times[a], times[b], options)
        value = float(f(MJD(root))) % 360.0
        events.append(AzimuthCrossingEvent(MJD(root), _direction(rising), value))
    return events


def circular_extrema(
    f: TimeFunction, window: Period, options: SearchOptions = DEFAULT_OPTIONS
) -> list[AzimuthExtremum]:
    """Local extrema of an angle in degrees, found on the unwrapped series."""
    times, values = sample(f, window, options)
    unwrapped = np.degrees(np.unwrap(np.radians(values)))

    events = []
    for k, is_maximum in _extremum_brackets(unwrapped):
        reference = unwrapped[k]

        def continuous(x: float, reference=reference) -> float:
            return reference + float(wrap_degrees(f(MJD(x)) - reference))

        t = _refine_extremum(continuous, times[k - 1], times[k + 1], is_maximum, options)
        kind = AzimuthExtremumKind.MAX if is_maximum else AzimuthExtremumKind.MIN
        events.append(AzimuthExtremum(MJD(t), continuous(t) % 360.0, kind))
    return events


def circular_range_periods(
    f: TimeFunction,
    lower_deg: float,
    upper_deg: float,
    window: Period,
    options: SearchOptions = DEFAULT_OPTIONS,
) -> list[Period]:
    """
    Periods on which an angle lies on the arc from ``lower_deg`` clockwise
    to ``upper_deg``. The arc may contain north (e.g. 350 to 10).
    """
    width = (upper_deg - lower_deg) % 360.0
    if width == 0.0:
        return [window]
    half_width = width / 2.0
    center = lower_deg + half_width

    def inside(t: MJD) -> float:
        return half_width - abs(float(wrap_degrees(f(t) - center)))

    return find_periods(inside, window, options)
