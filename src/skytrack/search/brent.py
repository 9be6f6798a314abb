"""Bracketed root refinement."""

import logging
import warnings
from typing import Callable

from scipy.optimize import brentq

from skytrack.errors import ConvergenceWarning, RootNotBracketedError

from .options import DEFAULT_OPTIONS, SearchOptions

logger = logging.getLogger(__name__)


def find_root(
    f: Callable[[float], float],
    a: float,
    b: float,
    options: SearchOptions = DEFAULT_OPTIONS,
) -> float:
    """
    Refine a root of ``f`` inside ``[a, b]`` with Brent's method.

    Args:
        f: Scalar function of a float argument
        a, b: Interval endpoints; ``f`` must change sign between them
        options: Tolerance and iteration limit

    Returns:
        The root. If the iteration limit is reached the best estimate is
        returned and a ConvergenceWarning is issued.

    Raises:
        RootNotBracketedError: If f(a) and f(b) have the same sign
    """
    fa = f(a)
    fb = f(b)
    if fa == 0.0:
        return a
    if fb == 0.0:
        return b
    if (fa > 0.0) == (fb > 0.0):
        raise RootNotBracketedError(a, b, fa, fb)

    root, result = brentq(
        f,
        a,
        b,
        xtol=options.time_tolerance_days,
        maxiter=options.max_iterations,
        full_output=True,
        disp=False,
    )
    if not result.converged:
        logger.warning(
            "Root refinement in [%r, %r] stopped after %d iterations",
            a,
            b,
            result.iterations,
        )
        warnings.warn(
            f"Brent's method did not converge in [{a!r}, {b!r}]; returning best estimate",
            ConvergenceWarning,
            stacklevel=2,
        )
    return float(root)
