"""Two-body Kepler propagation."""

import logging
import math
import warnings

import numpy as np
from scipy.optimize import brentq

from skytrack.errors import ConvergenceWarning
from skytrack.models.orbit import Orbit, OrbitReferenceCenter
from skytrack.models.time import MJD
from skytrack.search.options import DEFAULT_MAX_ITERATIONS

logger = logging.getLogger(__name__)

# Gaussian gravitational constant squared: GM of the Sun in au^3/day^2.
GM_SUN = 2.959122082855911e-4
SUN_EARTH_MASS_RATIO = 332946.0487
GM_EARTH = GM_SUN / SUN_EARTH_MASS_RATIO

KEPLER_TOLERANCE = 1e-14

GRAVITATIONAL_PARAMETERS = {
    OrbitReferenceCenter.HELIOCENTRIC: GM_SUN,
    OrbitReferenceCenter.BARYCENTRIC: GM_SUN,
    OrbitReferenceCenter.GEOCENTRIC: GM_EARTH,
}


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float,
    tolerance: float = KEPLER_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> float:
    """
    Solve Kepler's equation M = E - e*sin(E) for the eccentric anomaly E.

    Newton iteration is tried first. If it fails to converge (high
    eccentricity near perihelion) the root is refined with Brent's method on
    the bracket [M - e, M + e], which always contains it.

    Args:
        mean_anomaly: Mean anomaly in radians
        eccentricity: Orbital eccentricity, 0 <= e < 1
        tolerance: Convergence tolerance on E in radians
        max_iterations: Iteration limit for each stage

    Returns:
        Eccentric anomaly in radians, on the same revolution as mean_anomaly
    """
    if not 0.0 <= eccentricity < 1.0:
        raise ValueError(f"Eccentricity must satisfy 0 <= e < 1, got {eccentricity}")

    two_pi = 2.0 * math.pi
    turns = math.floor((mean_anomaly + math.pi) / two_pi)
    M = mean_anomaly - turns * two_pi
    e = eccentricity

    E = M if e < 0.8 else math.pi * math.copysign(1.0, M)
    for _ in range(max_iterations):
        f = E - e * math.sin(E) - M
        fp = 1.0 - e * math.cos(E)
        step = f / fp
        E -= step
        if abs(step) < tolerance:
            return E + turns * two_pi

    logger.debug("Newton iteration did not converge for M=%r e=%r, using Brent", M, e)

    def residual(x):
        return x - e * math.sin(x) - M

    E, result = brentq(
        residual,
        M - e,
        M + e,
        xtol=tolerance,
        maxiter=max_iterations,
        full_output=True,
        disp=False,
    )
    if not result.converged:
        logger.warning("Kepler solver stopped after %d iterations", result.iterations)
        warnings.warn(
            f"Kepler equation did not converge for M={M!r}, e={e!r}; "
            f"returning best estimate",
            ConvergenceWarning,
            stacklevel=2,
        )
    return E + turns * two_pi


def true_anomaly(eccentric_anomaly: float, eccentricity: float) -> float:
    e = eccentricity
    half = eccentric_anomaly / 2.0
    return 2.0 * math.atan2(
        math.sqrt(1.0 + e) * math.sin(half), math.sqrt(1.0 - e) * math.cos(half)
    )


def orbital_plane_to_ecliptic(orbit: Orbit) -> np.ndarray:
    """Matrix taking perifocal (x toward periapsis) components to EclipticMeanJ2000."""
    i = math.radians(orbit.inclination_deg)
    node = math.radians(orbit.lon_ascending_node_deg)
    w = math.radians(orbit.arg_perihelion_deg)

    cos_O, sin_O = math.cos(node), math.sin(node)
    cos_w, sin_w = math.cos(w), math.sin(w)
    cos_i, sin_i = math.cos(i), math.sin(i)

    return np.array(
        [
            [
                cos_O * cos_w - sin_O * sin_w * cos_i,
                -(cos_O * sin_w + sin_O * cos_w * cos_i),
                0.0,
            ],
            [
                sin_O * cos_w + cos_O * sin_w * cos_i,
                cos_O * cos_w * cos_i - sin_O * sin_w,
                0.0,
            ],
            [sin_w * sin_i, cos_w * sin_i, 0.0],
        ]
    )


def mean_motion(orbit: Orbit, gm: float = GM_SUN) -> float:
    """Mean motion in radians per day."""
    return math.sqrt(gm / orbit.semi_major_axis_au**3)


def propagate(
    orbit: Orbit,
    time: MJD,
    gm: float = GM_SUN,
    tolerance: float = KEPLER_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> np.ndarray:
    """
    Position of an orbiting body at ``time`` relative to its orbit center.

    Returns:
        Cartesian vector in AU on the EclipticMeanJ2000 frame
    """
    dt = time - orbit.epoch
    M = math.radians(orbit.mean_anomaly_deg) + mean_motion(orbit, gm) * dt
    e = orbit.eccentricity

    E = solve_kepler(M, e, tolerance=tolerance, max_iterations=max_iterations)
    nu = true_anomaly(E, e)
    r = orbit.semi_major_axis_au * (1.0 - e * math.cos(E))

    perifocal = np.array([r * math.cos(nu), r * math.sin(nu), 0.0])
    return orbital_plane_to_ecliptic(orbit) @ perifocal


def propagate_about(
    orbit: Orbit, center: OrbitReferenceCenter, time: MJD, **kwargs
) -> np.ndarray:
    """Propagate using the gravitational parameter of the orbit's center."""
    return propagate(orbit, time, gm=GRAVITATIONAL_PARAMETERS[center], **kwargs)
