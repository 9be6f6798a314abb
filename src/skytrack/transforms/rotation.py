"""Frame rotations routed through the ICRS hub.

Every registered frame has a 3x3 matrix taking ICRS components into that
frame at a given instant. A request ``F -> G`` is evaluated as
``R(G) @ R(F).T``, so the hub is never skipped and never needs special cases.
"""

import dataclasses
import math
from typing import Union

import numpy as np
from skyfield.framelib import ICRS_to_J2000, ecliptic_J2000_frame, galactic_frame

from skytrack.models.coordinates import Direction, Position
from skytrack.models.frames import HUB_FRAME, Frame, require_frame_transform
from skytrack.models.time import MJD

Rotatable = Union[Direction, Position]


def earth_rotation_matrix(gast_hours: float) -> np.ndarray:
    """Rotation about the celestial pole by the Greenwich apparent sidereal time."""
    theta = math.radians(gast_hours * 15.0)
    c = math.cos(theta)
    s = math.sin(theta)
    return np.array([[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]])


def icrs_to_frame_matrix(frame: Frame, time: MJD) -> np.ndarray:
    """Matrix taking ICRS components into ``frame`` at ``time``."""
    if frame in (Frame.ICRS, Frame.ICRF):
        return np.identity(3)
    if frame is Frame.EQUATORIAL_MEAN_J2000:
        return np.asarray(ICRS_to_J2000)

    t = time.skyfield_time()
    if frame is Frame.EQUATORIAL_MEAN_OF_DATE:
        # M = N @ P @ B; t.P caches over Time.precession_matrix, which t.M calls.
        return np.asarray(t.N).T @ np.asarray(t.M)
    if frame is Frame.EQUATORIAL_TRUE_OF_DATE:
        return np.asarray(t.M)
    if frame is Frame.ECLIPTIC_MEAN_J2000:
        return np.asarray(ecliptic_J2000_frame.rotation_at(t))
    if frame is Frame.GALACTIC:
        return np.asarray(galactic_frame.rotation_at(t))
    if frame is Frame.ECEF:
        return earth_rotation_matrix(float(t.gast)) @ np.asarray(t.M)

    raise ValueError(f"{frame} has no rotation to or from {HUB_FRAME}")


def rotation_matrix(source: Frame, target: Frame, time: MJD) -> np.ndarray:
    """Matrix taking ``source`` components into ``target`` at ``time``.

    Raises:
        InvalidTransformError: If no rotation is registered for the pair
    """
    require_frame_transform(source, target)
    if source is target:
        return np.identity(3)
    to_hub = icrs_to_frame_matrix(source, time).T
    return icrs_to_frame_matrix(target, time) @ to_hub


def rotate(value: Rotatable, target_frame: Frame, time: MJD) -> Rotatable:
    """Re-express a direction or position in ``target_frame``.

    The center of a position is unchanged. ``time`` is required even for
    time-independent pairs such as ICRS to Galactic.
    """
    require_frame_transform(value.frame, target_frame)
    if value.frame is target_frame:
        return value

    matrix = rotation_matrix(value.frame, target_frame, time)
    rotated = matrix @ value.vector
    if isinstance(value, Direction):
        return Direction.from_vector(target_frame, rotated)
    return dataclasses.replace(value, frame=target_frame, xyz=rotated)
