"""Center shifts and the combined rotate-shift-rotate transform.

Shift vectors are always applied in EclipticMeanJ2000 and AU, whatever frame
and unit the caller works in. Positions in other frames are rotated in,
shifted, and rotated back.
"""

import logging
from typing import Optional

import numpy as np

from skytrack.ephemeris.provider import EphemerisProvider, get_default_provider
from skytrack.errors import InvalidTransformError
from skytrack.models.centers import Center, CenterKind, require_center_transform
from skytrack.models.coordinates import LengthUnit, Position, convert_length, is_valid_combination
from skytrack.models.frames import Frame, require_frame_transform
from skytrack.models.time import MJD

from .horizontal import CANONICAL_FRAME, topocentric_offset
from .rotation import rotate

logger = logging.getLogger(__name__)


def center_offset(
    source: Center,
    target: Center,
    time: MJD,
    provider: Optional[EphemerisProvider] = None,
) -> np.ndarray:
    """Origin of ``target`` relative to the origin of ``source`` (AU, EclipticMeanJ2000)."""
    require_center_transform(source, target)
    if source == target:
        return np.zeros(3)
    if source.kind is CenterKind.GEOCENTRIC and target.kind is CenterKind.TOPOCENTRIC:
        return topocentric_offset(target.site, time)
    if source.kind is CenterKind.TOPOCENTRIC and target.kind is CenterKind.GEOCENTRIC:
        return -topocentric_offset(source.site, time)
    provider = provider or get_default_provider()
    return provider.center_shift_vector(source.kind, target.kind, time)


def _require_frame_for_center(center: Center, frame: Frame) -> None:
    if not is_valid_combination(center, frame):
        raise InvalidTransformError(str(center), str(frame), kind="center/frame")


def _shift_canonical(
    position: Position,
    target_center: Center,
    time: MJD,
    provider: Optional[EphemerisProvider],
) -> Position:
    offset = center_offset(position.center, target_center, time, provider)
    vector_au = position.vector_au - offset
    return Position(
        target_center,
        CANONICAL_FRAME,
        convert_length(vector_au, LengthUnit.AU, position.unit),
        position.unit,
    )


def shift(
    position: Position,
    target_center: Center,
    time: MJD,
    provider: Optional[EphemerisProvider] = None,
) -> Position:
    """
    Re-express a position relative to another center, keeping its frame.

    Raises:
        InvalidTransformError: If the center pair is not registered, or the
            position's frame is not valid for the target center
    """
    require_center_transform(position.center, target_center)
    if position.center == target_center:
        return position
    _require_frame_for_center(target_center, position.frame)

    canonical = rotate(position, CANONICAL_FRAME, time)
    shifted = _shift_canonical(canonical, target_center, time, provider)
    logger.debug("Shifted %s -> %s at MJD %.6f", position.center, target_center, time.value)
    return rotate(shifted, position.frame, time)


def transform(
    position: Position,
    target_center: Center,
    target_frame: Frame,
    time: MJD,
    provider: Optional[EphemerisProvider] = None,
) -> Position:
    """
    Change both center and frame.

    The order is fixed: rotate into EclipticMeanJ2000, shift, rotate into
    ``target_frame``. Both the center pair and the frame pair are validated
    before any numeric work.
    """
    require_center_transform(position.center, target_center)
    require_frame_transform(position.frame, target_frame)
    _require_frame_for_center(target_center, target_frame)

    canonical = rotate(position, CANONICAL_FRAME, time)
    if position.center != target_center:
        canonical = _shift_canonical(canonical, target_center, time, provider)
    return rotate(canonical, target_frame, time)
