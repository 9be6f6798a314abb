"""Positions relative to an orbiting body described by Keplerian elements."""

from typing import Optional

from skytrack.ephemeris.kepler import propagate_about
from skytrack.ephemeris.provider import EphemerisProvider
from skytrack.errors import InvalidTransformError
from skytrack.models.centers import (
    GEOCENTRIC,
    ORBIT_CENTERS,
    Center,
    CenterKind,
    has_center_transform,
)
from skytrack.models.coordinates import (
    BodycentricPosition,
    LengthUnit,
    Position,
    convert_length,
    is_valid_combination,
)
from skytrack.models.frames import Frame
from skytrack.models.orbit import BodycentricParams
from skytrack.models.time import MJD
from skytrack.search.options import DEFAULT_OPTIONS, SearchOptions

from .shift import transform


def orbit_position(
    params: BodycentricParams, time: MJD, options: SearchOptions = DEFAULT_OPTIONS
) -> Position:
    """The orbiting body's position relative to its orbit's reference center.

    ``options.max_iterations`` bounds the Kepler solver.
    """
    vector = propagate_about(
        params.orbit, params.orbit_center, time, max_iterations=options.max_iterations
    )
    return Position(ORBIT_CENTERS[params.orbit_center], Frame.ECLIPTIC_MEAN_J2000, vector)


def _express(
    position: Position,
    center: Center,
    frame: Frame,
    time: MJD,
    provider: Optional[EphemerisProvider],
) -> Position:
    # Topocentric is only linked to the geocenter, so other standard centers
    # are routed through it.
    if not has_center_transform(position.center, center) and has_center_transform(
        GEOCENTRIC, center
    ):
        position = transform(position, GEOCENTRIC, Frame.ECLIPTIC_MEAN_J2000, time, provider)
    return transform(position, center, frame, time, provider)


def _check_standard(center: Center) -> None:
    if center.kind is CenterKind.BODYCENTRIC:
        raise InvalidTransformError(str(center), str(CenterKind.BODYCENTRIC), kind="center")


def to_bodycentric(
    position: Position,
    params: BodycentricParams,
    time: MJD,
    provider: Optional[EphemerisProvider] = None,
    options: SearchOptions = DEFAULT_OPTIONS,
) -> BodycentricPosition:
    """
    Re-express a position relative to an orbiting body.

    The body's orbit is propagated to ``time``, moved into the input's center
    and frame, and subtracted from the input.

    Raises:
        InvalidTransformError: If the input is already bodycentric or its frame
            is tied to the Earth or an observer
    """
    _check_standard(position.center)
    center = Center.bodycentric(params)
    if not is_valid_combination(center, position.frame) or position.frame.is_local:
        raise InvalidTransformError(str(center), str(position.frame), kind="center/frame")

    body = _express(
        orbit_position(params, time, options), position.center, position.frame, time, provider
    )
    vector_au = position.vector_au - body.vector_au
    return BodycentricPosition(
        center,
        position.frame,
        convert_length(vector_au, LengthUnit.AU, position.unit),
        position.unit,
        source_center=position.center,
    )


def to_standard_center(
    position: BodycentricPosition,
    time: MJD,
    center: Optional[Center] = None,
    provider: Optional[EphemerisProvider] = None,
    options: SearchOptions = DEFAULT_OPTIONS,
) -> Position:
    """
    Inverse of ``to_bodycentric``.

    Restores the center the position was derived from, or ``center`` when
    given explicitly.
    """
    target = center or position.source_center
    _check_standard(target)

    body = _express(
        orbit_position(position.params, time, options), target, position.frame, time, provider
    )
    vector_au = position.vector_au + body.vector_au
    return Position(
        target,
        position.frame,
        convert_length(vector_au, LengthUnit.AU, position.unit),
        position.unit,
    )
