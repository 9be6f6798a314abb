"""Celestial to local horizon conversion.

Horizontal components are stored as (north, east, up) so that the generic
spherical accessors give azimuth measured from north through east and
altitude above the horizon.
"""

import dataclasses
from typing import Optional, Union

import numpy as np

from skytrack.errors import InvalidTransformError
from skytrack.models.centers import Center, CenterKind
from skytrack.models.coordinates import Direction, Geodetic, Position
from skytrack.models.frames import Frame, has_horizontal_transform
from skytrack.models.time import MJD

from .rotation import rotation_matrix

CANONICAL_FRAME = Frame.ECLIPTIC_MEAN_J2000


def enu_basis(site: Geodetic) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    East, north and up unit vectors of a site, in ECEF components.

    Uses geodetic latitude, so "up" is the ellipsoid normal rather than the
    geocentric radial direction.
    """
    lat_rad = np.radians(site.lat_deg)
    lon_rad = np.radians(site.lon_deg)

    east = np.array([-np.sin(lon_rad), np.cos(lon_rad), 0.0])
    north = np.array(
        [
            -np.sin(lat_rad) * np.cos(lon_rad),
            -np.sin(lat_rad) * np.sin(lon_rad),
            np.cos(lat_rad),
        ]
    )
    up = np.array(
        [
            np.cos(lat_rad) * np.cos(lon_rad),
            np.cos(lat_rad) * np.sin(lon_rad),
            np.sin(lat_rad),
        ]
    )
    return east, north, up


def ecef_to_horizontal_matrix(site: Geodetic) -> np.ndarray:
    east, north, up = enu_basis(site)
    return np.vstack([north, east, up])


def topocentric_offset(site: Geodetic, time: MJD) -> np.ndarray:
    """Observer position relative to the geocenter (AU, EclipticMeanJ2000)."""
    matrix = rotation_matrix(Frame.ECEF, CANONICAL_FRAME, time)
    return matrix @ site.ecef_vector_au()


def az_alt_to_vector(az_deg: float, alt_deg: float) -> np.ndarray:
    """
    Unit vector in horizontal (north, east, up) components.

    Args:
        az_deg: Azimuth in degrees (clockwise from north)
        alt_deg: Altitude in degrees above the horizon
    """
    alt_rad = np.radians(alt_deg)
    az_rad = np.radians(az_deg)
    return np.array(
        [
            np.cos(alt_rad) * np.cos(az_rad),
            np.cos(alt_rad) * np.sin(az_rad),
            np.sin(alt_rad),
        ]
    )


def to_horizontal(
    value: Union[Direction, Position],
    time: MJD,
    observer: Optional[Geodetic] = None,
) -> Union[Direction, Position]:
    """
    Convert a direction or position to the observer's horizon frame.

    Directions need ``observer``. Positions must be topocentric, or
    geocentric together with ``observer``, in which case they are first
    shifted to the observer (adding diurnal parallax).

    Raises:
        InvalidTransformError: If the value's frame or center cannot reach Horizontal
    """
    if not has_horizontal_transform(value.frame):
        raise InvalidTransformError(str(value.frame), str(Frame.HORIZONTAL))

    if isinstance(value, Direction):
        if observer is None:
            raise ValueError("An observer is required to convert a direction to Horizontal")
        if value.frame is Frame.HORIZONTAL:
            return value
        matrix = ecef_to_horizontal_matrix(observer) @ rotation_matrix(
            value.frame, Frame.ECEF, time
        )
        return Direction.from_vector(Frame.HORIZONTAL, matrix @ value.vector)

    position = _topocentric(value, time, observer)
    if position.frame is Frame.HORIZONTAL:
        return position

    site = position.center.site
    matrix = ecef_to_horizontal_matrix(site) @ rotation_matrix(
        position.frame, Frame.ECEF, time
    )
    return dataclasses.replace(position, frame=Frame.HORIZONTAL, xyz=matrix @ position.vector)


def _topocentric(position: Position, time: MJD, observer: Optional[Geodetic]) -> Position:
    kind = position.center.kind
    if kind is CenterKind.TOPOCENTRIC:
        if observer is not None and observer != position.center.site:
            raise ValueError("Position is topocentric to a different observer")
        return position
    if kind is CenterKind.GEOCENTRIC and observer is not None:
        from .shift import shift

        return shift(position, Center.topocentric(observer), time)
    raise InvalidTransformError(str(position.center), str(CenterKind.TOPOCENTRIC), kind="center")
