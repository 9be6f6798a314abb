"""Celestial tracking: coordinate transforms and time-domain event search."""

__version__ = "0.1.0"

from .errors import (
    ConvergenceWarning,
    DegenerateGeometryError,
    InvalidTransformError,
    RootNotBracketedError,
    SkytrackError,
    UnsupportedQueryError,
)
from .models import MJD, Period, Frame, Center, Direction, Position, Geodetic, Body
from .search import SearchOptions
from .targets import BodyTarget, CatalogStar, FixedDirection, Target, get_star
from .observatories import OBSERVATORIES, get_observatory

__all__ = [
    "__version__",
    "ConvergenceWarning",
    "DegenerateGeometryError",
    "InvalidTransformError",
    "RootNotBracketedError",
    "SkytrackError",
    "UnsupportedQueryError",
    "MJD",
    "Period",
    "Frame",
    "Center",
    "Direction",
    "Position",
    "Geodetic",
    "Body",
    "SearchOptions",
    "BodyTarget",
    "CatalogStar",
    "FixedDirection",
    "Target",
    "get_star",
    "OBSERVATORIES",
    "get_observatory",
]
