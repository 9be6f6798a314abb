from .base import Target
from .direction import FixedDirection, ProperMotion, RaConvention
from .star import STAR_CATALOG, CatalogStar, get_star
from .body import BodyTarget

__all__ = [
    "Target",
    "FixedDirection",
    "ProperMotion",
    "RaConvention",
    "STAR_CATALOG",
    "CatalogStar",
    "get_star",
    "BodyTarget",
]
