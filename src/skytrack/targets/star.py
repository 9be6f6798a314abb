from dataclasses import dataclass
from typing import Optional

from skytrack.errors import StarNotFoundError
from skytrack.models.coordinates import Direction, Geodetic
from skytrack.models.time import MJD

from .base import Target
from .direction import FixedDirection, ProperMotion


@dataclass(frozen=True)
class CatalogStar(Target):
    """A named star with J2000 ICRS position and catalog metadata."""

    star_name: str
    ra_deg: float
    dec_deg: float
    distance_ly: float
    magnitude: float
    pm_ra_mas_per_year: float = 0.0
    pm_dec_mas_per_year: float = 0.0

    @property
    def name(self) -> str:
        return self.star_name

    @property
    def proper_motion(self) -> Optional[ProperMotion]:
        if self.pm_ra_mas_per_year == 0.0 and self.pm_dec_mas_per_year == 0.0:
            return None
        return ProperMotion(self.pm_ra_mas_per_year, self.pm_dec_mas_per_year)

    def as_fixed_direction(self) -> FixedDirection:
        return FixedDirection.from_icrs(
            self.ra_deg, self.dec_deg, proper_motion=self.proper_motion, label=self.star_name
        )

    def horizontal(self, observer: Geodetic, time: MJD) -> Direction:
        return self.as_fixed_direction().horizontal(observer, time)


# Hipparcos (2007 reduction) positions and proper motions, epoch J2000.
STAR_CATALOG = {
    "sirius": CatalogStar("Sirius", 101.287155, -16.716116, 8.6, -1.46, -546.01, -1223.07),
    "canopus": CatalogStar("Canopus", 95.987958, -52.695661, 310.0, -0.74, 19.93, 23.24),
    "arcturus": CatalogStar("Arcturus", 213.915300, 19.182410, 36.7, -0.05, -1093.39, -1999.40),
    "vega": CatalogStar("Vega", 279.234735, 38.783689, 25.0, 0.03, 200.94, 286.23),
    "rigel": CatalogStar("Rigel", 78.634467, -8.201638, 860.0, 0.13, 1.31, 0.50),
    "procyon": CatalogStar("Procyon", 114.825498, 5.224988, 11.46, 0.34, -714.59, -1036.80),
    "betelgeuse": CatalogStar("Betelgeuse", 88.792939, 7.407064, 548.0, 0.50, 27.54, 11.30),
    "altair": CatalogStar("Altair", 297.695827, 8.868321, 16.7, 0.76, 536.23, 385.29),
    "aldebaran": CatalogStar("Aldebaran", 68.980163, 16.509302, 65.3, 0.86, 63.45, -188.94),
    "polaris": CatalogStar("Polaris", 37.954561, 89.264109, 433.0, 1.98, 44.48, -11.85),
}


def get_star(name: str) -> CatalogStar:
    """Look up a catalog star by name (case-insensitive).

    Raises:
        StarNotFoundError: If the star is not in STAR_CATALOG
    """
    key = name.strip().lower()
    if key not in STAR_CATALOG:
        raise StarNotFoundError(name, [star.star_name for star in STAR_CATALOG.values()])
    return STAR_CATALOG[key]
