"""Fixed sky directions with optional linear proper motion."""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from skytrack.errors import DegenerateGeometryError, InvalidTransformError
from skytrack.models.coordinates import Direction, Geodetic
from skytrack.models.frames import Frame, has_frame_transform
from skytrack.models.time import J2000, MJD
from skytrack.transforms.horizontal import to_horizontal
from skytrack.transforms.rotation import rotate

from .base import Target

logger = logging.getLogger(__name__)

MAS_PER_DEGREE = 3.6e6
COS_DEC_EPSILON = 1e-12


class RaConvention(Enum):
    """How the right-ascension rate of a proper motion is stored."""

    # d(RA)/dt directly.
    MU_ALPHA = "mu_alpha"
    # d(RA)/dt * cos(dec), the usual catalog convention.
    MU_ALPHA_STAR = "mu_alpha_star"


@dataclass(frozen=True)
class ProperMotion:
    """Proper motion in milliarcseconds per Julian year."""

    ra_mas_per_year: float
    dec_mas_per_year: float
    convention: RaConvention = RaConvention.MU_ALPHA_STAR

    def ra_rate_deg_per_year(self, dec_deg: float) -> float:
        """
        Rate of change of right ascension itself.

        Args:
            dec_deg: Declination at the reference epoch

        Raises:
            DegenerateGeometryError: For MU_ALPHA_STAR rates at a celestial pole
        """
        rate = self.ra_mas_per_year / MAS_PER_DEGREE
        if self.convention is RaConvention.MU_ALPHA:
            return rate
        cos_dec = math.cos(math.radians(dec_deg))
        if abs(cos_dec) < COS_DEC_EPSILON:
            raise DegenerateGeometryError(
                f"Right ascension rate is undefined at declination {dec_deg}°"
            )
        return rate / cos_dec

    def dec_rate_deg_per_year(self) -> float:
        return self.dec_mas_per_year / MAS_PER_DEGREE


@dataclass(frozen=True)
class FixedDirection(Target):
    """
    A direction fixed on the sky, such as a star or a pointing.

    ``direction`` may be given in any frame with a rotation to ICRS; frames
    that depend on time are evaluated at ``epoch``. Proper motion, when
    present, is applied to ICRS right ascension and declination.
    """

    direction: Direction
    proper_motion: Optional[ProperMotion] = None
    epoch: MJD = field(default=J2000)
    label: str = "Fixed direction"

    def __post_init__(self):
        if not has_frame_transform(self.direction.frame, Frame.ICRS):
            raise InvalidTransformError(str(self.direction.frame), str(Frame.ICRS))

    @classmethod
    def from_icrs(
        cls,
        ra_deg: float,
        dec_deg: float,
        proper_motion: Optional[ProperMotion] = None,
        epoch: MJD = J2000,
        label: str = "Fixed direction",
    ) -> "FixedDirection":
        return cls(Direction.from_spherical(Frame.ICRS, ra_deg, dec_deg), proper_motion, epoch, label)

    @property
    def name(self) -> str:
        return self.label

    def reference_direction(self) -> Direction:
        """ICRS direction at the reference epoch."""
        return rotate(self.direction, Frame.ICRS, self.epoch)

    def icrs_direction(self, time: MJD) -> Direction:
        """ICRS direction at ``time``, with proper motion applied."""
        reference = self.reference_direction()
        if self.proper_motion is None:
            return reference

        years = time.julian_years_since(self.epoch)
        ra0 = reference.lon_deg
        dec0 = reference.lat_deg
        try:
            ra_rate = self.proper_motion.ra_rate_deg_per_year(dec0)
        except DegenerateGeometryError:
            logger.debug("%s is at a celestial pole, ignoring RA proper motion", self.name)
            ra_rate = 0.0
        dec_rate = self.proper_motion.dec_rate_deg_per_year()
        return Direction.from_spherical(
            Frame.ICRS, ra0 + ra_rate * years, dec0 + dec_rate * years
        )

    def horizontal(self, observer: Geodetic, time: MJD) -> Direction:
        return to_horizontal(self.icrs_direction(time), time, observer)
