"""Ephemeris provider interface.

Providers supply the raw vectors the transform engine needs: the offsets
between the standard centers and the positions of solar-system bodies. All
center offsets are returned in AU on the EclipticMeanJ2000 frame.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from skytrack.errors import InvalidTransformError
from skytrack.models.bodies import Body
from skytrack.models.centers import CENTER_TRANSFORMS, CenterKind
from skytrack.models.coordinates import Position
from skytrack.models.time import MJD

SHIFT_KINDS = (CenterKind.BARYCENTRIC, CenterKind.HELIOCENTRIC, CenterKind.GEOCENTRIC)


class EphemerisProvider(ABC):
    """Source of Sun, Earth, Moon and planet positions."""

    @abstractmethod
    def sun_barycentric(self, time: MJD) -> np.ndarray:
        """Sun relative to the solar-system barycenter (AU, EclipticMeanJ2000)."""

    @abstractmethod
    def earth_heliocentric(self, time: MJD) -> np.ndarray:
        """Earth relative to the Sun (AU, EclipticMeanJ2000)."""

    @abstractmethod
    def moon_geocentric(self, time: MJD) -> np.ndarray:
        """Moon relative to the Earth (AU, EclipticMeanJ2000)."""

    @abstractmethod
    def body_position(self, body: Body, time: MJD) -> Position:
        """Position of ``body``; the provider chooses the center and frame."""

    def origin_barycentric(self, kind: CenterKind, time: MJD) -> np.ndarray:
        """Origin of a standard center, measured from the barycenter."""
        if kind is CenterKind.BARYCENTRIC:
            return np.zeros(3)
        sun = self.sun_barycentric(time)
        if kind is CenterKind.HELIOCENTRIC:
            return sun
        if kind is CenterKind.GEOCENTRIC:
            return sun + self.earth_heliocentric(time)
        raise InvalidTransformError(str(CenterKind.BARYCENTRIC), str(kind), kind="center")

    def center_shift_vector(
        self, from_kind: CenterKind, to_kind: CenterKind, time: MJD
    ) -> np.ndarray:
        """Position of the ``to_kind`` origin relative to the ``from_kind`` origin.

        Raises:
            InvalidTransformError: If the pair is not a standard center shift
        """
        if from_kind is to_kind:
            return np.zeros(3)
        if (
            from_kind not in SHIFT_KINDS
            or to_kind not in SHIFT_KINDS
            or (from_kind, to_kind) not in CENTER_TRANSFORMS
        ):
            raise InvalidTransformError(str(from_kind), str(to_kind), kind="center")
        return self.origin_barycentric(to_kind, time) - self.origin_barycentric(
            from_kind, time
        )


_default_provider: Optional[EphemerisProvider] = None


def get_default_provider() -> EphemerisProvider:
    """Process-wide analytic provider, built on first use."""
    global _default_provider
    if _default_provider is None:
        from .analytical import AnalyticalEphemeris

        _default_provider = AnalyticalEphemeris()
    return _default_provider


def set_default_provider(provider: Optional[EphemerisProvider]) -> None:
    """Replace the provider used when callers do not pass one explicitly."""
    global _default_provider
    _default_provider = provider
