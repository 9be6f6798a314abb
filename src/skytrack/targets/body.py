"""Solar-system bodies as targets."""

from typing import Optional, Union

from skyfield.units import Distance

from skytrack.ephemeris.provider import EphemerisProvider, get_default_provider
from skytrack.models.bodies import Body, get_body
from skytrack.models.centers import GEOCENTRIC, Center
from skytrack.models.coordinates import Direction, Geodetic, Position
from skytrack.models.frames import Frame
from skytrack.models.time import MJD
from skytrack.transforms.horizontal import to_horizontal
from skytrack.transforms.shift import shift, transform

from .base import Target


class BodyTarget(Target):
    """
    The Sun, the Moon or a planet, positioned by an ephemeris provider.

    Positions are taken to the geocenter and then to the observer, so
    altitude includes diurnal parallax (about 1 degree for the Moon).
    """

    supports_range_queries = True

    def __init__(
        self,
        body: Union[Body, str],
        provider: Optional[EphemerisProvider] = None,
    ):
        self.body = get_body(body)
        self._provider = provider

    @property
    def provider(self) -> EphemerisProvider:
        return self._provider or get_default_provider()

    @property
    def name(self) -> str:
        return self.body.display_name

    def __repr__(self) -> str:
        return f"BodyTarget({self.body.value!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, BodyTarget):
            return NotImplemented
        return self.body is other.body and self._provider is other._provider

    def __hash__(self) -> int:
        return hash((self.body, id(self._provider)))

    def geocentric_position(
        self, time: MJD, frame: Frame = Frame.ECLIPTIC_MEAN_J2000
    ) -> Position:
        provider = self.provider
        position = provider.body_position(self.body, time)
        return transform(position, GEOCENTRIC, frame, time, provider)

    def topocentric_position(
        self, observer: Geodetic, time: MJD, frame: Frame = Frame.ECLIPTIC_MEAN_J2000
    ) -> Position:
        geocentric = self.geocentric_position(time, frame)
        return shift(geocentric, Center.topocentric(observer), time, self.provider)

    def distance(self, time: MJD, observer: Optional[Geodetic] = None) -> Distance:
        """Geocentric distance, or topocentric when ``observer`` is given."""
        if observer is None:
            return self.geocentric_position(time).distance
        return self.topocentric_position(observer, time).distance

    def horizontal(self, observer: Geodetic, time: MJD) -> Direction:
        position = to_horizontal(self.topocentric_position(observer, time), time)
        return position.direction
