"""Common interface for anything that can be tracked across the sky."""

from abc import ABC, abstractmethod

from skyfield.units import Angle

from skytrack.errors import UnsupportedQueryError
from skytrack.models.coordinates import Direction, Geodetic
from skytrack.models.events import (
    AzimuthCrossingEvent,
    AzimuthExtremum,
    CrossingEvent,
    CulminationEvent,
)
from skytrack.models.time import MJD, Period
from skytrack.search import engine
from skytrack.search.options import DEFAULT_OPTIONS, SearchOptions


class Target(ABC):
    """
    A trackable sky object.

    Subclasses implement ``horizontal``; altitude, azimuth and every search
    are derived from it. Range and azimuth-extremum queries are only
    answered by targets that set ``supports_range_queries``.
    """

    supports_range_queries = False

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def horizontal(self, observer: Geodetic, time: MJD) -> Direction:
        """Direction of the target in the observer's horizon frame."""

    def altitude(self, observer: Geodetic, time: MJD) -> Angle:
        return self.horizontal(observer, time).altitude

    def azimuth(self, observer: Geodetic, time: MJD) -> Angle:
        return self.horizontal(observer, time).azimuth

    def altitude_deg(self, observer: Geodetic, time: MJD) -> float:
        return self.horizontal(observer, time).lat_deg

    def azimuth_deg(self, observer: Geodetic, time: MJD) -> float:
        return self.horizontal(observer, time).lon_deg

    def _altitude_function(self, observer: Geodetic):
        return lambda t: self.altitude_deg(observer, t)

    def _azimuth_function(self, observer: Geodetic):
        return lambda t: self.azimuth_deg(observer, t)

    def _require_range_queries(self, query: str) -> None:
        if not self.supports_range_queries:
            raise UnsupportedQueryError(query, self.name)

    def above_threshold(
        self,
        observer: Geodetic,
        window: Period,
        threshold_deg: float = 0.0,
        options: SearchOptions = DEFAULT_OPTIONS,
    ) -> list[Period]:
        """Periods with altitude at or above ``threshold_deg``."""
        return engine.above_threshold(
            self._altitude_function(observer), threshold_deg, window, options
        )

    def below_threshold(
        self,
        observer: Geodetic,
        window: Period,
        threshold_deg: float = 0.0,
        options: SearchOptions = DEFAULT_OPTIONS,
    ) -> list[Period]:
        """Periods with altitude at or below ``threshold_deg``."""
        return engine.below_threshold(
            self._altitude_function(observer), threshold_deg, window, options
        )

    def crossings(
        self,
        observer: Geodetic,
        window: Period,
        threshold_deg: float = 0.0,
        options: SearchOptions = DEFAULT_OPTIONS,
    ) -> list[CrossingEvent]:
        """Rising and setting through ``threshold_deg`` altitude."""
        altitude = self._altitude_function(observer)
        return engine.find_crossings(altitude, window, options, threshold=threshold_deg)

    def culminations(
        self,
        observer: Geodetic,
        window: Period,
        options: SearchOptions = DEFAULT_OPTIONS,
    ) -> list[CulminationEvent]:
        """Upper and lower transits (altitude maxima and minima)."""
        return engine.find_extrema(self._altitude_function(observer), window, options)

    def azimuth_crossings(
        self,
        observer: Geodetic,
        window: Period,
        bearing_deg: float,
        options: SearchOptions = DEFAULT_OPTIONS,
    ) -> list[AzimuthCrossingEvent]:
        return engine.circular_crossings(
            self._azimuth_function(observer), bearing_deg, window, options
        )

    def azimuth_extrema(
        self,
        observer: Geodetic,
        window: Period,
        options: SearchOptions = DEFAULT_OPTIONS,
    ) -> list[AzimuthExtremum]:
        self._require_range_queries("azimuth_extrema")
        return engine.circular_extrema(self._azimuth_function(observer), window, options)

    def in_azimuth_range(
        self,
        observer: Geodetic,
        window: Period,
        min_deg: float,
        max_deg: float,
        options: SearchOptions = DEFAULT_OPTIONS,
    ) -> list[Period]:
        """Periods with azimuth on the clockwise arc from ``min_deg`` to ``max_deg``."""
        self._require_range_queries("in_azimuth_range")
        return engine.circular_range_periods(
            self._azimuth_function(observer), min_deg, max_deg, window, options
        )

    def altitude_periods(
        self,
        observer: Geodetic,
        window: Period,
        min_deg: float,
        max_deg: float,
        options: SearchOptions = DEFAULT_OPTIONS,
    ) -> list[Period]:
        """Periods with ``min_deg <= altitude <= max_deg``."""
        self._require_range_queries("altitude_periods")
        return engine.range_periods(
            self._altitude_function(observer), min_deg, max_deg, window, options
        )
