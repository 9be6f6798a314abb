"""Time values: Julian Dates, Modified Julian Dates and periods between them.

Instants are stored as Modified Julian Dates on the TT scale. Conversion to and
from UTC goes through skyfield's built-in timescale, so leap seconds are
handled without downloading any data files.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional, Union

from skyfield.api import load

from ..errors import TimeParseError

MJD_OFFSET = 2400000.5
J2000_JD = 2451545.0
DAYS_PER_JULIAN_YEAR = 365.25
DAYS_PER_JULIAN_CENTURY = 36525.0

DURATION_UNITS = {
    "days": 1.0,
    "hours": 24.0,
    "minutes": 1440.0,
    "seconds": 86400.0,
}


@lru_cache(maxsize=1)
def timescale():
    """Return the shared skyfield timescale (built-in leap second tables)."""
    return load.timescale(builtin=True)


@lru_cache(maxsize=256)
def _skyfield_time(mjd: float):
    # Transforms at one instant ask for the same Time several times.
    return timescale().tt_jd(mjd + MJD_OFFSET)


@dataclass(frozen=True, order=True)
class JulianDate:
    value: float

    def to_mjd(self) -> "MJD":
        return MJD(self.value - MJD_OFFSET)

    def julian_centuries(self) -> float:
        """Julian centuries elapsed since J2000.0."""
        return (self.value - J2000_JD) / DAYS_PER_JULIAN_CENTURY

    def __add__(self, days: float) -> "JulianDate":
        return JulianDate(self.value + float(days))

    def __sub__(self, other):
        if isinstance(other, JulianDate):
            return self.value - other.value
        return JulianDate(self.value - float(other))


@dataclass(frozen=True, order=True)
class MJD:
    """A Modified Julian Date on the TT scale.

    Supports ``mjd + days``, ``mjd - days`` and ``mjd - mjd`` (days), and
    ordering against other ``MJD`` values.
    """

    value: float

    @classmethod
    def from_utc(
        cls,
        year: Union[int, datetime],
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: float = 0.0,
    ) -> "MJD":
        """Build an MJD from a UTC datetime or from calendar fields.

        Naive datetimes are interpreted as UTC.
        """
        ts = timescale()
        if isinstance(year, datetime):
            dt = year
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            t = ts.from_datetime(dt)
        else:
            t = ts.utc(year, month, day, hour, minute, second)
        return cls(float(t.tt) - MJD_OFFSET)

    @classmethod
    def from_iso(cls, utc_time: str) -> "MJD":
        """Parse an ISO-8601 UTC timestamp (e.g. "2026-01-20T12:00:00Z").

        Raises:
            TimeParseError: If utc_time cannot be parsed
        """
        text = utc_time
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"

        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            raise TimeParseError(utc_time)

        return cls.from_utc(dt)

    @classmethod
    def from_jd(cls, jd: Union[JulianDate, float]) -> "MJD":
        value = jd.value if isinstance(jd, JulianDate) else float(jd)
        return cls(value - MJD_OFFSET)

    def to_jd(self) -> JulianDate:
        return JulianDate(self.value + MJD_OFFSET)

    def to_utc(self) -> datetime:
        """Timezone-aware UTC datetime for this instant."""
        return self.skyfield_time().utc_datetime()

    def skyfield_time(self):
        return _skyfield_time(self.value)

    def julian_centuries(self) -> float:
        """Julian centuries elapsed since J2000.0."""
        return (self.value + MJD_OFFSET - J2000_JD) / DAYS_PER_JULIAN_CENTURY

    def julian_years_since(self, epoch: "MJD") -> float:
        return (self.value - epoch.value) / DAYS_PER_JULIAN_YEAR

    def __add__(self, days: float) -> "MJD":
        return MJD(self.value + float(days))

    def __radd__(self, days: float) -> "MJD":
        return self.__add__(days)

    def __sub__(self, other):
        if isinstance(other, MJD):
            return self.value - other.value
        return MJD(self.value - float(other))

    def __float__(self) -> float:
        return self.value


J2000 = MJD(J2000_JD - MJD_OFFSET)


@dataclass(frozen=True)
class Period:
    """Half-open interval ``[start, end)`` between two instants."""

    start: MJD
    end: MJD

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(
                f"Period end ({self.end.value}) is before its start ({self.start.value})"
            )

    @classmethod
    def from_mjd(cls, start: float, end: float) -> "Period":
        return cls(MJD(start), MJD(end))

    @property
    def duration_days(self) -> float:
        return self.end - self.start

    def duration(self, unit: str = "days") -> float:
        """Duration expressed in ``days``, ``hours``, ``minutes`` or ``seconds``."""
        factor = DURATION_UNITS.get(unit)
        if factor is None:
            raise ValueError(
                f"Unknown duration unit '{unit}'; expected one of {sorted(DURATION_UNITS)}"
            )
        return self.duration_days * factor

    @property
    def midpoint(self) -> MJD:
        return self.start + self.duration_days / 2.0

    def contains(self, t: MJD) -> bool:
        return self.start <= t < self.end

    def intersection(self, other: "Period") -> Optional["Period"]:
        """Overlap of two periods, or None when they do not overlap."""
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if end <= start:
            return None
        return Period(start, end)


def intersect_periods(a: list[Period], b: list[Period]) -> list[Period]:
    """Pairwise overlap of two time-ordered, non-overlapping period lists."""
    result = []
    i = j = 0
    while i < len(a) and j < len(b):
        overlap = a[i].intersection(b[j])
        if overlap is not None:
            result.append(overlap)
        if a[i].end < b[j].end:
            i += 1
        else:
            j += 1
    return result
