"""Low-precision analytic ephemeris that needs no data files.

Planets (and the Earth-Moon barycenter) come from the JPL approximate
Keplerian elements with secular rates. The Moon comes from the truncated
lunar series in ``lunar``. The Sun's offset from the barycenter is the
mass-weighted sum of the planetary positions.
"""

import numpy as np
from skyfield.constants import AU_KM

from skytrack.models.bodies import (
    EARTH_MOON_MASS_RATIO,
    SUN_PLANET_MASS_RATIO,
    Body,
    orbit_from_elements,
)
from skytrack.models.centers import GEOCENTRIC, HELIOCENTRIC
from skytrack.models.coordinates import Position, spherical_to_vector
from skytrack.models.frames import Frame
from skytrack.models.time import MJD

from .kepler import propagate
from .lunar import ecliptic_to_equatorial_matrix, mean_obliquity_deg, moon_ecliptic_of_date
from .provider import EphemerisProvider


def heliocentric_from_elements(body_id: str, time: MJD) -> np.ndarray:
    """Heliocentric EclipticMeanJ2000 position (AU) from the element table."""
    orbit = orbit_from_elements(body_id, time.julian_centuries())
    return propagate(orbit, orbit.epoch)


class AnalyticalEphemeris(EphemerisProvider):
    """Analytic Sun, Earth, Moon and planet positions (arcminute level)."""

    def earth_moon_barycenter(self, time: MJD) -> np.ndarray:
        return heliocentric_from_elements("earth", time)

    def earth_heliocentric(self, time: MJD) -> np.ndarray:
        moon = self.moon_geocentric(time)
        return self.earth_moon_barycenter(time) - moon / (1.0 + EARTH_MOON_MASS_RATIO)

    def sun_barycentric(self, time: MJD) -> np.ndarray:
        weighted = np.zeros(3)
        total = 1.0
        for body_id, ratio in SUN_PLANET_MASS_RATIO.items():
            mass = 1.0 / ratio
            weighted += mass * heliocentric_from_elements(body_id, time)
            total += mass
        return -weighted / total

    def moon_geocentric(self, time: MJD) -> np.ndarray:
        from skytrack.transforms.rotation import rotation_matrix

        T = time.julian_centuries()
        lon, lat, distance_km = moon_ecliptic_of_date(T)
        ecliptic_of_date = spherical_to_vector(lon, lat) * (distance_km / AU_KM)
        equatorial_of_date = ecliptic_to_equatorial_matrix(mean_obliquity_deg(T)) @ ecliptic_of_date
        matrix = rotation_matrix(
            Frame.EQUATORIAL_MEAN_OF_DATE, Frame.ECLIPTIC_MEAN_J2000, time
        )
        return matrix @ equatorial_of_date

    def planet_heliocentric(self, body: Body, time: MJD) -> np.ndarray:
        return heliocentric_from_elements(body.value, time)

    def body_position(self, body: Body, time: MJD) -> Position:
        """Sun and Moon are geocentric; planets are heliocentric."""
        if body is Body.SUN:
            vector = -self.earth_heliocentric(time)
            return Position(GEOCENTRIC, Frame.ECLIPTIC_MEAN_J2000, vector)
        if body is Body.MOON:
            return Position(GEOCENTRIC, Frame.ECLIPTIC_MEAN_J2000, self.moon_geocentric(time))
        return Position(
            HELIOCENTRIC, Frame.ECLIPTIC_MEAN_J2000, self.planet_heliocentric(body, time)
        )

