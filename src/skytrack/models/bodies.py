from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..errors import UnknownBodyError
from .orbit import Orbit
from .time import DAYS_PER_JULIAN_CENTURY, J2000, MJD


class Body(Enum):
    SUN = "sun"
    MOON = "moon"
    MERCURY = "mercury"
    VENUS = "venus"
    MARS = "mars"
    JUPITER = "jupiter"
    SATURN = "saturn"
    URANUS = "uranus"
    NEPTUNE = "neptune"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


PLANETARY_BODIES = (
    Body.MERCURY,
    Body.VENUS,
    Body.MARS,
    Body.JUPITER,
    Body.SATURN,
    Body.URANUS,
    Body.NEPTUNE,
)


# JPL approximate Keplerian elements (Standish, valid 1800-2050), referred to
# the mean ecliptic and equinox of J2000. Each row holds the J2000 value and
# the rate per Julian century for:
#   a [au], e, I [deg], L [deg], long. perihelion [deg], long. node [deg]
KEPLERIAN_ELEMENTS = {
    "mercury": (
        (0.38709927, 0.00000037),
        (0.20563593, 0.00001906),
        (7.00497902, -0.00594749),
        (252.25032350, 149472.67411175),
        (77.45779628, 0.16047689),
        (48.33076593, -0.12534081),
    ),
    "venus": (
        (0.72333566, 0.00000390),
        (0.00677672, -0.00004107),
        (3.39467605, -0.00078890),
        (181.97909950, 58517.81538729),
        (131.60246718, 0.00268329),
        (76.67984255, -0.27769418),
    ),
    "earth": (
        (1.00000261, 0.00000562),
        (0.01671123, -0.00004392),
        (-0.00001531, -0.01294668),
        (100.46457166, 35999.37244981),
        (102.93768193, 0.32327364),
        (0.0, 0.0),
    ),
    "mars": (
        (1.52371034, 0.00001847),
        (0.09339410, 0.00007882),
        (1.84969142, -0.00813131),
        (-4.55343205, 19140.30268499),
        (-23.94362959, 0.44441088),
        (49.55953891, -0.29257343),
    ),
    "jupiter": (
        (5.20288700, -0.00011607),
        (0.04838624, -0.00013253),
        (1.30439695, -0.00183714),
        (34.39644051, 3034.74612775),
        (14.72847983, 0.21252668),
        (100.47390909, 0.20469106),
    ),
    "saturn": (
        (9.53667594, -0.00125060),
        (0.05386179, -0.00050991),
        (2.48599187, 0.00193609),
        (49.95424423, 1222.49362201),
        (92.59887831, -0.41897216),
        (113.66242448, -0.28867794),
    ),
    "uranus": (
        (19.18916464, -0.00196176),
        (0.04725744, -0.00004397),
        (0.77263783, -0.00242939),
        (313.23810451, 428.48202785),
        (170.95427630, 0.40805281),
        (74.01692503, 0.04240589),
    ),
    "neptune": (
        (30.06992276, 0.00026291),
        (0.00859048, 0.00005105),
        (1.77004347, 0.00035372),
        (-55.12002969, 218.45945325),
        (44.96476227, -0.32241464),
        (131.78422574, -0.00508664),
    ),
}

# Sun mass divided by planet mass (planet plus satellites).
SUN_PLANET_MASS_RATIO = {
    "mercury": 6023600.0,
    "venus": 408523.71,
    "earth": 328900.56,
    "mars": 3098708.0,
    "jupiter": 1047.3486,
    "saturn": 3497.898,
    "uranus": 22902.98,
    "neptune": 19412.24,
}

EARTH_MOON_MASS_RATIO = 81.30056


def orbit_from_elements(body_id: str, centuries: float = 0.0) -> Orbit:
    """Osculating-style orbit built from the mean element table.

    ``centuries`` is the number of Julian centuries from J2000 at which the
    secular rates are evaluated; the returned orbit uses J2000 as its epoch
    when ``centuries`` is zero.
    """
    rows = KEPLERIAN_ELEMENTS[body_id]
    a, e, inc, mean_lon, peri_lon, node = (v0 + rate * centuries for v0, rate in rows)
    return Orbit(
        semi_major_axis_au=a,
        eccentricity=e,
        inclination_deg=inc,
        lon_ascending_node_deg=node % 360.0,
        arg_perihelion_deg=(peri_lon - node) % 360.0,
        mean_anomaly_deg=(mean_lon - peri_lon) % 360.0,
        epoch=J2000 + centuries * DAYS_PER_JULIAN_CENTURY,
    )


@dataclass(frozen=True)
class Planet:
    """A catalog body.

    ``orbit`` holds the mean elements at J2000 with no secular rates applied,
    so it drifts from the ephemeris away from J2000 (a few thousandths of an
    AU for Mars by 2023). ``orbit_at`` evaluates the rates for a given date.
    """

    name: str
    mass_kg: float
    radius_km: float
    orbit: Optional[Orbit] = None

    def orbit_at(self, time: MJD) -> Optional[Orbit]:
        """Mean elements evaluated at ``time``, with ``time`` as the epoch."""
        if self.orbit is None:
            return None
        return orbit_from_elements(self.name.lower(), time.julian_centuries())


SOLAR_SYSTEM_BODIES = {
    "sun": Planet(name="Sun", mass_kg=1.98847e30, radius_km=695_700.0),
    "moon": Planet(name="Moon", mass_kg=7.342e22, radius_km=1_737.4),
    "mercury": Planet(
        name="Mercury",
        mass_kg=3.3011e23,
        radius_km=2_439.7,
        orbit=orbit_from_elements("mercury"),
    ),
    "venus": Planet(
        name="Venus",
        mass_kg=4.8675e24,
        radius_km=6_051.8,
        orbit=orbit_from_elements("venus"),
    ),
    "earth": Planet(
        name="Earth",
        mass_kg=5.97237e24,
        radius_km=6_371.0,
        orbit=orbit_from_elements("earth"),
    ),
    "mars": Planet(
        name="Mars",
        mass_kg=6.4171e23,
        radius_km=3_389.5,
        orbit=orbit_from_elements("mars"),
    ),
    "jupiter": Planet(
        name="Jupiter",
        mass_kg=1.8982e27,
        radius_km=69_911.0,
        orbit=orbit_from_elements("jupiter"),
    ),
    "saturn": Planet(
        name="Saturn",
        mass_kg=5.6834e26,
        radius_km=58_232.0,
        orbit=orbit_from_elements("saturn"),
    ),
    "uranus": Planet(
        name="Uranus",
        mass_kg=8.6810e25,
        radius_km=25_362.0,
        orbit=orbit_from_elements("uranus"),
    ),
    "neptune": Planet(
        name="Neptune",
        mass_kg=1.02413e26,
        radius_km=24_622.0,
        orbit=orbit_from_elements("neptune"),
    ),
}

PLANETS = {
    body_id: planet
    for body_id, planet in SOLAR_SYSTEM_BODIES.items()
    if planet.orbit is not None
}


def get_body(body_id) -> Body:
    """Resolve a body name (case-insensitive) or ``Body`` member.

    Raises:
        UnknownBodyError: If body_id is not recognized
    """
    if isinstance(body_id, Body):
        return body_id
    try:
        return Body(str(body_id).lower())
    except ValueError:
        raise UnknownBodyError(str(body_id), [b.value for b in Body])
