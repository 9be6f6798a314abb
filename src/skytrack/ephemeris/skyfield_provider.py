"""Ephemeris provider backed by a JPL SPK kernel loaded through skyfield."""

import numpy as np
from skyfield.api import load
from skyfield.framelib import ecliptic_J2000_frame

from skytrack.models.bodies import Body
from skytrack.models.centers import BARYCENTRIC
from skytrack.models.coordinates import Position
from skytrack.models.frames import Frame
from skytrack.models.time import MJD

from .provider import EphemerisProvider

DEFAULT_KERNEL = "de421.bsp"

# SPK segment names. Outer planets are only available as system barycenters
# in the smaller kernels.
KERNEL_TARGETS = {
    Body.SUN: "sun",
    Body.MOON: "moon",
    Body.MERCURY: "mercury",
    Body.VENUS: "venus",
    Body.MARS: "mars barycenter",
    Body.JUPITER: "jupiter barycenter",
    Body.SATURN: "saturn barycenter",
    Body.URANUS: "uranus barycenter",
    Body.NEPTUNE: "neptune barycenter",
}


class SkyfieldEphemeris(EphemerisProvider):
    """
    JPL development ephemeris positions.

    The kernel is opened once at construction; skyfield downloads it into
    the working directory when it is not already present.

    Args:
        kernel: Kernel file name or path (e.g. "de421.bsp", "de440s.bsp")
    """

    def __init__(self, kernel: str = DEFAULT_KERNEL):
        self.kernel_name = kernel
        self.kernel = load(kernel)

    def _barycentric(self, name: str, time: MJD) -> np.ndarray:
        t = time.skyfield_time()
        position = self.kernel[name].at(t)
        return np.asarray(position.frame_xyz(ecliptic_J2000_frame).au, dtype=np.float64)

    def sun_barycentric(self, time: MJD) -> np.ndarray:
        return self._barycentric("sun", time)

    def earth_heliocentric(self, time: MJD) -> np.ndarray:
        return self._barycentric("earth", time) - self._barycentric("sun", time)

    def moon_geocentric(self, time: MJD) -> np.ndarray:
        return self._barycentric("moon", time) - self._barycentric("earth", time)

    def body_position(self, body: Body, time: MJD) -> Position:
        """Barycentric EclipticMeanJ2000 position of ``body``."""
        vector = self._barycentric(KERNEL_TARGETS[body], time)
        return Position(BARYCENTRIC, Frame.ECLIPTIC_MEAN_J2000, vector)
