"""Tests for frame rotations, center shifts and bodycentric transforms."""

import numpy as np
import pytest

from skytrack.ephemeris import AnalyticalEphemeris
from skytrack.errors import ConvergenceWarning, InvalidTransformError
from skytrack.models import (
    BARYCENTRIC,
    GEOCENTRIC,
    HELIOCENTRIC,
    MJD,
    SOLAR_SYSTEM_BODIES,
    Body,
    BodycentricParams,
    Center,
    Direction,
    Frame,
    Geodetic,
    LengthUnit,
    Orbit,
    Position,
)
from skytrack.models.frames import FRAME_TRANSFORMS
from skytrack.search import SearchOptions
from skytrack.transforms import (
    center_offset,
    orbit_position,
    rotate,
    rotation_matrix,
    shift,
    to_bodycentric,
    to_horizontal,
    to_standard_center,
    transform,
)
from skytrack.transforms.horizontal import az_alt_to_vector, enu_basis

TIME = MJD(60000.0)
GREENWICH = Geodetic(0.0, 51.4769, 46.0)


@pytest.fixture
def random_direction():
    rng = np.random.default_rng(42)
    return rng.normal(size=3)


class TestRotation:
    def test_every_registered_pair_round_trips(self, random_direction):
        """Rotating there and back restores the vector for every pair."""
        for source, target in sorted(FRAME_TRANSFORMS, key=lambda p: (p[0].value, p[1].value)):
            d = Direction.from_vector(source, random_direction)
            there = rotate(d, target, TIME)
            back = rotate(there, source, TIME)
            assert there.frame is target
            assert back.vector == pytest.approx(d.vector, abs=1e-9), (source, target)

    def test_matrices_are_orthonormal(self):
        """All rotation matrices are orthonormal."""
        for source, target in FRAME_TRANSFORMS:
            m = rotation_matrix(source, target, TIME)
            assert m @ m.T == pytest.approx(np.identity(3), abs=1e-12)

    def test_ecliptic_pole_in_icrs(self):
        """The ecliptic pole sits at RA 18h, Dec 66.56 in ICRS."""
        pole = Direction(Frame.ECLIPTIC_MEAN_J2000, (0.0, 0.0, 1.0))
        icrs = rotate(pole, Frame.ICRS, TIME)
        assert icrs.lon_deg == pytest.approx(270.0, abs=1e-3)
        assert icrs.lat_deg == pytest.approx(66.5607, abs=1e-3)

    def test_galactic_center_in_icrs(self):
        """Galactic (0, 0) is the IAU galactic center."""
        center = Direction.from_spherical(Frame.GALACTIC, 0.0, 0.0)
        icrs = rotate(center, Frame.ICRS, TIME)
        assert icrs.ra.degrees == pytest.approx(266.405, abs=0.01)
        assert icrs.dec.degrees == pytest.approx(-28.936, abs=0.01)

    def test_precession_moves_the_equinox(self):
        # About 50 arcseconds a year since J2000.
        equinox = Direction(Frame.EQUATORIAL_MEAN_J2000, (1.0, 0.0, 0.0))
        of_date = rotate(equinox, Frame.EQUATORIAL_MEAN_OF_DATE, TIME)
        years = (TIME.value - 51544.5) / 365.25
        shift_arcsec = of_date.separation(
            Direction(Frame.EQUATORIAL_MEAN_OF_DATE, (1.0, 0.0, 0.0))
        ).arcseconds()
        assert shift_arcsec == pytest.approx(50.3 * years, rel=0.02)

    def test_mean_then_true_of_date_at_fresh_instant(self):
        """Mean-of-date and true-of-date matrices coexist on one cached instant."""
        t = MJD(60123.4567)
        d = Direction(Frame.ICRS, (0.0, 0.0, 1.0))
        mean = rotate(d, Frame.EQUATORIAL_MEAN_OF_DATE, t)
        true = rotate(d, Frame.EQUATORIAL_TRUE_OF_DATE, t)
        ecef = rotate(d, Frame.ECEF, t)
        # Nutation moves the pole by well under an arcminute.
        assert mean.separation(true).arcseconds() < 30.0
        assert true.vector == pytest.approx(ecef.vector, abs=1e-12)

    def test_mean_of_date_is_precession_of_j2000(self):
        t = MJD(60123.9876)
        expected = np.asarray(t.skyfield_time().precession_matrix())
        m = rotation_matrix(Frame.EQUATORIAL_MEAN_J2000, Frame.EQUATORIAL_MEAN_OF_DATE, t)
        assert m == pytest.approx(expected, abs=1e-12)

    def test_horizontal_is_not_rotatable(self):
        """rotate() refuses the horizontal frame."""
        d = Direction.from_spherical(Frame.HORIZONTAL, 10.0, 20.0)
        with pytest.raises(InvalidTransformError, match="No frame transform"):
            rotate(d, Frame.ICRS, TIME)
        with pytest.raises(InvalidTransformError):
            rotation_matrix(Frame.ICRS, Frame.HORIZONTAL, TIME)

    def test_position_keeps_center(self):
        p = Position(HELIOCENTRIC, Frame.ICRS, (1.0, 2.0, 3.0))
        rotated = rotate(p, Frame.GALACTIC, TIME)
        assert rotated.center == HELIOCENTRIC
        assert rotated.distance.au == pytest.approx(p.distance.au)


class TestHorizontal:
    def test_enu_basis_is_right_handed(self):
        """East x North = Up."""
        east, north, up = enu_basis(GREENWICH)
        assert np.cross(east, north) == pytest.approx(up, abs=1e-12)

    def test_az_alt_vector(self):
        """Azimuth 0 is north, 90 is east; altitude 90 is up."""
        assert az_alt_to_vector(0.0, 0.0) == pytest.approx([1.0, 0.0, 0.0], abs=1e-12)
        assert az_alt_to_vector(90.0, 0.0) == pytest.approx([0.0, 1.0, 0.0], abs=1e-12)
        assert az_alt_to_vector(0.0, 90.0) == pytest.approx([0.0, 0.0, 1.0], abs=1e-12)

    def test_celestial_pole_altitude_is_latitude(self):
        """The true celestial pole stands at the site latitude."""
        pole = Direction(Frame.EQUATORIAL_TRUE_OF_DATE, (0.0, 0.0, 1.0))
        horizontal = to_horizontal(pole, TIME, GREENWICH)
        assert horizontal.frame is Frame.HORIZONTAL
        assert horizontal.altitude.degrees == pytest.approx(GREENWICH.lat_deg, abs=1e-6)
        assert horizontal.lat_deg == pytest.approx(GREENWICH.lat_deg, abs=1e-6)

    def test_direction_needs_observer(self):
        """Directions need an explicit observer to become horizontal."""
        d = Direction.from_spherical(Frame.ICRS, 10.0, 20.0)
        with pytest.raises(ValueError, match="observer is required"):
            to_horizontal(d, TIME)

    def test_heliocentric_position_rejected(self):
        """Only geocentric or topocentric positions go horizontal."""
        p = Position(HELIOCENTRIC, Frame.ICRS, (1.0, 0.0, 0.0))
        with pytest.raises(InvalidTransformError):
            to_horizontal(p, TIME, GREENWICH)

    def test_geocentric_position_with_observer(self):
        far = Position.from_spherical(GEOCENTRIC, Frame.ICRS, 10.0, 20.0, 1000.0)
        horizontal = to_horizontal(far, TIME, GREENWICH)
        direction = to_horizontal(far.direction, TIME, GREENWICH)
        assert horizontal.frame is Frame.HORIZONTAL
        assert horizontal.center == Center.topocentric(GREENWICH)
        # Parallax is negligible at 1000 AU.
        assert horizontal.direction.separation(direction).degrees < 1e-5


class TestShift:
    def test_identity_returns_same_object(self):
        """Shifting to the same center is a no-op."""
        p = Position(BARYCENTRIC, Frame.ICRS, (1.0, 2.0, 3.0))
        assert shift(p, BARYCENTRIC, TIME) is p

    @pytest.mark.parametrize("source", [BARYCENTRIC, HELIOCENTRIC])
    def test_round_trip_through_geocenter(self, source):
        """Shifting to the geocenter and back restores the position."""
        p = Position(source, Frame.ICRS, (1.2, -0.4, 0.3))
        geocentric = shift(p, GEOCENTRIC, TIME)
        back = shift(geocentric, source, TIME)
        assert geocentric.frame is Frame.ICRS
        assert back.center == source
        assert back.vector == pytest.approx(p.vector, abs=1e-12)

    def test_sun_is_near_barycenter(self):
        """The Sun is within 0.02 AU of the barycenter."""
        offset = center_offset(BARYCENTRIC, HELIOCENTRIC, TIME)
        assert np.linalg.norm(offset) < 0.02

    def test_geocentric_to_topocentric_offset(self):
        """The geocenter is one Earth radius from a surface site."""
        origin = Position(GEOCENTRIC, Frame.ICRS, (0.0, 0.0, 0.0), LengthUnit.KM)
        topo = shift(origin, Center.topocentric(GREENWICH), TIME)
        assert 6350.0 < topo.distance.km < 6380.0
        assert topo.unit is LengthUnit.KM

    def test_topocentric_round_trip(self):
        site = Center.topocentric(GREENWICH)
        p = Position(GEOCENTRIC, Frame.EQUATORIAL_TRUE_OF_DATE, (0.001, 0.002, 0.0005))
        back = shift(shift(p, site, TIME), GEOCENTRIC, TIME)
        assert back.vector == pytest.approx(p.vector, abs=1e-14)

    def test_unregistered_pair(self):
        """Heliocentric to topocentric is not a registered shift."""
        p = Position(HELIOCENTRIC, Frame.ICRS, (1.0, 0.0, 0.0))
        with pytest.raises(InvalidTransformError, match="No center transform"):
            shift(p, Center.topocentric(GREENWICH), TIME)

    def test_frame_invalid_for_target_center(self):
        p = Position(GEOCENTRIC, Frame.ECEF, (1e-4, 0.0, 0.0))
        with pytest.raises(InvalidTransformError):
            shift(p, HELIOCENTRIC, TIME)

    def test_transform_matches_separate_steps(self):
        """transform() equals shift() followed by rotate()."""
        p = Position(HELIOCENTRIC, Frame.ECLIPTIC_MEAN_J2000, (0.5, 1.0, 0.1))
        combined = transform(p, GEOCENTRIC, Frame.ICRS, TIME)
        stepwise = rotate(shift(p, GEOCENTRIC, TIME), Frame.ICRS, TIME)
        assert combined.center == GEOCENTRIC
        assert combined.frame is Frame.ICRS
        assert combined.vector == pytest.approx(stepwise.vector, abs=1e-12)

    def test_transform_validates_before_work(self):
        """Invalid targets fail before any shift is computed."""
        p = Position(HELIOCENTRIC, Frame.ICRS, (1.0, 0.0, 0.0))
        with pytest.raises(InvalidTransformError):
            transform(p, GEOCENTRIC, Frame.HORIZONTAL, TIME)


class TestBodycentric:
    ORBIT = Orbit(1.5, 0.1, 2.0, 30.0, 40.0, 50.0)

    def test_body_is_at_its_own_origin(self):
        """The orbiting body itself maps to the bodycentric origin."""
        params = BodycentricParams.heliocentric(self.ORBIT)
        body = orbit_position(params, TIME)
        relative = to_bodycentric(body, params, TIME)
        assert relative.center == Center.bodycentric(params)
        assert relative.distance.au == pytest.approx(0.0, abs=1e-12)

    def test_round_trip_restores_source_center(self):
        """to_standard_center undoes to_bodycentric."""
        params = BodycentricParams.heliocentric(self.ORBIT)
        p = Position(GEOCENTRIC, Frame.ICRS, (0.3, -0.2, 0.1))
        relative = to_bodycentric(p, params, TIME)
        assert relative.source_center == GEOCENTRIC
        back = to_standard_center(relative, TIME)
        assert back.center == GEOCENTRIC
        assert back.vector == pytest.approx(p.vector, abs=1e-10)

    def test_explicit_target_center(self):
        """A bodycentric position can be restored to a different center."""
        params = BodycentricParams.geocentric(Orbit(0.00257, 0.05, 5.0, 0.0, 0.0, 0.0))
        p = Position(HELIOCENTRIC, Frame.ECLIPTIC_MEAN_J2000, (1.0, 0.0, 0.0))
        relative = to_bodycentric(p, params, TIME)
        as_geocentric = to_standard_center(relative, TIME, GEOCENTRIC)
        expected = shift(p, GEOCENTRIC, TIME)
        assert as_geocentric.vector == pytest.approx(expected.vector, abs=1e-10)

    def test_bodycentric_input_rejected(self):
        """Bodycentric inputs cannot be re-centered again."""
        params = BodycentricParams.heliocentric(self.ORBIT)
        p = Position(HELIOCENTRIC, Frame.ICRS, (1.0, 0.0, 0.0))
        relative = to_bodycentric(p, params, TIME)
        with pytest.raises(InvalidTransformError):
            to_bodycentric(relative, params, TIME)

    def test_local_frame_rejected(self):
        params = BodycentricParams.heliocentric(self.ORBIT)
        p = Position(GEOCENTRIC, Frame.ECEF, (1e-4, 0.0, 0.0))
        with pytest.raises(InvalidTransformError):
            to_bodycentric(p, params, TIME)

    def test_provider_body_is_at_its_own_origin(self):
        """Mars from the ephemeris sits at the origin of a Mars-centred frame."""
        mars = AnalyticalEphemeris().body_position(Body.MARS, TIME)
        orbit = SOLAR_SYSTEM_BODIES["mars"].orbit_at(TIME)
        relative = to_bodycentric(mars, BodycentricParams.heliocentric(orbit), TIME)
        assert relative.distance.au < 1e-4

    def test_catalog_orbit_is_j2000_elements(self):
        # No secular rates: Mars drifts by a few thousandths of an AU by 2023.
        mars = AnalyticalEphemeris().body_position(Body.MARS, TIME)
        orbit = SOLAR_SYSTEM_BODIES["mars"].orbit
        relative = to_bodycentric(mars, BodycentricParams.heliocentric(orbit), TIME)
        assert 1e-4 < relative.distance.au < 0.01

    def test_kepler_iteration_limit_warns(self):
        """The search iteration limit also bounds the Kepler solver."""
        eccentric = Orbit(1.0, 0.9, 0.0, 0.0, 0.0, 10.0, epoch=TIME)
        params = BodycentricParams.heliocentric(eccentric)
        p = Position(HELIOCENTRIC, Frame.ECLIPTIC_MEAN_J2000, (1.0, 0.0, 0.0))
        with pytest.warns(ConvergenceWarning):
            orbit_position(params, TIME, SearchOptions(max_iterations=1))
        with pytest.warns(ConvergenceWarning):
            to_bodycentric(p, params, TIME, options=SearchOptions(max_iterations=1))
