"""Tests for the sampling and refinement search engine."""

import math

import pytest

from skytrack.errors import ConvergenceWarning, RootNotBracketedError
from skytrack.models import MJD, CrossingDirection, CulminationKind, Period
from skytrack.models.events import AzimuthExtremumKind
from skytrack.search import (
    SearchOptions,
    above_threshold,
    below_threshold,
    circular_crossings,
    circular_extrema,
    circular_range_periods,
    find_crossings,
    find_extrema,
    find_periods,
    find_root,
    range_periods,
    wrap_degrees,
)

COARSE = SearchOptions(scan_step_days=0.1)


def sine(t: MJD) -> float:
    return math.sin(t.value)


class TestSearchOptions:
    def test_defaults(self):
        """Ten-minute step, nanoday tolerance, 100 iterations."""
        options = SearchOptions()
        assert options.scan_step_days == pytest.approx(10.0 / 1440.0)
        assert options.time_tolerance_days == 1e-9
        assert options.max_iterations == 100

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"scan_step_days": 0.0}, "scan_step_days"),
            ({"sample_count": 1}, "sample_count"),
            ({"time_tolerance_days": -1.0}, "time_tolerance_days"),
            ({"max_iterations": 0}, "max_iterations"),
        ],
    )
    def test_validation(self, kwargs, message):
        """Each setting is range checked and named in the error."""
        with pytest.raises(ValueError, match=message):
            SearchOptions(**kwargs)

    def test_sample_times(self):
        """Sampling includes both window ends."""
        window = Period.from_mjd(0.0, 1.0)
        times = SearchOptions(scan_step_days=0.25).sample_times(window)
        assert list(times) == [0.0, 0.25, 0.5, 0.75, 1.0]
        assert len(SearchOptions().with_sample_count(3).sample_times(window)) == 3

    def test_with_scan_step_clears_sample_count(self):
        options = SearchOptions(sample_count=10).with_scan_step(0.5)
        assert options.sample_count is None
        assert options.scan_step_days == 0.5


class TestFindRoot:
    def test_simple_root(self):
        assert find_root(lambda x: x**3 - 0.3, 0.0, 1.0) == pytest.approx(0.3 ** (1 / 3))

    def test_endpoint_root(self):
        """A bracket end that is already a root is returned as is."""
        assert find_root(lambda x: x - 1.0, 0.0, 1.0) == 1.0

    def test_not_bracketed(self):
        with pytest.raises(RootNotBracketedError, match="Root not bracketed"):
            find_root(lambda x: x * x + 1.0, -1.0, 1.0)

    def test_iteration_limit_warns(self):
        """Running out of iterations warns and returns the best estimate."""
        options = SearchOptions(max_iterations=1, time_tolerance_days=1e-15)
        with pytest.warns(ConvergenceWarning):
            find_root(lambda x: x**3 - 0.3, 0.0, 1.0, options)


class TestCrossingsAndExtrema:
    def test_sine_crossings(self):
        """sin(t) over [0, 2pi) rises at the window start and sets at pi."""
        window = Period.from_mjd(0.0, 2.0 * math.pi)
        events = find_crossings(sine, window, COARSE)
        assert len(events) == 2
        assert events[0].direction is CrossingDirection.RISING
        assert events[0].time.value == 0.0
        assert events[1].direction is CrossingDirection.SETTING
        assert events[1].time.value == pytest.approx(math.pi, abs=1e-8)

    def test_sine_crossings_inside_window(self):
        window = Period.from_mjd(-0.5, 2.0 * math.pi - 0.5)
        events = find_crossings(sine, window, COARSE)
        assert [e.direction for e in events] == [
            CrossingDirection.RISING,
            CrossingDirection.SETTING,
        ]
        assert events[0].time.value == pytest.approx(0.0, abs=1e-8)

    def test_touching_zero_is_not_a_crossing(self):
        """A parabola that touches zero on a sample never changes sign."""

        def touch(t: MJD) -> float:
            return -((t.value - 0.5) ** 2)

        window = Period.from_mjd(0.0, 1.0)
        assert find_crossings(touch, window, COARSE) == []
        assert find_crossings(touch, window, SearchOptions(sample_count=4)) == []

    def test_root_on_window_end(self):
        events = find_crossings(lambda t: t.value - 1.0, Period.from_mjd(0.0, 1.0), COARSE)
        assert len(events) == 1
        assert events[0].time.value == 1.0
        assert events[0].direction is CrossingDirection.RISING

    def test_zero_plateau_is_one_crossing(self):
        """A run of zero samples between opposite signs is a single crossing."""

        def plateau(t: MJD) -> float:
            return max(0.0, t.value - 0.6) + min(0.0, t.value - 0.4)

        events = find_crossings(plateau, Period.from_mjd(0.0, 1.0), COARSE)
        assert len(events) == 1
        assert events[0].direction is CrossingDirection.RISING
        assert events[0].time.value == pytest.approx(0.4, abs=1e-12)

    def test_crossing_records_value_at_root(self):
        window = Period.from_mjd(0.0, math.pi)
        events = find_crossings(sine, window, COARSE, threshold=0.5)
        assert [e.direction for e in events] == [
            CrossingDirection.RISING,
            CrossingDirection.SETTING,
        ]
        for event in events:
            assert event.value == pytest.approx(0.5, abs=1e-8)
        assert events[0].time.value == pytest.approx(math.asin(0.5), abs=1e-8)

    def test_no_crossings(self):
        window = Period.from_mjd(0.0, 1.0)
        assert find_crossings(lambda t: 2.0 + sine(t), window, COARSE) == []

    def test_sine_extrema(self):
        """One maximum at pi/2 and one minimum at 3pi/2."""
        window = Period.from_mjd(0.0, 2.0 * math.pi)
        events = find_extrema(sine, window, COARSE)
        assert [e.kind for e in events] == [CulminationKind.MAX, CulminationKind.MIN]
        assert events[0].time.value == pytest.approx(math.pi / 2.0, abs=1e-4)
        assert events[0].value == pytest.approx(1.0, abs=1e-9)
        assert events[1].time.value == pytest.approx(3.0 * math.pi / 2.0, abs=1e-4)
        assert events[1].value == pytest.approx(-1.0, abs=1e-9)

    def test_monotonic_function_has_no_extrema(self):
        window = Period.from_mjd(0.0, 1.0)
        assert find_extrema(lambda t: t.value, window, COARSE) == []


class TestPeriods:
    def test_positive_everywhere(self):
        window = Period.from_mjd(0.0, 1.0)
        assert find_periods(lambda t: 1.0, window, COARSE) == [window]

    def test_negative_everywhere(self):
        window = Period.from_mjd(0.0, 1.0)
        assert find_periods(lambda t: -1.0, window, COARSE) == []

    def test_truncated_by_window(self):
        """A period already under way at the window end is cut there."""
        window = Period.from_mjd(0.0, 2.0 * math.pi)
        periods = above_threshold(sine, 0.0, window, COARSE)
        assert len(periods) == 1
        assert periods[0].start.value == 0.0
        assert periods[0].end.value == pytest.approx(math.pi, abs=1e-8)

    def test_daily_dips(self):
        """Seven nights below -18 degrees in a week, each of the analytic length."""

        def altitude(t: MJD) -> float:
            return 40.0 * math.sin(2.0 * math.pi * t.value)

        window = Period.from_mjd(0.0, 7.0)
        periods = below_threshold(altitude, -18.0, window)
        expected = (math.pi - 2.0 * math.asin(0.45)) / (2.0 * math.pi)
        assert len(periods) == 7
        for period in periods:
            assert period.duration_days == pytest.approx(expected, abs=1e-7)
        total = sum(p.duration_days for p in periods)
        assert total == pytest.approx(7.0 * expected, abs=1e-6)

    def test_band(self):
        window = Period.from_mjd(0.0, math.pi)
        periods = range_periods(sine, 0.5, 0.8, window, COARSE)
        assert len(periods) == 2
        assert periods[0].start.value == pytest.approx(math.asin(0.5), abs=1e-8)
        assert periods[0].end.value == pytest.approx(math.asin(0.8), abs=1e-8)
        assert periods[1].start.value == pytest.approx(math.pi - math.asin(0.8), abs=1e-8)

    def test_band_evaluates_once_per_instant(self):
        """Five samples plus one midpoint check, no duplicate evaluations."""
        calls = []

        def flat(t: MJD) -> float:
            calls.append(t.value)
            return 0.6

        window = Period.from_mjd(0.0, 1.0)
        periods = range_periods(flat, 0.5, 0.8, window, SearchOptions(sample_count=5))
        assert periods == [window]
        assert len(calls) == 6

    def test_empty_band_rejected(self):
        with pytest.raises(ValueError, match="Empty range"):
            range_periods(sine, 0.8, 0.5, Period.from_mjd(0.0, 1.0))


class TestCircular:
    def test_wrap_degrees(self):
        """Angles wrap to [-180, 180)."""
        assert wrap_degrees(190.0) == -170.0
        assert wrap_degrees(-190.0) == 170.0
        assert wrap_degrees(180.0) == -180.0
        assert wrap_degrees(0.0) == 0.0

    def test_crossing_through_north_is_single_event(self):
        """Passing 360 -> 0 is one RISING crossing of north, not a wrap jump."""

        def azimuth(t: MJD) -> float:
            return (359.0 + 2.0 * t.value) % 360.0

        events = circular_crossings(azimuth, 0.0, Period.from_mjd(0.0, 1.0), COARSE)
        assert len(events) == 1
        assert events[0].time.value == pytest.approx(0.5, abs=1e-8)
        assert events[0].direction is CrossingDirection.RISING
        assert events[0].value == pytest.approx(0.0, abs=1e-6)

    def test_opposite_bearing_is_not_a_crossing(self):
        def azimuth(t: MJD) -> float:
            return 170.0 + 20.0 * t.value

        assert circular_crossings(azimuth, 0.0, Period.from_mjd(0.0, 1.0), COARSE) == []

    def test_decreasing_crossing_is_setting(self):
        def azimuth(t: MJD) -> float:
            return 100.0 - 20.0 * t.value

        events = circular_crossings(azimuth, 90.0, Period.from_mjd(0.0, 1.0), COARSE)
        assert len(events) == 1
        assert events[0].time.value == pytest.approx(0.5, abs=1e-8)
        assert events[0].direction is CrossingDirection.SETTING
        assert events[0].value == pytest.approx(90.0, abs=1e-6)

    def test_crossing_between_samples_records_azimuth(self):
        def azimuth(t: MJD) -> float:
            return 200.0 + 30.0 * t.value

        events = circular_crossings(azimuth, 213.0, Period.from_mjd(0.0, 1.0), COARSE)
        assert len(events) == 1
        assert events[0].time.value == pytest.approx(13.0 / 30.0, abs=1e-8)
        assert events[0].value == pytest.approx(213.0, abs=1e-6)

    def test_range_containing_north(self):
        """An arc from 350 to 10 degrees contains north."""

        def azimuth(t: MJD) -> float:
            return (360.0 * t.value) % 360.0

        periods = circular_range_periods(azimuth, 350.0, 10.0, Period.from_mjd(0.0, 1.0))
        assert len(periods) == 2
        for period in periods:
            assert period.duration_days == pytest.approx(1.0 / 36.0, abs=1e-6)
        assert periods[0].start.value == 0.0
        assert periods[1].end.value == 1.0

    def test_zero_width_range_is_whole_circle(self):
        window = Period.from_mjd(0.0, 1.0)
        assert circular_range_periods(lambda t: 42.0, 90.0, 90.0, window) == [window]

    def test_extrema_across_north(self):
        """Extrema are found on the unwrapped angle and reported in [0, 360)."""

        def azimuth(t: MJD) -> float:
            return (30.0 * math.sin(2.0 * math.pi * t.value) + 355.0) % 360.0

        events = circular_extrema(azimuth, Period.from_mjd(0.0, 1.0))
        assert [e.kind for e in events] == [AzimuthExtremumKind.MAX, AzimuthExtremumKind.MIN]
        assert events[0].time.value == pytest.approx(0.25, abs=1e-4)
        assert events[0].azimuth_deg == pytest.approx(25.0, abs=1e-6)
        assert events[1].time.value == pytest.approx(0.75, abs=1e-4)
        assert events[1].azimuth_deg == pytest.approx(325.0, abs=1e-6)
