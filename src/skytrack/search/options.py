"""Search engine configuration."""

import dataclasses
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from skytrack.models.time import Period

# Ten minutes: the Moon moves about 0.1 deg against the sky in that time, so
# even tight altitude bands are sampled several times per event.
DEFAULT_SCAN_STEP_DAYS = 10.0 / 1440.0
DEFAULT_TIME_TOLERANCE_DAYS = 1e-9
DEFAULT_MAX_ITERATIONS = 100


@dataclass(frozen=True)
class SearchOptions:
    """
    Sampling and refinement settings shared by every search.

    ``sample_count``, when set, overrides ``scan_step_days`` with a fixed
    number of evenly spaced samples. Two roots closer together than one
    sample interval are not resolved; choosing a fine enough step for the
    target's motion is up to the caller.
    """

    scan_step_days: float = DEFAULT_SCAN_STEP_DAYS
    sample_count: Optional[int] = None
    time_tolerance_days: float = DEFAULT_TIME_TOLERANCE_DAYS
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self):
        if self.scan_step_days <= 0.0:
            raise ValueError(f"scan_step_days must be positive, got {self.scan_step_days}")
        if self.sample_count is not None and self.sample_count < 2:
            raise ValueError(f"sample_count must be at least 2, got {self.sample_count}")
        if self.time_tolerance_days <= 0.0:
            raise ValueError(
                f"time_tolerance_days must be positive, got {self.time_tolerance_days}"
            )
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")

    def with_scan_step(self, days: float) -> "SearchOptions":
        return dataclasses.replace(self, scan_step_days=days, sample_count=None)

    def with_sample_count(self, count: int) -> "SearchOptions":
        return dataclasses.replace(self, sample_count=count)

    def with_tolerance(self, days: float) -> "SearchOptions":
        return dataclasses.replace(self, time_tolerance_days=days)

    def with_max_iterations(self, count: int) -> "SearchOptions":
        return dataclasses.replace(self, max_iterations=count)

    def sample_times(self, window: Period) -> np.ndarray:
        """Evenly spaced sample instants (MJD floats), both window ends included."""
        start = window.start.value
        end = window.end.value
        if self.sample_count is not None:
            count = self.sample_count
        else:
            count = max(2, int(math.ceil((end - start) / self.scan_step_days)) + 1)
        return np.linspace(start, end, count)


DEFAULT_OPTIONS = SearchOptions()
