"""
Progress tracking.

Turns a stream of "bytes sent so far" samples into speed and ETA.
"""
import time
from typing import Callable, Optional

from .models import UploadProgress


class ProgressTracker:
    """
    Computes instantaneous speed and ETA from successive samples.

    speed = (bytes since last sample) / (seconds since last sample)
    eta   = (total - loaded) / speed

    When no time has passed since the previous sample the previous speed is
    kept, so every sample still yields a snapshot.

    Example:
        >>> tracker = ProgressTracker(total=1000)
        >>> snapshot = tracker.update(250)
        >>> snapshot.percentage
        25
    """

    def __init__(self, total: int, clock: Callable[[], float] = time.monotonic):
        """
        Initialize tracker.

        Args:
            total: Total bytes expected
            clock: Monotonic time source in seconds
        """
        self._total = max(total, 0)
        self._clock = clock
        self._last_time = clock()
        self._last_loaded = 0
        self._speed = 0.0
        self._latest: Optional[UploadProgress] = None

    @property
    def total(self) -> int:
        return self._total

    @property
    def latest(self) -> Optional[UploadProgress]:
        return self._latest

    def update(self, loaded: int) -> UploadProgress:
        """
        Record a sample.

        Args:
            loaded: Total bytes sent so far

        Returns:
            Snapshot with recomputed speed and ETA
        """
        now = self._clock()
        elapsed = now - self._last_time
        if elapsed > 0:
            delta = max(loaded - self._last_loaded, 0)
            self._speed = delta / elapsed
            self._last_time = now
            self._last_loaded = loaded

        remaining = max(self._total - loaded, 0)
        if remaining == 0:
            eta: Optional[float] = 0.0
        elif self._speed > 0:
            eta = remaining / self._speed
        else:
            eta = None

        self._latest = UploadProgress(
            loaded=loaded,
            total=self._total,
            speed=self._speed,
            eta=eta,
        )
        return self._latest
