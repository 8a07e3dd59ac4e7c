"""Render progress tracking with a moving-average ETA.

Renderers report progress through a plain callback taking
``(current, total)`` pixel counts. ``ProgressReporter`` is the terminal
implementation: it keeps a ``ProgressTracker`` and rewrites a single
status line on stderr, for example::

    Progress:  42.13% | Elapsed:  12.44s | ETA:  17.03s

The ETA divides the remaining work by the speed averaged over the last
32 updates, so it adapts when some regions of the image are slower to
render than others.

Example:
    >>> from pathtracer.core.progress import ProgressReporter
    >>> reporter = ProgressReporter(total=640 * 480)
    >>> image = tracer.render(world, progress=reporter)
"""

from __future__ import annotations

import sys
import time
from collections import deque
from typing import Callable, TextIO

# Type alias for progress callback: (current, total) -> None
ProgressCallback = Callable[[int, int], None]

# Number of updates averaged for the ETA estimate
MOVING_AVERAGE_WINDOW = 32

# Print at most once per this many completed pixels
MINIMUM_UPDATE_INTERVAL = 512


class ProgressTracker:
    """Track progress from ``minimum`` to ``maximum`` and estimate the ETA.

    Each ``update`` records the time elapsed and the count advanced since
    the previous update. The speed estimate averages the most recent
    records.

    Attributes:
        minimum: Count at the start.
        maximum: Count at completion.
        current: Most recently reported count.
    """

    def __init__(
        self,
        minimum: int,
        maximum: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if maximum <= minimum:
            raise ValueError(
                f"Progress maximum {maximum} must exceed minimum {minimum}"
            )
        self.minimum = minimum
        self.maximum = maximum
        self.current = minimum
        self._clock = clock
        self._first_update = clock()
        self._last_update = self._first_update
        self._records: deque[tuple[float, int]] = deque(maxlen=MOVING_AVERAGE_WINDOW)

    def update(self, current: int) -> None:
        now = self._clock()
        delta = now - self._last_update
        diff = max(current - self.current, 0)
        self._last_update = now
        self.current = current
        self._records.append((delta, diff))

    def progress(self) -> float:
        """Completion percentage in [0, 100]."""
        return (self.current - self.minimum) / (self.maximum - self.minimum) * 100.0

    def elapsed(self) -> float:
        """Seconds since the tracker was created."""
        return self._clock() - self._first_update

    def eta(self) -> float:
        """Estimated seconds until ``maximum`` is reached.

        Returns 0 when no speed estimate is available yet.
        """
        if not self._records:
            return 0.0
        total_time = sum(delta for delta, _ in self._records)
        total_diff = sum(diff for _, diff in self._records)
        if total_time <= 0.0 or total_diff == 0:
            return 0.0
        speed = total_diff / total_time
        return (self.maximum - self.current) / speed

    def __repr__(self) -> str:
        return (
            f"ProgressTracker(current={self.current}, "
            f"maximum={self.maximum}, progress={self.progress():.2f}%)"
        )


class ProgressReporter:
    """Progress callback that prints a status line to a text stream.

    The line is rewritten in place with a carriage return and is printed
    only every ``min_interval`` counts and at completion, where it is
    terminated with a newline.
    """

    def __init__(
        self,
        total: int,
        stream: TextIO | None = None,
        min_interval: int = MINIMUM_UPDATE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.tracker = ProgressTracker(0, total, clock=clock)
        self.stream = stream if stream is not None else sys.stderr
        self.min_interval = min_interval

    def __call__(self, current: int, total: int) -> None:
        reached_max = current >= total
        if current % self.min_interval != 0 and not reached_max:
            return

        self.tracker.update(current)
        self.stream.write(self.format_line())
        if reached_max:
            self.stream.write("\n")
        self.stream.flush()

    def format_line(self) -> str:
        return (
            f"Progress: {self.tracker.progress():6.2f}% | "
            f"Elapsed: {self.tracker.elapsed():6.2f}s | "
            f"ETA: {self.tracker.eta():6.2f}s\r"
        )
