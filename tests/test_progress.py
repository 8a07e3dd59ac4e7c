"""Tests for progress tracking and the terminal reporter."""

import io

import pytest

from pathtracer.core.progress import MOVING_AVERAGE_WINDOW, ProgressReporter, ProgressTracker


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class TestProgressTracker:
    """Tests for ProgressTracker."""

    def test_invalid_range(self):
        """Test that maximum must exceed minimum."""
        with pytest.raises(ValueError, match="must exceed"):
            ProgressTracker(10, 10)

    def test_progress_percentage(self):
        """Test progress is reported as a percentage of the range."""
        tracker = ProgressTracker(0, 200, clock=FakeClock())
        tracker.update(50)
        assert tracker.progress() == 25.0
        tracker.update(200)
        assert tracker.progress() == 100.0

    def test_progress_with_offset_minimum(self):
        """Test progress is measured from the minimum."""
        tracker = ProgressTracker(100, 300, clock=FakeClock())
        tracker.update(150)
        assert tracker.progress() == 25.0

    def test_elapsed(self):
        """Test elapsed time is measured from construction."""
        clock = FakeClock()
        tracker = ProgressTracker(0, 10, clock=clock)
        clock.now += 4.5
        assert tracker.elapsed() == 4.5

    def test_eta_without_updates(self):
        """Test the ETA is zero before any speed is known."""
        assert ProgressTracker(0, 10, clock=FakeClock()).eta() == 0.0

    def test_eta_constant_speed(self):
        """Test the ETA at a constant rate."""
        clock = FakeClock()
        tracker = ProgressTracker(0, 100, clock=clock)
        for current in (10, 20, 30):
            clock.now += 1.0
            tracker.update(current)
        # 10 units per second, 70 remaining
        assert tracker.eta() == pytest.approx(7.0)

    def test_eta_uses_recent_window(self):
        """Test old records fall out of the moving average."""
        clock = FakeClock()
        tracker = ProgressTracker(0, 10_000, clock=clock)
        clock.now += 100.0
        tracker.update(1)
        current = 1
        for _ in range(MOVING_AVERAGE_WINDOW):
            clock.now += 1.0
            current += 100
            tracker.update(current)
        remaining = 10_000 - current
        assert tracker.eta() == pytest.approx(remaining / 100.0)

    def test_eta_zero_when_stalled(self):
        """Test the ETA is zero when no progress has been measured."""
        clock = FakeClock()
        tracker = ProgressTracker(0, 10, clock=clock)
        clock.now += 1.0
        tracker.update(0)
        assert tracker.eta() == 0.0

    def test_repr(self):
        """Test the repr includes the current count."""
        tracker = ProgressTracker(0, 4, clock=FakeClock())
        tracker.update(1)
        assert "current=1" in repr(tracker)
        assert "25.00%" in repr(tracker)


class TestProgressReporter:
    """Tests for the status line reporter."""

    def test_format(self):
        """Test the status line layout."""
        clock = FakeClock()
        stream = io.StringIO()
        reporter = ProgressReporter(100, stream=stream, min_interval=10, clock=clock)
        clock.now += 2.0
        reporter(50, 100)
        assert stream.getvalue() == "Progress:  50.00% | Elapsed:   2.00s | ETA:   2.00s\r"

    def test_throttled_between_intervals(self):
        """Test counts between intervals are not printed."""
        stream = io.StringIO()
        reporter = ProgressReporter(100, stream=stream, min_interval=10, clock=FakeClock())
        for current in range(1, 10):
            reporter(current, 100)
        assert stream.getvalue() == ""
        reporter(10, 100)
        assert stream.getvalue().startswith("Progress:  10.00%")

    def test_completion_ends_line(self):
        """Test the final update is printed and terminated with a newline."""
        stream = io.StringIO()
        reporter = ProgressReporter(7, stream=stream, min_interval=512, clock=FakeClock())
        for current in range(1, 8):
            reporter(current, 7)
        output = stream.getvalue()
        assert output.count("Progress:") == 1
        assert "100.00%" in output
        assert output.endswith("\r\n")

    def test_defaults_to_stderr(self, capsys):
        """Test the reporter writes to stderr by default."""
        reporter = ProgressReporter(1, clock=FakeClock())
        reporter(1, 1)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Progress: 100.00%" in captured.err
