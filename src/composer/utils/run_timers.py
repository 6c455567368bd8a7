# src/composer/utils/run_timers.py
import time
from typing import Optional


class RunTimers:
    """
    A simple utility class for measuring elapsed execution time.
    """

    def __init__(self):
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None

    def start(self) -> None:
        """Starts the timer."""
        self._start_time = time.perf_counter()
        self._end_time = None

    def stop(self) -> None:
        """Stops the timer."""
        if self._start_time is not None:
            self._end_time = time.perf_counter()

    @property
    def duration(self) -> float:
        """Returns the elapsed time in seconds; a running timer reports the time so far."""
        if self._start_time is None:
            return 0.0
        if self._end_time is None:
            return time.perf_counter() - self._start_time
        return self._end_time - self._start_time

    @property
    def elapsed_ms(self) -> float:
        return round(self.duration * 1000, 2)

    def __enter__(self) -> "RunTimers":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

    def __repr__(self) -> str:
        return f"<RunTimers duration={self.duration:.4f}s>"
