"""
Run Context Module - Shared cancellation, timeout and progress plumbing.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .errors import CancellationRequested
from .observer import GridObserver, NullObserver


@dataclass
class RunContext:
    """
    Context passed to solvers, the obstacle controller and the detour analyzer.

    Operations check it between iterations only, so a cancelled run never
    stops half way through a single iteration.

    Attributes:
        cancel_flag: Set from any thread to request a cooperative abort
        timeout_sec: Maximum run time in seconds, None for no limit
        start_time: When the run started
        progress_callback: Optional callback for (percent, message) updates
        observer: Receives checkpoint events (no-op by default)
    """
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[float, str], None]] = None
    observer: GridObserver = field(default_factory=NullObserver)

    def is_cancelled(self) -> bool:
        """
        Check if cancellation requested or timeout exceeded.

        Returns:
            True if the current operation should stop
        """
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and time.time() - self.start_time > self.timeout_sec:
            return True
        return False

    def check_cancelled(self) -> None:
        """
        Raise if the run should stop.

        Raises:
            CancellationRequested: If cancelled or timed out
        """
        if self.is_cancelled():
            if self.cancel_flag.is_set():
                raise CancellationRequested("Cancelled by caller")
            raise CancellationRequested(f"Timed out after {self.timeout_sec:.1f}s")

    def cancel(self) -> None:
        self.cancel_flag.set()

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)

    def elapsed_time(self) -> float:
        return time.time() - self.start_time

    def remaining_time(self) -> Optional[float]:
        """Seconds left before timeout (negative if exceeded), None without a timeout."""
        if self.timeout_sec is None:
            return None
        return self.timeout_sec - self.elapsed_time()
