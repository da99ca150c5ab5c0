"""
Cancellation and deadline support for remix runs.

A CancellationToken is handed to every outbound call so a caller can stop a
run explicitly or give it a wall-clock budget.
"""

import threading
import time
from typing import Callable, Optional

from ..exceptions import RemixCancelledError


class CancellationToken:
    """
    Cooperative cancellation flag with an optional deadline.

    Example:
        >>> token = CancellationToken(deadline_seconds=600)
        >>> token.timeout_for(30.0)  # per-request timeout capped by the deadline
        30.0
    """

    def __init__(self, deadline_seconds: Optional[float] = None, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize the token.

        Args:
            deadline_seconds: Optional budget measured from now
            clock: Monotonic clock, injectable for tests
        """
        self._event = threading.Event()
        self._clock = clock
        self._deadline = clock() + deadline_seconds if deadline_seconds else None

    def cancel(self) -> None:
        """Request cancellation; in-flight requests finish, new ones are refused."""
        self._event.set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._clock())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    @property
    def cancelled(self) -> bool:
        """Check if the run was cancelled or ran out of time."""
        return self._event.is_set() or self.expired

    def raise_if_cancelled(self, operation: str) -> None:
        """
        Raise if no further work may start.

        Raises:
            RemixCancelledError: If cancelled or past the deadline
        """
        if self._event.is_set():
            raise RemixCancelledError(f"Cancelled before {operation}")
        if self.expired:
            raise RemixCancelledError(f"Deadline exceeded before {operation}")

    def timeout_for(self, default: float) -> float:
        """Per-request timeout: the default, capped by the time left."""
        remaining = self.remaining()
        if remaining is None:
            return default
        return min(default, remaining)


__all__ = ["CancellationToken"]
