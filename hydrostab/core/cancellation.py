"""
core/cancellation.py - Cooperative cancellation

Long sweeps (many drafts, fine heel grids, dense offset tables) check a
CancellationToken between iterations. Cancelling the token, or passing
its deadline, makes the next check raise CancellationSignal; no partial
result is returned.
"""

from __future__ import annotations
from typing import Optional
import threading
import time

from hydrostab.errors import CancellationSignal


class CancellationToken:
    """
    Thread-safe cancellation flag with an optional deadline.

    Usage:
        token = CancellationToken.with_timeout(2.0)
        calculator.compute_table(geometry, loadcase, drafts, cancellation=token)

        # from another thread
        token.cancel()
    """

    def __init__(self, deadline: Optional[float] = None):
        # deadline is a time.monotonic() timestamp
        self._event = threading.Event()
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """Token that expires `seconds` from now."""
        if seconds < 0:
            raise ValueError(f"Timeout must be non-negative: {seconds}")
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def is_expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def raise_if_cancelled(self, stage: str = "") -> None:
        """Raise CancellationSignal if cancelled or past the deadline."""
        if self._event.is_set():
            raise CancellationSignal("cancelled", stage)
        if self.is_expired:
            raise CancellationSignal("timed out", stage)


def check_cancelled(token: Optional[CancellationToken], stage: str = "") -> None:
    """Check an optional token."""
    if token is not None:
        token.raise_if_cancelled(stage)
