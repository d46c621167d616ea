"""
Cooperative cancellation for dispatch calls.

A token is checked before every provider call and before every retry sleep.
Sleeping waits on the token, so cancel() wakes a sleeping dispatch immediately.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from search_dispatch.providers.exceptions import DispatchCancelledError


class CancellationToken:
    def __init__(self, deadline_s: Optional[float] = None, clock: Callable[[], float] = time.monotonic) -> None:
        self._event = threading.Event()
        self._clock = clock
        self._deadline = clock() + deadline_s if deadline_s is not None else None

    @classmethod
    def with_deadline(cls, seconds: float) -> "CancellationToken":
        return cls(deadline_s=seconds)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def remaining(self) -> Optional[float]:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._clock())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise DispatchCancelledError("Search dispatch cancelled")
        if self.expired:
            raise DispatchCancelledError("Search dispatch deadline exceeded")

    def sleep(self, seconds: float) -> None:
        """Sleep up to seconds, returning early on cancel; raises if cancelled or past deadline."""
        self.raise_if_cancelled()
        remaining = self.remaining()
        if remaining is not None and seconds > remaining:
            # The deadline would pass mid-sleep; fail now rather than sleeping into it
            raise DispatchCancelledError("Search dispatch deadline exceeded")
        self._event.wait(seconds)
        self.raise_if_cancelled()
