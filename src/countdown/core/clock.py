"""Clock — a periodic tick source the timer subscribes to."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class Subscription:
    """Handle for one active tick stream."""

    def __init__(self, callback: TickCallback) -> None:
        self.callback = callback
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def wait(self, timeout: float) -> bool:
        """Block up to *timeout* seconds; return True if cancelled meanwhile."""
        return self._cancelled.wait(timeout)


class Clock(Protocol):
    """Anything that can deliver one callback per elapsed interval."""

    def subscribe(self, callback: TickCallback) -> Subscription: ...

    def unsubscribe(self, handle: Subscription) -> None: ...


class ThreadingClock:
    """Deliver ticks from a daemon thread per subscription.

    Deadlines are computed from ``time.monotonic()`` so a slow callback does
    not make the stream drift.  Cancellation is synchronous: once
    :meth:`unsubscribe` returns, the callback is never invoked again for that
    handle (a callback already in flight may still complete).
    """

    def __init__(self, interval: float = 1.0) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._interval = interval

    def subscribe(self, callback: TickCallback) -> Subscription:
        handle = Subscription(callback)
        thread = threading.Thread(target=self._run, args=(handle,), daemon=True)
        thread.start()
        logger.debug("clock subscription started (interval=%.3fs)", self._interval)
        return handle

    def unsubscribe(self, handle: Subscription) -> None:
        if not handle.cancelled:
            logger.debug("clock subscription cancelled")
        handle.cancel()

    def _run(self, handle: Subscription) -> None:
        deadline = time.monotonic()
        while True:
            deadline += self._interval
            if handle.wait(max(deadline - time.monotonic(), 0.0)):
                return
            handle.callback()
