"""Shared fakes for the Clock and AlertSink collaborators."""

from __future__ import annotations

from typing import Callable, List

import pytest

from countdown.core.alert import SilentAlert
from countdown.core.clock import Subscription
from countdown.core.timer import TimerController


class ManualClock:
    """A clock that only ticks when the test says so.

    Every callback ever handed to :meth:`subscribe` is remembered in
    ``callbacks`` so tests can replay a stale one after cancellation.
    """

    def __init__(self) -> None:
        self.active: List[Subscription] = []
        self.callbacks: List[Callable[[], None]] = []
        self.subscribe_calls = 0
        self.unsubscribe_calls = 0

    def subscribe(self, callback: Callable[[], None]) -> Subscription:
        self.subscribe_calls += 1
        handle = Subscription(callback)
        self.active.append(handle)
        self.callbacks.append(callback)
        return handle

    def unsubscribe(self, handle: Subscription) -> None:
        self.unsubscribe_calls += 1
        handle.cancel()
        self.active.remove(handle)

    def advance(self, seconds: int = 1) -> None:
        """Deliver *seconds* ticks to every live subscription."""
        for _ in range(seconds):
            for handle in list(self.active):
                handle.callback()


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def alert() -> SilentAlert:
    return SilentAlert()


@pytest.fixture()
def controller(clock: ManualClock, alert: SilentAlert) -> TimerController:
    return TimerController(clock, alert)
