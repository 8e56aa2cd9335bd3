"""Timer core — the countdown state machine."""

from __future__ import annotations

import dataclasses
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Callable, Optional

from countdown.core.alert import FINISHED_MESSAGE, AlertSink
from countdown.core.clock import Clock, Subscription
from countdown.core.fields import (
    DEFAULT_FIELD,
    derive_duration,
    format_time,
    minutes_value,
    seconds_value,
)

logger = logging.getLogger(__name__)


class TimerStatus(Enum):
    """Possible states of the timer."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass
class TimerState:
    """Everything the timer knows.

    ``minutes_field`` and ``seconds_field`` hold raw text verbatim; they only
    determine ``remaining_seconds`` while the status is not RUNNING.
    ``subscription`` is set exactly when the status is RUNNING.
    """

    remaining_seconds: int = 0
    status: TimerStatus = TimerStatus.IDLE
    minutes_field: str = DEFAULT_FIELD
    seconds_field: str = DEFAULT_FIELD
    subscription: Optional[Subscription] = None
    generation: int = 0


Listener = Callable[["TimerController"], None]


class TimerController:
    """Owns a :class:`TimerState` and mutates it in response to user intents.

    Commands never fail: unparsable text counts as 0, out-of-range values are
    clamped, and commands that make no sense in the current state are no-ops.
    Ticks arrive from *clock* on whatever thread it uses, so every event is
    serialized through one re-entrant lock.
    """

    def __init__(
        self,
        clock: Clock,
        alert: AlertSink,
        on_change: Listener | None = None,
    ) -> None:
        self._clock = clock
        self._alert = alert
        self._on_change = on_change
        self._state = TimerState()
        self._lock = threading.RLock()

    # -- commands ------------------------------------------------------------

    def start(self) -> None:
        """Begin or resume the countdown.

        From IDLE the duration is taken from the fields; from PAUSED the
        countdown resumes from the frozen remaining time.
        """
        with self._lock:
            state = self._state
            if state.status == TimerStatus.IDLE:
                duration = derive_duration(state.minutes_field, state.seconds_field)
                if duration <= 0:
                    logger.debug("start ignored: nothing to count down")
                    return
                state.remaining_seconds = duration
            elif state.status == TimerStatus.PAUSED:
                if state.remaining_seconds <= 0:
                    logger.debug("start ignored: paused with nothing remaining")
                    return
            else:
                logger.debug("start ignored while %s", state.status.value)
                return

            logger.info("countdown started at %s", format_time(state.remaining_seconds))
            self._subscribe()
            self._notify()

    def pause(self) -> None:
        """Freeze a running countdown."""
        with self._lock:
            if self._state.status != TimerStatus.RUNNING:
                logger.debug("pause ignored while %s", self._state.status.value)
                return
            self._unsubscribe()
            self._state.status = TimerStatus.PAUSED
            logger.info("countdown paused at %s", self.display_text())
            self._notify()

    def reset(self) -> None:
        """Return to the initial state from anywhere, silencing any alert."""
        with self._lock:
            self._unsubscribe()
            self._alert.stop_and_rewind()
            generation = self._state.generation
            self._state = TimerState(generation=generation)
            logger.info("timer reset")
            self._notify()

    def edit_minutes(self, text: str) -> None:
        with self._lock:
            self._state.minutes_field = text
            self._after_edit()

    def edit_seconds(self, text: str) -> None:
        with self._lock:
            self._state.seconds_field = text
            self._after_edit()

    def tick(self) -> None:
        """Advance a running countdown by one second."""
        with self._lock:
            self._advance(self._state.generation)

    # -- read accessors ------------------------------------------------------

    def display_text(self) -> str:
        return format_time(self._state.remaining_seconds)

    def status(self) -> TimerStatus:
        return self._state.status

    def remaining_seconds(self) -> int:
        return self._state.remaining_seconds

    def minutes_field(self) -> str:
        return self._state.minutes_field

    def seconds_field(self) -> str:
        return self._state.seconds_field

    def can_start(self) -> bool:
        state = self._state
        return (
            state.remaining_seconds > 0
            or minutes_value(state.minutes_field) > 0
            or seconds_value(state.seconds_field) > 0
        )

    def should_show_reset(self) -> bool:
        state = self._state
        return (
            state.status == TimerStatus.RUNNING
            or state.remaining_seconds > 0
            or state.status == TimerStatus.FINISHED
            or self.can_start()
        )

    def can_pause(self) -> bool:
        return self._state.status == TimerStatus.RUNNING

    def shows_start(self) -> bool:
        return self._state.status not in (TimerStatus.RUNNING, TimerStatus.FINISHED)

    def fields_editable(self) -> bool:
        """Whether the input fields should accept typing (not while running)."""
        return self._state.status != TimerStatus.RUNNING

    def headline(self) -> str:
        """The big line of the display: the countdown, or the finished message."""
        if self._state.status == TimerStatus.FINISHED:
            return FINISHED_MESSAGE
        return self.display_text()

    def has_subscription(self) -> bool:
        return self._state.subscription is not None

    def snapshot(self) -> TimerState:
        """Return a detached copy of the current state for renderers."""
        with self._lock:
            return dataclasses.replace(self._state, subscription=None)

    # -- private helpers -----------------------------------------------------

    def _after_edit(self) -> None:
        """Re-derive remaining_seconds from the fields when they are authoritative."""
        state = self._state
        if state.status != TimerStatus.RUNNING:
            state.remaining_seconds = derive_duration(state.minutes_field, state.seconds_field)
        else:
            logger.debug("edit recorded without effect while %s", state.status.value)
        self._notify()

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            self._advance(generation)

    def _advance(self, generation: int) -> None:
        state = self._state
        if state.status != TimerStatus.RUNNING or generation != state.generation:
            logger.debug("stale tick discarded")
            return

        if state.remaining_seconds > 1:
            state.remaining_seconds -= 1
        else:
            state.remaining_seconds = 0
            self._unsubscribe()
            state.status = TimerStatus.FINISHED
            logger.info("countdown finished")
            self._alert.play()
        self._notify()

    def _subscribe(self) -> None:
        """Acquire the single tick stream and enter RUNNING."""
        self._unsubscribe()
        state = self._state
        state.generation += 1
        state.subscription = self._clock.subscribe(partial(self._on_tick, state.generation))
        state.status = TimerStatus.RUNNING

    def _unsubscribe(self) -> None:
        """Release the tick stream, if any; later ticks from it are stale."""
        state = self._state
        if state.subscription is None:
            return
        self._clock.unsubscribe(state.subscription)
        state.subscription = None
        state.generation += 1

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
