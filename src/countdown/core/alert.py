"""Alert sinks that fire the completion cue."""

from __future__ import annotations

import logging
from typing import Protocol

import click

from countdown.core.settings import ALERT_KINDS, ConfigError

logger = logging.getLogger(__name__)

FINISHED_MESSAGE = "Time's Up!"


class AlertSink(Protocol):
    def play(self) -> None: ...

    def stop_and_rewind(self) -> None: ...


class SilentAlert:
    """Tracks play/stop calls without producing any output."""

    def __init__(self) -> None:
        self.playing = False
        self.play_count = 0
        self.stop_count = 0

    def play(self) -> None:
        self.playing = True
        self.play_count += 1

    def stop_and_rewind(self) -> None:
        self.playing = False
        self.stop_count += 1


class BellAlert(SilentAlert):
    """Rings the terminal bell on stderr."""

    def play(self) -> None:
        super().play()
        logger.info("alert playing")
        click.echo("\a", err=True, nl=False)

    def stop_and_rewind(self) -> None:
        if self.playing:
            logger.info("alert silenced")
        super().stop_and_rewind()


def make_alert(kind: str) -> SilentAlert:
    """Build the alert sink named *kind* (``bell`` or ``silent``)."""
    if kind == "bell":
        return BellAlert()
    if kind == "silent":
        return SilentAlert()
    raise ConfigError(f"alert must be one of {', '.join(ALERT_KINDS)}, got {kind!r}")
