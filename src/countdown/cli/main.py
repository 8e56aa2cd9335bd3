"""CLI entry point for countdown.

Uses Click to expose the ``countdown`` command group.  Each command builds a
:class:`TimerController`, forwards user intents into it and renders whatever
state it exposes.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Callable, Optional, TypeVar

import click

import countdown
from countdown.core.alert import make_alert
from countdown.core.clock import ThreadingClock
from countdown.core.settings import ALERT_KINDS, ConfigError, Settings
from countdown.core.timer import TimerController, TimerStatus

T = TypeVar("T")

logger = logging.getLogger(__name__)

_SHELL_HELP = "commands: start, pause, reset, min TEXT, sec TEXT, status, quit"


def _run(action: Callable[[], T]) -> T:
    """Execute *action*, converting ``ConfigError`` to a CLI error.

    On ``ConfigError`` the message is printed to stderr and the process
    exits with code 1.
    """
    try:
        return action()
    except ConfigError as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)


def _status_line(controller: TimerController) -> str:
    return f"{controller.headline()} [{controller.status().value}]"


@click.group()
@click.version_option(version=countdown.__version__, prog_name="countdown")
@click.option("-v", "--verbose", is_flag=True, help="Log state transitions.")
def cli(verbose: bool) -> None:
    """countdown: a minutes-and-seconds countdown timer."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("minutes", required=False)
@click.argument("seconds", required=False)
def preview(minutes: Optional[str], seconds: Optional[str]) -> None:
    """Show how MINUTES and SECONDS would be read, without starting."""
    settings = _run(Settings.load)
    controller = TimerController(ThreadingClock(), make_alert("silent"))
    controller.edit_minutes(settings.minutes if minutes is None else minutes)
    controller.edit_seconds(settings.seconds if seconds is None else seconds)

    click.echo(controller.display_text())
    if not controller.can_start():
        click.echo("Nothing to count down")
        sys.exit(1)


@cli.command()
@click.argument("minutes", required=False)
@click.argument("seconds", required=False)
@click.option("--alert", type=click.Choice(ALERT_KINDS), help="Completion cue.")
def run(minutes: Optional[str], seconds: Optional[str], alert: Optional[str]) -> None:
    """Count down MINUTES and SECONDS, re-rendering every second."""
    settings = _run(Settings.load)
    sink = _run(lambda: make_alert(alert or settings.alert))
    done = threading.Event()

    def render(controller: TimerController) -> None:
        status = controller.status()
        if status == TimerStatus.RUNNING:
            click.echo(f"\r{controller.display_text()}", nl=False)
        elif status == TimerStatus.FINISHED:
            click.echo(f"\r{controller.headline()}")
            done.set()

    controller = TimerController(ThreadingClock(), sink, on_change=render)
    controller.edit_minutes(settings.minutes if minutes is None else minutes)
    controller.edit_seconds(settings.seconds if seconds is None else seconds)
    if not controller.can_start():
        click.echo("Nothing to count down", err=True)
        sys.exit(1)

    controller.start()
    try:
        while not done.wait(0.1):
            pass
    except KeyboardInterrupt:
        controller.reset()
        click.echo("\nTimer reset", err=True)
        sys.exit(130)


@cli.command()
@click.option("--alert", type=click.Choice(ALERT_KINDS), help="Completion cue.")
def shell(alert: Optional[str]) -> None:
    """Drive a timer interactively, one command per line."""
    settings = _run(Settings.load)
    sink = _run(lambda: make_alert(alert or settings.alert))

    def announce(controller: TimerController) -> None:
        if controller.status() == TimerStatus.FINISHED:
            click.echo(controller.headline())

    controller = TimerController(ThreadingClock(), sink, on_change=announce)
    controller.edit_minutes(settings.minutes)
    controller.edit_seconds(settings.seconds)

    click.echo(_SHELL_HELP)
    for raw in click.get_text_stream("stdin"):
        command, _, argument = raw.rstrip("\n").strip().partition(" ")
        if command in ("quit", "exit"):
            break
        if command == "start":
            controller.start()
        elif command == "pause":
            controller.pause()
        elif command == "reset":
            controller.reset()
        elif command == "min":
            controller.edit_minutes(argument.strip())
        elif command == "sec":
            controller.edit_seconds(argument.strip())
        elif command == "status":
            pass
        elif command:
            click.echo(f"Unknown command: {command}", err=True)
            continue
        else:
            continue
        click.echo(_status_line(controller))

    controller.reset()


@cli.group()
def config() -> None:
    """Show or change stored preferences."""


@config.command("show")
def config_show() -> None:
    """Print the stored preferences."""
    settings = _run(Settings.load)
    click.echo(f"minutes = {settings.minutes}")
    click.echo(f"seconds = {settings.seconds}")
    click.echo(f"alert = {settings.alert}")


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str) -> None:
    """Store VALUE for KEY (minutes, seconds or alert)."""
    settings = _run(Settings.load)
    _run(lambda: settings.set(key, value))
    path = settings.save()
    logger.debug("wrote %s", path)
    click.echo(f"{key} = {value}")
