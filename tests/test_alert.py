"""Tests for the alert sinks."""

import pytest

from countdown.core.alert import BellAlert, SilentAlert, make_alert
from countdown.core.settings import ConfigError


class TestAlerts:
    """Alert sinks track play/stop and BellAlert rings the bell."""

    def test_silent_alert_tracks_calls(self) -> None:
        alert = SilentAlert()
        alert.play()
        assert alert.playing is True
        alert.stop_and_rewind()
        assert alert.playing is False
        assert (alert.play_count, alert.stop_count) == (1, 1)

    def test_bell_alert_rings(self, capsys: pytest.CaptureFixture[str]) -> None:
        alert = BellAlert()
        alert.play()
        assert "\a" in capsys.readouterr().err
        alert.stop_and_rewind()
        assert alert.playing is False

    def test_make_alert(self) -> None:
        assert isinstance(make_alert("bell"), BellAlert)
        assert type(make_alert("silent")) is SilentAlert

    def test_make_alert_unknown_kind(self) -> None:
        with pytest.raises(ConfigError):
            make_alert("siren")
