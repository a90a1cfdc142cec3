"""Shared fixtures: a scripted stand-in for xrandr and an isolated config."""

from __future__ import annotations

import os

# Headless test runs use pystray's no-op backend
os.environ.setdefault("PYSTRAY_BACKEND", "dummy")

import pytest
import structlog

from xplit.runner import CommandError

QUERY_OUTPUT = """\
Screen 0: minimum 320 x 200, current 3840 x 1080, maximum 16384 x 16384
HDMI-1 connected primary 1920x1080+0+0 (normal left inverted right x axis y axis) 520mm x 290mm
   1920x1080     60.00*+  50.00    59.94
   1280x720      60.00    50.00
DP-1 connected 1920x1080+1920+0 (normal left inverted right x axis y axis) 600mm x 340mm
   1920x1080     60.00*+
DP-2 disconnected (normal left inverted right x axis y axis)
"""

HDMI_LINE = (
    "HDMI-1 connected primary 1920x1080+0+0 "
    "(normal left inverted right x axis y axis) 520mm x 290mm\n"
)
DP_LINE = (
    "DP-1 connected 1920x1080+1920+0 "
    "(normal left inverted right x axis y axis) 600mm x 340mm\n"
)


class FakeXrandr:
    """Replays canned output per command line and records what was run."""

    def __init__(self) -> None:
        self.outputs: dict[str, str] = {}
        self.failures: dict[str, str] = {}
        self.commands: list[str] = []

    def __call__(self, command: str, timeout: float | None = None) -> str:
        self.commands.append(command)
        if command in self.failures:
            raise CommandError(
                command, "exit status 1", returncode=1, stderr=self.failures[command]
            )
        return self.outputs.get(command, "")

    def with_two_monitors(self) -> "FakeXrandr":
        self.outputs["xrandr --query"] = QUERY_OUTPUT
        self.outputs["xrandr | grep -w 'HDMI-1 connected'"] = HDMI_LINE
        self.outputs["xrandr | grep -w 'DP-1 connected'"] = DP_LINE
        return self


@pytest.fixture
def xrandr(monkeypatch) -> FakeXrandr:
    """Route every xrandr call through a FakeXrandr."""
    fake = FakeXrandr()
    monkeypatch.setattr("xplit.xrandr.run_command", fake)
    monkeypatch.setattr("xplit.display.run_command", fake)
    return fake


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep a developer's own config.toml out of the tests."""
    monkeypatch.delenv("XPLIT_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    yield
    structlog.reset_defaults()
