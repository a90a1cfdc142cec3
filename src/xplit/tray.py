"""System tray icon with split/reset menus for every connected monitor."""

from __future__ import annotations

from typing import Callable

import pystray
import structlog
from PIL import Image, ImageDraw

from .config import Config
from .display import reset_all, reset_one, split_monitor
from .models import DiscoveryResult
from .runner import CommandError
from .xrandr import discover

log = structlog.get_logger()

_ICON_SIZE = 64


def _create_icon(bg_color: tuple = (20, 20, 24, 255),
                 pane_color: tuple = (90, 160, 230, 255)) -> Image.Image:
    """Dark rounded square with two panes side by side."""
    size = _ICON_SIZE
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.rounded_rectangle([0, 0, size - 1, size - 1], radius=size // 6, fill=bg_color)
    margin = size // 6
    gap = size // 16
    mid = size // 2
    draw.rectangle([margin, margin, mid - gap, size - margin], fill=pane_color)
    draw.rectangle([mid + gap, margin, size - margin, size - margin], fill=pane_color)
    return img


class TrayApp:
    def __init__(self, config: Config) -> None:
        self.config = config
        self._icon: pystray.Icon | None = None
        self._discovery = DiscoveryResult()

    def run(self) -> None:
        self._discovery = self._discover()
        self._icon = pystray.Icon(
            "xplit",
            icon=_create_icon(),
            title="Xplit",
            menu=self._build_menu(),
        )
        self._icon.run()

    def _discover(self) -> DiscoveryResult:
        return discover(self.config.xrandr.tool, self.config.xrandr.timeout_seconds)

    def _build_menu(self) -> pystray.Menu:
        items = [
            pystray.MenuItem(mon.name, self._monitor_menu(mon.name))
            for mon in self._discovery.monitors
        ]
        if not items:
            items.append(pystray.MenuItem("No monitors found", None, enabled=False))
        return pystray.Menu(
            *items,
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Reset all", self._on_reset_all),
            pystray.MenuItem("Refresh", self._on_refresh),
            pystray.MenuItem("Quit", self._on_quit),
        )

    def _monitor_menu(self, name: str) -> pystray.Menu:
        splits = [
            pystray.MenuItem(f"Split {p}%", self._action(self._on_split, name, p))
            for p in self.config.split.presets
        ]
        return pystray.Menu(
            *splits,
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Reset", self._action(self._on_reset, name)),
        )

    @staticmethod
    def _action(handler: Callable, *args) -> Callable:
        # pystray passes (icon, item) and rejects callables with extra parameters
        return lambda icon, item: handler(*args)

    def _refresh(self) -> None:
        self._discovery = self._discover()
        if self._icon is None:
            return
        self._icon.menu = self._build_menu()
        self._icon.update_menu()

    def _notify(self, message: str) -> None:
        if self._icon is not None and self._icon.HAS_NOTIFICATION:
            self._icon.notify(message, "Xplit")

    def _run_action(self, action: str, func: Callable, *args) -> None:
        """Run a mutating action and refresh the menu whatever its outcome."""
        try:
            func(*args)
        except (CommandError, LookupError, ValueError) as e:
            log.error("tray_action_failed", action=action, error=str(e))
            self._notify(f"{action} failed: {e}")
        finally:
            self._refresh()

    def _on_split(self, name: str, percent: int) -> None:
        self._run_action(
            f"Split {name}", split_monitor, name, percent,
            self.config.xrandr.tool, self.config.xrandr.timeout_seconds,
        )

    def _on_reset(self, name: str) -> None:
        self._run_action(
            f"Reset {name}", reset_one, name,
            self.config.xrandr.tool, self.config.xrandr.timeout_seconds,
        )

    def _on_reset_all(self, icon=None, item=None) -> None:
        self._run_action(
            "Reset all", reset_all,
            self.config.xrandr.tool, self.config.xrandr.timeout_seconds,
        )

    def _on_refresh(self, icon=None, item=None) -> None:
        self._refresh()

    def _on_quit(self, icon=None, item=None) -> None:
        if self._icon is not None:
            self._icon.stop()
