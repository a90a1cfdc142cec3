"""Data models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Monitor:
    """A connected output with a resolved geometry, as xrandr reported it."""

    name: str
    width: int
    height: int
    physical_width: int
    physical_height: int
    x: int
    y: int

    def __str__(self) -> str:
        return (
            f"{self.name}: {self.width}x{self.height}+{self.x}+{self.y} "
            f"({self.physical_width}mm x {self.physical_height}mm)"
        )


@dataclass(frozen=True)
class VirtualMonitorSpec:
    """One side of a split. ``source`` is None for an output-less monitor."""

    name: str
    width: int
    height: int
    physical_width: int
    physical_height: int
    x: int
    y: int
    source: str | None = None

    @property
    def geometry(self) -> str:
        """Geometry token accepted by ``xrandr --setmonitor``."""
        return (
            f"{self.width}/{self.physical_width}"
            f"x{self.height}/{self.physical_height}"
            f"+{self.x}+{self.y}"
        )


@dataclass(frozen=True)
class SkippedOutput:
    name: str
    reason: str


@dataclass
class DiscoveryResult:
    monitors: list[Monitor] = field(default_factory=list)
    skipped: list[SkippedOutput] = field(default_factory=list)

    def names(self) -> list[str]:
        return [m.name for m in self.monitors]

    def find(self, name: str) -> Monitor | None:
        for mon in self.monitors:
            if mon.name == name:
                return mon
        return None


@dataclass(frozen=True)
class ListedMonitor:
    """An entry of ``xrandr --listmonitors``."""

    index: int
    name: str
    primary: bool = False
    automatic: bool = False
    outputs: tuple[str, ...] = ()
