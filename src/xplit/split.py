"""Split geometry for a monitor divided into a left and a right virtual monitor."""

from __future__ import annotations

from .models import Monitor, VirtualMonitorSpec


def virtual_names(name: str) -> tuple[str, str]:
    """Names of the left and right virtual monitors carved out of ``name``."""
    return f"{name}-0", f"{name}-1"


def split(
    monitor: Monitor, percent: int | float
) -> tuple[VirtualMonitorSpec, VirtualMonitorSpec]:
    """Split ``monitor`` at ``percent`` of its width.

    Pixel and physical widths of both halves always add up to the
    monitor's; the rounding remainder goes to the right half.
    """
    percent = int(percent)
    if not 0 <= percent <= 100:
        raise ValueError(f"split percent must be 0-100, got {percent}")
    if monitor.width <= 0:
        raise ValueError(f"cannot split {monitor.name}: width is {monitor.width}")

    left_width = monitor.width * percent // 100
    right_width = monitor.width - left_width
    left_physical = monitor.physical_width * left_width // monitor.width
    right_physical = monitor.physical_width - left_physical

    left_name, right_name = virtual_names(monitor.name)
    left = VirtualMonitorSpec(
        name=left_name,
        width=left_width,
        height=monitor.height,
        physical_width=left_physical,
        physical_height=monitor.physical_height,
        x=monitor.x,
        y=monitor.y,
        source=monitor.name,
    )
    right = VirtualMonitorSpec(
        name=right_name,
        width=right_width,
        height=monitor.height,
        physical_width=right_physical,
        physical_height=monitor.physical_height,
        x=monitor.x + left_width,
        y=monitor.y,
        source=None,
    )
    return left, right
