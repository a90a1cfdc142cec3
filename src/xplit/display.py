"""Create and delete xrandr virtual monitors."""

from __future__ import annotations

import structlog

from .models import Monitor, VirtualMonitorSpec
from .runner import CommandError, run_command
from .split import split, virtual_names
from .xrandr import discover, list_monitors

log = structlog.get_logger()


def _setmonitor(spec: VirtualMonitorSpec, tool: str, timeout: float | None) -> None:
    source = spec.source or "none"
    run_command(f"{tool} --setmonitor {spec.name} {spec.geometry} {source}", timeout=timeout)


def _delmonitor(name: str, tool: str, timeout: float | None) -> None:
    run_command(f"{tool} --delmonitor {name}", timeout=timeout)


def apply_split(
    monitor: Monitor,
    left: VirtualMonitorSpec,
    right: VirtualMonitorSpec,
    tool: str = "xrandr",
    timeout: float | None = None,
) -> None:
    """Create the left virtual monitor, then the right one.

    The right one is only attempted once the left one exists. Raises
    CommandError from the first failing command.
    """
    log.info("applying_split", monitor=monitor.name, left=left.geometry, right=right.geometry)
    _setmonitor(left, tool, timeout)
    _setmonitor(right, tool, timeout)
    log.info("split_applied", monitor=monitor.name)


def reset_one(name: str, tool: str = "xrandr", timeout: float | None = None) -> None:
    """Delete both virtual monitors of ``name``.

    Both deletions are attempted; the first failure is raised afterwards.
    """
    errors: list[CommandError] = []
    for virtual in virtual_names(name):
        try:
            _delmonitor(virtual, tool, timeout)
        except CommandError as e:
            log.warning("delmonitor_failed", name=virtual, error=str(e))
            errors.append(e)
    if errors:
        raise errors[0]
    log.info("monitor_reset", monitor=name)


def reset_all(tool: str = "xrandr", timeout: float | None = None) -> list[str]:
    """Delete every listed monitor, stopping at the first failure.

    Returns the names deleted.
    """
    deleted = []
    for listed in list_monitors(tool, timeout):
        _delmonitor(listed.name, tool, timeout)
        deleted.append(listed.name)
    log.info("all_monitors_reset", deleted=deleted)
    return deleted


def split_monitor(
    name: str,
    percent: int | float,
    tool: str = "xrandr",
    timeout: float | None = None,
) -> tuple[VirtualMonitorSpec, VirtualMonitorSpec]:
    """Discover ``name``, split it at ``percent`` and apply the result."""
    monitor = discover(tool, timeout).find(name)
    if monitor is None:
        raise LookupError(f"monitor not connected or without geometry: {name}")
    left, right = split(monitor, percent)
    apply_split(monitor, left, right, tool, timeout)
    return left, right
