"""Monitor detection via xrandr."""

from __future__ import annotations

import re
import shlex

import structlog

from .models import DiscoveryResult, ListedMonitor, Monitor, SkippedOutput
from .runner import CommandError, run_command

log = structlog.get_logger()

# WxH+X+Y, anything (rotation, reflection), then the physical size
_GEOMETRY_PATTERN = re.compile(
    r"(\d+)x(\d+)\+(\d+)\+(\d+).*?(\d+)mm x (\d+)mm"
)

_LISTMONITORS_PATTERN = re.compile(r"^(\d+):$")


def connected_outputs(query_output: str) -> list[str]:
    """Names of the outputs reported connected, in query order."""
    names = []
    for line in query_output.splitlines():
        if " connected" in line and "disconnected" not in line:
            fields = line.split()
            if fields:
                names.append(fields[0])
    return names


def parse_monitor(name: str, text: str) -> Monitor | None:
    """Parse the geometry of ``name`` from its xrandr line, or None on a miss."""
    m = _GEOMETRY_PATTERN.search(text)
    if not m:
        return None
    width, height, x, y, physical_width, physical_height = (int(g) for g in m.groups())
    return Monitor(
        name=name,
        width=width,
        height=height,
        physical_width=physical_width,
        physical_height=physical_height,
        x=x,
        y=y,
    )


def discover(tool: str = "xrandr", timeout: float | None = None) -> DiscoveryResult:
    """Detect connected monitors with a resolved geometry.

    Never raises for tool failures: a failed query gives an empty result and
    an output that cannot be resolved ends up in ``skipped``.
    """
    result = DiscoveryResult()
    try:
        query = run_command(f"{tool} --query", timeout=timeout)
    except CommandError as e:
        log.error("xrandr_query_failed", error=str(e))
        return result

    for name in connected_outputs(query):
        grep = shlex.quote(f"{name} connected")
        try:
            line = run_command(f"{tool} | grep -w {grep}", timeout=timeout)
        except CommandError as e:
            log.warning("monitor_skipped", name=name, error=str(e))
            result.skipped.append(SkippedOutput(name, f"lookup failed: {e.reason}"))
            continue

        mon = parse_monitor(name, line)
        if mon is None:
            log.warning("monitor_skipped", name=name, line=line.strip())
            result.skipped.append(SkippedOutput(name, "no geometry in xrandr output"))
            continue
        result.monitors.append(mon)

    log.info(
        "monitors_detected",
        count=len(result.monitors),
        skipped=len(result.skipped),
        monitors=[str(m) for m in result.monitors],
    )
    return result


def parse_listmonitors(output: str) -> list[ListedMonitor]:
    """Parse ``xrandr --listmonitors``.

    Entries are the indented lines, e.g. `` 0: +*HDMI-1 1920/520x1080/290+0+0  HDMI-1``;
    the second field is the name, prefixed with ``+`` (automatic) and ``*``
    (primary) markers which are stripped.
    """
    monitors = []
    for line in output.splitlines():
        if not line.startswith(" "):
            continue
        fields = line.split()
        if len(fields) < 2:
            continue
        m = _LISTMONITORS_PATTERN.match(fields[0])
        index = int(m.group(1)) if m else len(monitors)
        raw = fields[1]
        name = raw.lstrip("+*")
        if not name:
            continue
        monitors.append(ListedMonitor(
            index=index,
            name=name,
            primary="*" in raw[: len(raw) - len(name)],
            automatic=raw.startswith("+"),
            outputs=tuple(fields[3:]),
        ))
    return monitors


def list_monitors(tool: str = "xrandr", timeout: float | None = None) -> list[ListedMonitor]:
    """List the monitors xrandr currently defines. Raises CommandError."""
    output = run_command(f"{tool} --listmonitors", timeout=timeout)
    monitors = parse_listmonitors(output)
    log.debug("monitors_listed", names=[m.name for m in monitors])
    return monitors
