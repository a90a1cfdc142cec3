"""Synchronous shell command execution."""

from __future__ import annotations

import subprocess

import structlog

log = structlog.get_logger()


class CommandError(RuntimeError):
    """An external command exited non-zero, could not start, or timed out."""

    def __init__(
        self,
        command: str,
        reason: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = command
        self.reason = reason
        self.returncode = returncode
        self.stderr = stderr
        msg = f"{command!r} failed: {reason}"
        if stderr.strip():
            msg += f": {stderr.strip()}"
        super().__init__(msg)


def run_command(command: str, timeout: float | None = None) -> str:
    """Run ``command`` through the shell and return its stdout.

    Raises CommandError on a non-zero exit status, a launch failure or an
    expired timeout. Stdout of a failed command is discarded.
    """
    log.info("running_command", command=command)
    try:
        result = subprocess.run(
            command,
            shell=True,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        stderr = e.stderr or ""
        if isinstance(stderr, bytes):
            stderr = stderr.decode(errors="replace")
        log.error("command_failed", command=command, error="timeout", timeout=timeout)
        raise CommandError(command, f"timed out after {timeout}s", stderr=stderr) from e
    except OSError as e:
        log.error("command_failed", command=command, error=str(e))
        raise CommandError(command, str(e)) from e

    if result.returncode != 0:
        log.error(
            "command_failed",
            command=command,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
        raise CommandError(
            command,
            f"exit status {result.returncode}",
            returncode=result.returncode,
            stderr=result.stderr,
        )

    if result.stderr:
        log.debug("command_stderr", command=command, stderr=result.stderr)
    log.debug("command_finished", command=command)
    return result.stdout
