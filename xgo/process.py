"""Synchronous external process execution.

Every external collaborator (docker version, images, pull, run) goes
through the two helpers here:
- run_command(): stream output live to the caller's stdout/stderr
- capture_command(): collect stdout for inspection
"""

from __future__ import annotations

import logging
import shlex
import subprocess

from xgo.types import XgoError

logger = logging.getLogger(__name__)


class CommandNotFoundError(XgoError):
    """Raised when the executable cannot be started."""

    def __init__(self, command: str, reason: str) -> None:
        super().__init__(
            f"Failed to execute {command}: {reason}", code="command_not_found"
        )
        self.command = command


class CommandFailedError(XgoError):
    """Raised when a captured command exits non-zero."""

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        message = f"{command} exited with status {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message, code="command_failed")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


def run_command(cmd: list[str]) -> int:
    """Execute a command, attaching it to the current stdout and stderr.

    Args:
        cmd: Command and arguments.

    Returns:
        The process exit code.

    Raises:
        CommandNotFoundError: If the process cannot be started.
    """
    logger.debug("Executing: %s", shlex.join(cmd))
    try:
        result = subprocess.run(cmd, check=False)
    except OSError as e:
        raise CommandNotFoundError(cmd[0], str(e)) from e
    logger.debug("%s exited with status %d", cmd[0], result.returncode)
    return result.returncode


def capture_command(cmd: list[str]) -> str:
    """Execute a command and return its standard output.

    Args:
        cmd: Command and arguments.

    Returns:
        Captured stdout text.

    Raises:
        CommandNotFoundError: If the process cannot be started.
        CommandFailedError: If the process exits non-zero.
    """
    logger.debug("Capturing: %s", shlex.join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except OSError as e:
        raise CommandNotFoundError(cmd[0], str(e)) from e
    if result.returncode != 0:
        raise CommandFailedError(shlex.join(cmd), result.returncode, result.stderr or "")
    return result.stdout or ""


__all__ = [
    "CommandFailedError",
    "CommandNotFoundError",
    "capture_command",
    "run_command",
]
