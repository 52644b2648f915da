"""Docker installation probe."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from xgo.process import CommandNotFoundError, run_command
from xgo.types import XgoError

if TYPE_CHECKING:
    from xgo.config import Settings

logger = logging.getLogger(__name__)


class DockerUnavailableError(XgoError):
    """Raised when docker is not installed or not responding."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="docker_unavailable")


def check_docker(settings: Settings) -> None:
    """Check that a docker installation can be found and is functional.

    Runs ``docker version`` with its output streamed to the terminal.

    Raises:
        DockerUnavailableError: If the binary is missing or the daemon
            does not answer.
    """
    try:
        returncode = run_command([settings.docker, "version"])
    except CommandNotFoundError as e:
        raise DockerUnavailableError(e.message) from e
    if returncode != 0:
        raise DockerUnavailableError(
            f"{settings.docker} version exited with status {returncode}"
        )
    logger.debug("Docker installation at %r is functional", settings.docker)
