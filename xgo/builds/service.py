"""Cross compilation service.

This module provides the high-level pipeline:
Probe docker -> resolve image -> (local package) resolve path ->
compose invocation -> run the build container.

Every stage raises an XgoError subclass on failure; nothing is retried.
"""

from __future__ import annotations

import logging
import os
import shlex
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.markup import escape

from xgo.builds.invocation import compose_run_command
from xgo.builds.paths import is_filesystem_path, resolve_local_package
from xgo.docker.images import ensure_image, resolve_image_name
from xgo.docker.probe import check_docker
from xgo.process import run_command
from xgo.types import XgoError

if TYPE_CHECKING:
    from rich.console import Console

    from xgo.config import Settings
    from xgo.types import BuildRequest, Mount

logger = logging.getLogger(__name__)


class BuildFailedError(XgoError):
    """Raised when the build container exits non-zero."""

    def __init__(self, import_path: str, exit_code: int) -> None:
        super().__init__(
            f"Failed to cross compile package {import_path}: "
            f"build exited with status {exit_code}",
            code="build_failed",
            exit_code=exit_code if exit_code > 0 else 1,
        )
        self.import_path = import_path


@dataclass
class CompileResult:
    """Result of a successful cross compilation.

    Attributes:
        import_path: Import path that was built.
        image: Image the build ran in.
        command: The docker run command that was executed.
        pulled: Whether the image had to be pulled first.
        mounts: Local source mounts passed to the container.
    """

    import_path: str
    image: str
    command: list[str]
    pulled: bool = False
    mounts: list[Mount] = field(default_factory=list)


def cross_compile(
    request: BuildRequest,
    settings: Settings,
    console: Console | None = None,
    workdir: str | None = None,
) -> CompileResult:
    """Cross compile a package into the working directory.

    Args:
        request: Build request from the command line.
        settings: Application settings.
        console: Optional console receiving progress text.
        workdir: Host directory for the binaries (default: cwd).

    Returns:
        CompileResult describing the executed build.

    Raises:
        XgoError: On the first failing stage.
    """

    def progress(message: str) -> None:
        if console is not None:
            console.print(message)

    progress("Checking docker installation...")
    check_docker(settings)
    progress("")

    image = resolve_image_name(request.go_version, request.image, settings.image_prefix)
    pulled = ensure_image(image, settings, console)

    import_path = request.import_path
    mounts: list[Mount] = []
    if is_filesystem_path(import_path):
        local = resolve_local_package(import_path, settings.gopath, settings.mount_root)
        import_path = local.import_path
        mounts = local.mounts

    cmd = compose_run_command(
        request,
        import_path,
        image,
        workdir or os.getcwd(),
        settings,
        mounts,
    )

    progress(f"Cross compiling {escape(import_path)}...")
    logger.info("Executing build: %s", shlex.join(cmd))
    exit_code = run_command(cmd)
    if exit_code != 0:
        raise BuildFailedError(import_path, exit_code)

    return CompileResult(
        import_path=import_path,
        image=image,
        command=cmd,
        pulled=pulled,
        mounts=mounts,
    )


__all__ = ["BuildFailedError", "CompileResult", "cross_compile"]
