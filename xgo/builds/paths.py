"""Local package resolution.

When the requested package is given as a filesystem path instead of an
import path, it is resolved against the GOPATH roots and every root's
``src`` directory is exported into the build container read-only, so
packages not yet pushed to a remote repository can be cross compiled.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath

from xgo.types import LocalSource, Mount, XgoError

logger = logging.getLogger(__name__)


class PathResolutionError(XgoError):
    """Raised when a local package path cannot be resolved."""

    def __init__(self, message: str, code: str = "path_resolution_error") -> None:
        super().__init__(message, code=code)


def is_filesystem_path(arg: str) -> bool:
    """Return True if the argument names a local directory, not an import path."""
    return os.path.isabs(arg) or arg.startswith(".")


def gopath_entries(gopath: str | None) -> list[str]:
    """Split a GOPATH list into its non-empty roots.

    An unset or empty GOPATH falls back to the Go default ``$HOME/go``.
    """
    entries = [e for e in (gopath or "").split(os.pathsep) if e]
    if not entries:
        entries = [str(Path.home() / "go")]
    return entries


def _subdir(root: Path, path: Path) -> str | None:
    """Return path relative to root in slash form, if path lies below root."""
    for base, target in ((root, path), (root.resolve(), path.resolve())):
        try:
            rel = target.relative_to(base)
        except ValueError:
            continue
        if rel.parts:
            return rel.as_posix()
    return None


def resolve_import_path(directory: Path, entries: list[str]) -> str:
    """Find the import path of a directory from the GOPATH roots.

    Raises:
        PathResolutionError: If no root's src directory contains it.
    """
    for entry in entries:
        src = Path(os.path.abspath(entry)) / "src"
        sub = _subdir(src, directory)
        if sub is not None:
            logger.debug("Resolved %s to %s via %s", directory, sub, src)
            return sub
    raise PathResolutionError(
        f"Failed to resolve import path: {directory} is not inside any of "
        f"{os.pathsep.join(entries)}",
        code="import_path_unresolved",
    )


def local_mounts(entries: list[str], mount_root: str = "/ext-go") -> list[Mount]:
    """Compute the read-only source mounts for every GOPATH root.

    Root ``i`` is mounted from ``<root>/src`` to ``<mount_root>/<i>/src``.
    """
    mounts: list[Mount] = []
    for i, entry in enumerate(entries):
        root = PurePosixPath(mount_root) / str(i)
        mounts.append(
            Mount(
                host_path=os.path.join(os.path.abspath(entry), "src"),
                container_path=str(root / "src"),
                root=str(root),
            )
        )
    return mounts


def resolve_local_package(
    arg: str, gopath: str | None, mount_root: str = "/ext-go"
) -> LocalSource:
    """Resolve a local package directory to its import path and mounts.

    Args:
        arg: Absolute or ``.``-relative path to the package directory.
        gopath: GOPATH list (os.pathsep separated).
        mount_root: In-container root for the source mounts.

    Returns:
        LocalSource with the import path and one mount per GOPATH root.

    Raises:
        PathResolutionError: If the path is not an existing directory or
            cannot be mapped to an import path.
    """
    directory = Path(os.path.abspath(arg))
    if not directory.is_dir():
        raise PathResolutionError(
            f"Requested path invalid: {arg}", code="invalid_path"
        )
    entries = gopath_entries(gopath)
    import_path = resolve_import_path(directory, entries)
    return LocalSource(
        import_path=import_path,
        mounts=local_mounts(entries, mount_root),
    )


__all__ = [
    "PathResolutionError",
    "gopath_entries",
    "is_filesystem_path",
    "local_mounts",
    "resolve_import_path",
    "resolve_local_package",
]
