"""Shared type definitions for xgo.

This module contains the dataclasses and the base exception shared across
subpackages to avoid circular imports.
"""

from dataclasses import dataclass, field

DEFAULT_TARGETS = ["*/*"]


class XgoError(Exception):
    """Base error for every failure surfaced to the CLI.

    Attributes:
        message: Human readable description.
        code: Machine readable error code.
        exit_code: Process exit code the CLI should terminate with.
    """

    def __init__(self, message: str, code: str = "xgo_error", exit_code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.exit_code = exit_code


@dataclass
class BuildRequest:
    """A single cross compilation request, built once from the CLI flags.

    Attributes:
        import_path: Go import path, or a filesystem path to a local package.
        go_version: Go release used to select the official image.
        package: Sub-package to build if not the root import.
        out_prefix: Prefix for output naming (empty = package name).
        remote: Version control remote repository to build.
        branch: Version control branch to build.
        deps: CGO dependencies (configure/make based archives).
        targets: Targets to build for, as ``os/arch`` pairs.
        image: Custom docker image replacing the official distribution.
        verbose: Print the names of packages as they are compiled.
        steps: Print the commands as the builds execute.
        race: Enable data race detection.
    """

    import_path: str
    go_version: str = "latest"
    package: str = ""
    out_prefix: str = ""
    remote: str = ""
    branch: str = ""
    deps: str = ""
    targets: list[str] = field(default_factory=lambda: list(DEFAULT_TARGETS))
    image: str | None = None
    verbose: bool = False
    steps: bool = False
    race: bool = False

    def __post_init__(self) -> None:
        if not self.import_path:
            raise ValueError("import path must not be empty")
        if not self.targets:
            self.targets = list(DEFAULT_TARGETS)


@dataclass(frozen=True)
class Mount:
    """A read-only bind mount of a local source root into the build container."""

    host_path: str
    container_path: str
    root: str
    read_only: bool = True

    def as_volume(self) -> str:
        """Render as a docker ``-v`` value."""
        volume = f"{self.host_path}:{self.container_path}"
        return f"{volume}:ro" if self.read_only else volume


@dataclass
class LocalSource:
    """A local package resolved to its import path plus the source mounts."""

    import_path: str
    mounts: list[Mount] = field(default_factory=list)


def parse_targets(value: str | None) -> list[str]:
    """Split a comma separated target list, falling back to the wildcard."""
    if not value:
        return list(DEFAULT_TARGETS)
    targets = [t.strip() for t in value.split(",") if t.strip()]
    return targets or list(DEFAULT_TARGETS)


__all__ = [
    "DEFAULT_TARGETS",
    "BuildRequest",
    "LocalSource",
    "Mount",
    "XgoError",
    "parse_targets",
]
