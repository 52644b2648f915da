"""Docker run invocation for the cross compilation container.

The container receives its build parameters as environment variables:
REPO_REMOTE, REPO_BRANCH, PACK, DEPS, OUT, FLAG_V, FLAG_X, FLAG_RACE,
TARGETS and EXT_GOPATH. The import path to build is its only argument.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xgo.config import Settings
    from xgo.types import BuildRequest, Mount


def format_bool(value: bool) -> str:
    """Render a boolean the way the container scripts expect it."""
    return "true" if value else "false"


def format_targets(targets: list[str]) -> str:
    """Compose the TARGETS value.

    Targets are space separated and every ``*`` wildcard becomes the
    regular expression ``.``, so ``*/*`` selects every platform.
    """
    return " ".join(targets).replace("*", ".")


def compose_environment(request: BuildRequest) -> list[tuple[str, str]]:
    """Compose the ordered build environment for a request."""
    return [
        ("REPO_REMOTE", request.remote),
        ("REPO_BRANCH", request.branch),
        ("PACK", request.package),
        ("DEPS", request.deps),
        ("OUT", request.out_prefix),
        ("FLAG_V", format_bool(request.verbose)),
        ("FLAG_X", format_bool(request.steps)),
        ("FLAG_RACE", format_bool(request.race)),
        ("TARGETS", format_targets(request.targets)),
    ]


def compose_run_command(
    request: BuildRequest,
    import_path: str,
    image: str,
    workdir: str,
    settings: Settings,
    mounts: list[Mount] | None = None,
) -> list[str]:
    """Compose the ``docker run`` command cross compiling a package.

    Args:
        request: Build request carrying the build parameters.
        import_path: Final import path to build.
        image: Resolved image reference.
        workdir: Host directory receiving the binaries.
        settings: Application settings.
        mounts: Read-only local source mounts.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    mounts = mounts or []
    cmd = [settings.docker, "run", "-v", f"{workdir}:{settings.build_dir}"]

    for name, value in compose_environment(request):
        cmd.extend(["-e", f"{name}={value}"])

    for mount in mounts:
        cmd.extend(["-v", mount.as_volume()])
    cmd.extend(["-e", "EXT_GOPATH=" + ":".join(m.root for m in mounts)])

    cmd.extend([image, import_path])
    return cmd


__all__ = [
    "compose_environment",
    "compose_run_command",
    "format_bool",
    "format_targets",
]
