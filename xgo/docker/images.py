"""Cross compilation image resolution.

Presence is detected by substring matching against the plain
``docker images --no-trunc`` listing.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.markup import escape

from xgo.process import capture_command, run_command
from xgo.types import XgoError

if TYPE_CHECKING:
    from rich.console import Console

    from xgo.config import Settings

logger = logging.getLogger(__name__)


class ImageQueryError(XgoError):
    """Raised when the local image list cannot be queried."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="image_query_failed")


class ImagePullError(XgoError):
    """Raised when an image cannot be pulled from the registry."""

    def __init__(self, image: str, message: str) -> None:
        super().__init__(message, code="image_pull_failed")
        self.image = image


def resolve_image_name(
    go_version: str, image: str | None = None, prefix: str = "karalabe/xgo-"
) -> str:
    """Select the image to use, either official or custom.

    Args:
        go_version: Go release selecting the official image.
        image: Custom image overriding the official distribution.
        prefix: Distribution prefix of the official images.

    Returns:
        Image reference.
    """
    if image:
        return image
    return f"{prefix}{go_version}"


def image_available(image: str, settings: Settings) -> bool:
    """Check whether an image is available locally.

    Raises:
        ImageQueryError: If the image list cannot be retrieved.
    """
    try:
        listing = capture_command([settings.docker, "images", "--no-trunc"])
    except XgoError as e:
        raise ImageQueryError(e.message) from e
    return image in listing


def pull_image(image: str, settings: Settings) -> None:
    """Pull an image from the docker registry.

    Raises:
        ImagePullError: If the pull fails.
    """
    logger.info("Pulling image %s", image)
    try:
        returncode = run_command([settings.docker, "pull", image])
    except XgoError as e:
        raise ImagePullError(image, e.message) from e
    if returncode != 0:
        raise ImagePullError(
            image, f"{settings.docker} pull {image} exited with status {returncode}"
        )


def ensure_image(
    image: str, settings: Settings, console: Console | None = None
) -> bool:
    """Make sure an image is present locally, pulling it when missing.

    Args:
        image: Image reference.
        settings: Application settings.
        console: Optional console receiving progress text.

    Returns:
        True if the image had to be pulled.
    """
    if console is not None:
        console.print(f"Checking for required docker image {escape(image)}... ", end="")
    if image_available(image, settings):
        if console is not None:
            console.print("found.")
        return False

    if console is not None:
        console.print("not found!")
        console.print(f"Pulling {escape(image)} from docker registry...")
    pull_image(image, settings)
    return True


__all__ = [
    "ImagePullError",
    "ImageQueryError",
    "ensure_image",
    "image_available",
    "pull_image",
    "resolve_image_name",
]
