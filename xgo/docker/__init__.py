"""Docker runtime integration.

This module handles:
- Checking that the docker installation is functional
- Resolving the cross compilation image name
- Checking local image presence and pulling missing images
"""

from xgo.docker.images import (
    ImagePullError,
    ImageQueryError,
    ensure_image,
    image_available,
    pull_image,
    resolve_image_name,
)
from xgo.docker.probe import DockerUnavailableError, check_docker

__all__ = [
    "DockerUnavailableError",
    "ImagePullError",
    "ImageQueryError",
    "check_docker",
    "ensure_image",
    "image_available",
    "pull_image",
    "resolve_image_name",
]
