"""xgo - Go CGO cross compiler front end.

This package wraps the xgo cross compilation docker images: it checks the
docker installation, makes sure the requested image is present locally and
runs the build container with the requested targets and build flags.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
