"""Cross compilation build orchestration.

This module handles:
- Resolving local package paths to import paths
- Composing the docker run invocation
- Running the end-to-end cross compilation pipeline

Access submodules via xgo.builds.paths, xgo.builds.invocation and
xgo.builds.service.
"""
