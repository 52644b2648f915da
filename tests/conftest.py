"""Shared fixtures for xgo tests."""

import os

import pytest

from xgo.config import Settings


@pytest.fixture(autouse=True)
def clean_xgo_env(monkeypatch):
    """Keep XGO_* variables of the calling shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("XGO_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def gopath(tmp_path):
    """Create a GOPATH root with an empty src directory."""
    root = tmp_path / "gopath"
    (root / "src").mkdir(parents=True)
    return root


@pytest.fixture
def settings(gopath) -> Settings:
    """Settings pointing at the temporary GOPATH."""
    return Settings(gopath=str(gopath))
