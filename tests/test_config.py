"""Tests for configuration module."""

import os
from pathlib import Path
from unittest.mock import patch

from xgo.config import Settings, get_settings


class TestSettings:
    """Test Settings class."""

    def test_default_settings(self, monkeypatch) -> None:
        """Settings should have sensible defaults."""
        monkeypatch.delenv("GOPATH", raising=False)
        settings = Settings()

        assert settings.docker == "docker"
        assert settings.image_prefix == "karalabe/xgo-"
        assert settings.build_dir == "/build"
        assert settings.mount_root == "/ext-go"
        assert settings.gopath == str(Path.home() / "go")
        assert settings.log_level == "WARNING"

    def test_settings_from_env(self) -> None:
        """Settings should be loadable from environment variables."""
        with patch.dict(
            os.environ,
            {
                "XGO_DOCKER": "podman",
                "XGO_IMAGE_PREFIX": "registry.local/xgo-",
                "XGO_LOG_LEVEL": "DEBUG",
            },
        ):
            settings = Settings()
            assert settings.docker == "podman"
            assert settings.image_prefix == "registry.local/xgo-"
            assert settings.log_level == "DEBUG"

    def test_gopath_from_env(self) -> None:
        """The module search path is read from GOPATH."""
        with patch.dict(os.environ, {"GOPATH": "/a:/b"}):
            settings = Settings()
            assert settings.gopath == "/a:/b"

    def test_xgo_gopath_overrides(self) -> None:
        """XGO_GOPATH takes precedence over GOPATH."""
        with patch.dict(os.environ, {"GOPATH": "/a", "XGO_GOPATH": "/override"}):
            settings = Settings()
            assert settings.gopath == "/override"

    def test_gopath_by_name(self) -> None:
        """gopath can be passed explicitly."""
        settings = Settings(gopath="/explicit")
        assert settings.gopath == "/explicit"


class TestGetSettings:
    """Test get_settings function."""

    def test_get_settings_returns_settings(self) -> None:
        """get_settings should return a Settings instance."""
        settings = get_settings()
        assert isinstance(settings, Settings)
