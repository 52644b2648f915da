"""Configuration settings for xgo.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_gopath() -> str:
    """Return the Go default module search path (``$HOME/go``)."""
    return str(Path.home() / "go")


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the XGO_ prefix,
    except the module search path which is read from GOPATH as the Go
    toolchain does.
    """

    model_config = SettingsConfigDict(
        env_prefix="XGO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Container runtime
    docker: str = Field(
        default="docker",
        description="Container runtime executable",
    )
    image_prefix: str = Field(
        default="karalabe/xgo-",
        description="Distribution prefix of the official cross compilation images",
    )

    # Container layout
    build_dir: str = Field(
        default="/build",
        description="In-container directory receiving the build outputs",
    )
    mount_root: str = Field(
        default="/ext-go",
        description="In-container root for read-only local source mounts",
    )

    # Local sources
    gopath: str = Field(
        default_factory=_default_gopath,
        validation_alias=AliasChoices("XGO_GOPATH", "GOPATH"),
        description="Module search path used to resolve local packages",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
