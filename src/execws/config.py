"""Configuration management for exec-ws."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from execws.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="EXECWS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Workspace discovery
    manifest: Path | None = Field(None, description="Explicit workspace manifest path")

    # Routing policy
    probe_files: bool = Field(
        default=False, description="Treat bare tokens naming an existing file under the project root as paths"
    )
    all_if_no_paths: bool = Field(
        default=False, description="Dispatch every workspace when no path token routes to any of them"
    )

    # Execution
    sequential: bool = Field(default=False, description="Run workspaces one at a time in discovery order")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: Literal["default", "verbose"] = Field(default="default", description="Log output profile")


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment, applying non-None overrides on top."""

    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigurationError(f"invalid EXECWS_* setting: {exc}") from exc
    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        settings = settings.model_copy(update=updates)
    return settings
