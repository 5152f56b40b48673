"""Application configuration.

- Centralises environment variables (pydantic-settings) so the CLI and the
  adapters read them the same way.
- Values come from `TOOLBELT_*` env vars, a project `.env`, or the per-user
  `.env` under the platform config directory.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "toolbelt"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "toolbelt"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "toolbelt"
    return Path.home() / ".config" / "toolbelt"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central settings for every tool."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLBELT_",
        extra="ignore",
        case_sensitive=False,
        # Project first, then the user-wide file.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout in seconds (unset: wait indefinitely).",
    )
    user_agent: str = Field(
        default="toolbelt/0.1",
        min_length=1,
        description="User-Agent sent by the network tool.",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Follow HTTP redirects like a browser fetch does.",
    )

    server_host: str = Field(
        default="127.0.0.1",
        min_length=1,
        description="Bind address for the demonstration servers.",
    )
    server_port: int = Field(
        default=3001,
        ge=0,
        le=65535,
        description="Port for the demonstration servers (0 picks a free one).",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Root log level (DEBUG, INFO, WARNING, ERROR).",
    )

    default_currency: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="ISO 4217 code used by `format currency` when none is given.",
    )
    default_decimals: int = Field(
        default=2,
        ge=0,
        le=100,
        description="Decimal places used by `format number` when none is given.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
