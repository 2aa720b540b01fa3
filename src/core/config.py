"""Core configuration.

Why here:
- Centralises environment variables (pydantic-settings) without polluting the CLI.
- Lets adapters (HTTP catalog, score file) read configuration consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "doggie-quiz"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) without leaking into the engine.
    - A single configuration contract for the CLI and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOGGIE_QUIZ_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    catalog_base_url: str = Field(
        default="https://dog.ceo/api",
        min_length=8,
        description="Base URL of the Dog CEO compatible breed catalog.",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout per catalog request (seconds).",
    )
    user_agent: str = Field(
        default=f"{APP_NAME}/0.1",
        min_length=1,
        description="User-Agent sent to the catalog.",
    )

    score_path: Path | None = Field(
        default=None,
        description="JSON file holding the persisted score (defaults to the user config dir).",
    )

    option_count: int = Field(
        default=4,
        ge=2,
        le=8,
        description="Answer choices per question (including the correct one).",
    )
    attempts_per_question: int = Field(
        default=1,
        ge=1,
        le=2,
        description="1 = single attempt; 2 = one extra try after a wrong answer.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root log level (DEBUG, INFO, WARNING, ERROR).",
    )

    def resolved_score_path(self) -> Path:
        return self.score_path or get_user_config_dir() / "score.json"
