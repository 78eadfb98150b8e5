"""Configuration loading from environment variables with validation."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Anchor all paths to the project root (two levels up from this file)
_PROJECT_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CREATOROPS_",
        case_sensitive=False,
    )

    # Anthropic (loaded separately, no prefix)
    anthropic_api_key: str = ""

    # Model settings
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 1024
    temperature: float = 0.3
    request_timeout: float = 60.0  # seconds per model call

    # Storage
    db_path: Path = _PROJECT_DIR / "data" / "creatorops.db"

    # HTTP server
    host: str = "127.0.0.1"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Review workflow
    enforce_stage_order: bool = False  # reject reviews for a stage not under review
    review_guidelines: list[str] = []  # brand rules added to the stage review prompt

    # Logging
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Load settings from environment and .env file."""
    # Load .env from the project root regardless of cwd
    load_dotenv(_PROJECT_DIR / ".env")
    api_key = os.getenv("ANTHROPIC_API_KEY", "")
    return Settings(anthropic_api_key=api_key)
