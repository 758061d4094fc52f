"""Configuration management for the userhub API."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the project root.

    Returns:
        Path to the .env file
    """
    # Check if ENV_FILE environment variable is set
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # This file is in src/userhub_api/config.py
    # So we go up 3 levels to get to the project root
    current_file = Path(__file__)
    project_dir = current_file.parent.parent.parent
    return str(project_dir / ".env")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "userhub"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "info"

    # API
    api_host: str = "localhost"
    api_port: int = 8000

    # UI
    ui_url: str = "http://localhost:5173"

    # User store
    user_store_backend: Literal["memory", "cosmos"] = "memory"

    # Auth
    jwt_secret_key: str = "dev-only-secret-change-me-in-production-env"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str | None = None
    access_token_expire_minutes: int = 60
    password_hash_rounds: int = 12

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
