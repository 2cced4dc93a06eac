"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def resolve_store_backend() -> str:
    """Resolve which persistence adapter to use.

    Priority:
      1) STORE_BACKEND (explicit)
      2) "github" when GITHUB_REPO is set
      3) "mongo" when MONGODB_URI is set
      4) Fallback to local files
    """

    explicit = os.getenv("STORE_BACKEND")
    if explicit:
        return explicit.lower().strip()
    if os.getenv("GITHUB_REPO"):
        return "github"
    if os.getenv("MONGODB_URI"):
        return "mongo"
    return "local"


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    STORE_BACKEND: str = resolve_store_backend()  # "local" | "github" | "mongo"
    STORE_TIMEOUT_SECONDS: float = _env_float("STORE_TIMEOUT_SECONDS", 10.0)
    STORE_WRITE_RETRIES: int = _env_int("STORE_WRITE_RETRIES", 3)

    # Local backend
    DATA_DIR: str = os.getenv("DATA_DIR", "./data")

    # GitHub contents API backend
    GITHUB_API_URL: str = os.getenv("GITHUB_API_URL", "https://api.github.com")
    GITHUB_TOKEN: str = os.getenv("GITHUB_TOKEN", "")
    GITHUB_REPO: str = os.getenv("GITHUB_REPO", "")  # "owner/name"
    GITHUB_BRANCH: str = os.getenv("GITHUB_BRANCH", "main")
    GITHUB_PATH_PREFIX: str = os.getenv("GITHUB_PATH_PREFIX", "data/")

    # Mongo backend
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB: str = os.getenv("MONGODB_DB", "weeklydraw")

    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "1001")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Draw schedule: Sunday=0 weekdays, local time-of-day, fixed UTC offset.
    SCHEDULER_ENABLED: bool = _env_bool("SCHEDULER_ENABLED", True)
    DRAW_WEEKDAYS: str = os.getenv("DRAW_WEEKDAYS", "2,6")
    DRAW_TIME: str = os.getenv("DRAW_TIME", "00:01")
    DRAW_UTC_OFFSET_HOURS: int = _env_int("DRAW_UTC_OFFSET_HOURS", 3)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Test configuration: local store, no background scheduler."""

    TESTING: bool = True
    DEBUG: bool = False
    STORE_BACKEND: str = "local"
    SCHEDULER_ENABLED: bool = False


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
