"""Application settings.

Read once from environment variables with defaults:
    FOOTYRATER_DB_PATH: SQLite database file (default: ./footyrater.db)
    FOOTYRATER_SEED_SAMPLE: Seed sample matches into an empty store (default: false)
    FOOTYRATER_LOG_LEVEL: Root log level (default: INFO)
    FOOTYRATER_HOST / FOOTYRATER_PORT: Bind address (default: 0.0.0.0:3000)
    FOOTYRATER_CORS_ORIGINS: Comma-separated allowed origins (default: *)
    FOOTBALL_DATA_API_TOKEN: football-data.org token (fetching disabled if unset)
    FOOTBALL_DATA_BASE_URL: API base URL (default: https://api.football-data.org/v4)
    FOOTBALL_DATA_TIMEOUT: Request timeout in seconds (default: 10)
    FOOTBALL_DATA_RETRY_COUNT: Retry attempts for transient errors (default: 3)
    FOOTBALL_DATA_MAX_CALLS: Outbound calls allowed per window (default: 10)
    FOOTBALL_DATA_WINDOW_SECONDS: Rate limit window length (default: 60)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DB_PATH = "./footyrater.db"
DEFAULT_FOOTBALL_DATA_URL = "https://api.football-data.org/v4"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class FootballDataSettings:
    """Outbound match source settings."""

    api_token: str | None = None
    base_url: str = DEFAULT_FOOTBALL_DATA_URL
    timeout: float = 10.0
    retry_count: int = 3
    max_calls: int = 10
    window_seconds: float = 60.0


@dataclass(frozen=True)
class Settings:
    """Complete application settings."""

    db_path: Path = Path(DEFAULT_DB_PATH)
    seed_sample: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    football_data: FootballDataSettings = field(default_factory=FootballDataSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_path=Path(os.environ.get("FOOTYRATER_DB_PATH", DEFAULT_DB_PATH)),
            seed_sample=_env_bool("FOOTYRATER_SEED_SAMPLE"),
            log_level=os.environ.get("FOOTYRATER_LOG_LEVEL", "INFO").upper(),
            host=os.environ.get("FOOTYRATER_HOST", "0.0.0.0"),
            port=int(os.environ.get("FOOTYRATER_PORT", 3000)),
            cors_origins=_env_list("FOOTYRATER_CORS_ORIGINS", "*"),
            football_data=FootballDataSettings(
                api_token=os.environ.get("FOOTBALL_DATA_API_TOKEN") or None,
                base_url=os.environ.get("FOOTBALL_DATA_BASE_URL", DEFAULT_FOOTBALL_DATA_URL),
                timeout=float(os.environ.get("FOOTBALL_DATA_TIMEOUT", 10.0)),
                retry_count=int(os.environ.get("FOOTBALL_DATA_RETRY_COUNT", 3)),
                max_calls=int(os.environ.get("FOOTBALL_DATA_MAX_CALLS", 10)),
                window_seconds=float(os.environ.get("FOOTBALL_DATA_WINDOW_SECONDS", 60.0)),
            ),
        )
