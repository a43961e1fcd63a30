"""Library configuration via environment variables (prefix SCOREKEEPER_)."""

from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ScorekeeperSettings(BaseSettings):
    model_config = {"env_prefix": "SCOREKEEPER_"}

    database_url: str = "sqlite+aiosqlite:///scorekeeper.db"
    echo_sql: bool = False
    seed_categories: bool = True
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"
    log_dir: Optional[str] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level {value!r}. Must be one of {', '.join(sorted(_VALID_LOG_LEVELS))}."
            )
        return level

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, value: str) -> str:
        return str(value).strip().lower() or "console"
