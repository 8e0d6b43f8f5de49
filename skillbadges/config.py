"""Configuration management for SkillBadges."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SkillBadges settings, read from ``SKILLBADGES_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="SKILLBADGES_"
    )

    # Database
    database_url: str = "sqlite:///./skillbadges.db"
    auto_create_schema: bool = False  # provision skill_badges on startup

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_prefix: str = "/api"
    debug: bool = False  # SQL echo, /docs, open CORS, reload

    log_level: str = "INFO"

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        """``api/`` and ``/api`` mount the same way; ``/`` or empty means no prefix."""
        value = value.strip().strip("/")
        return f"/{value}" if value else ""


settings = Settings()
