"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "ZippedProxy/1.0 (+https://example.com)"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ZIPPED_PROXY_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Address the HTTP server binds to")
    port: int = Field(default=8080, ge=1, le=65535, description="Port the HTTP server binds to")
    log_level: str = Field(default="INFO", description="Logging level")
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent header sent with every upstream request",
    )


@lru_cache
def get_settings() -> Settings:
    """Get the application settings instance."""
    return Settings()
