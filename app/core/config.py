from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="SITE_", case_sensitive=False)

    app_name: str = "Portfolio Site API"
    database_url: str = "sqlite:///./site.db"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    ai_model: str = "google/gemini-3-flash-preview"
    ai_temperature: float = 0.7
    ai_max_tokens: int = 300
    # name of the env variable holding the bearer key, read on every request
    ai_api_key_env: str = "AI_GATEWAY_API_KEY"

    auto_approve_reviews: bool = True
    testimonials_page_size: int = 6
    session_ttl_minutes: int = 60 * 24

    admin_email: str | None = None
    admin_password: str | None = None

    @field_validator("cors_origins", mode="before")
    def _split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
