from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "ZOBA"
    API_V1_STR: str = "/api"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    BACKEND_CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    DATABASE_URL: str = "sqlite:///./zoba.db"

    # OpenAI-compatible completion endpoint
    LLM_API_KEY: str = ""
    LLM_BASE_URL: str | None = None
    MODEL_DEFAULT: str = "gpt-4o-mini"
    LLM_TIMEOUT_SECONDS: float = 60.0

    ASSISTANT_MAX_TOKENS: int = 1000
    ASSISTANT_TEMPERATURE: float = 0.5
    MAX_FIX_ATTEMPTS: int = 3

    # Kroki-compatible renderer; the local structural checker is used when unset
    RENDERER_URL: str | None = None
    RENDERER_TIMEOUT_SECONDS: float = 10.0


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
