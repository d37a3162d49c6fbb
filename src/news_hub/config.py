from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


dotenv_path = Path.cwd() / '.env'
load_dotenv(dotenv_path)


SUPPORTED_PROVIDERS = ("gnews", "newsapi", "mock")
SUPPORTED_CACHE_BACKENDS = ("memory", "redis", "none")


class Settings(BaseSettings):
    """Global configurations."""

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    # Providers, in registration order
    NEWS_PROVIDERS: str = Field("gnews", description="Comma separated: gnews, newsapi, mock")
    NEWS_LANGUAGE: str = Field("en", description="Language sent to every provider")
    PROVIDER_TIMEOUT_SECONDS: float = Field(10.0, gt=0)
    NEWS_DEDUPLICATE_URLS: bool = False

    # GNews
    GNEWS_API_KEY: Optional[str] = None
    GNEWS_BASE_URL: str = "https://gnews.io/api/v4"

    # NewsAPI.org
    NEWSAPI_API_KEY: Optional[str] = None
    NEWSAPI_BASE_URL: str = "https://newsapi.org/v2"
    NEWSAPI_COUNTRY: str = "us"

    # TTL (Time-To-Live) for cache, calculate seconds
    CACHE_BACKEND: str = Field("memory", description="memory, redis or none")
    CACHE_TTL_NEWS: int = Field(60 * 5, gt=0)
    CACHE_MAX_ENTRIES: int = Field(256, gt=0)
    CACHE_KEY_PREFIX: str = "news:"

    # Config Redis database
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str = ""
    REDIS_DB: int = 0

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"

    @field_validator("CACHE_BACKEND", "LOG_FORMAT")
    @classmethod
    def _normalize_choice(cls, value: str) -> str:
        return value.strip().lower() if value else value

    @property
    def provider_names(self) -> List[str]:
        """Enabled provider names in registration order, duplicates dropped."""
        names: List[str] = []
        for raw in self.NEWS_PROVIDERS.split(","):
            name = raw.strip().lower()
            if name and name not in names:
                names.append(name)
        return names

    @property
    def redis_url(self) -> str:
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"


# Avoid having to re-read the .env file and create the Settings object every time you access it
@lru_cache()
def get_settings() -> Settings:
    return Settings()
