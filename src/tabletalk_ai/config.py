import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()


def _env(*names: str) -> str | None:
    """Return the first non-empty environment variable among ``names``."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis (device key-value store)
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Storage namespaces
    storage_prefix: str = os.getenv("STORAGE_PREFIX", "@tabletalk")
    cache_ttl: int = int(os.getenv("AI_CACHE_TTL", "86400"))  # 24 hours

    # Primary provider (Groq chat completions)
    groq_api_key: str | None = _env("GROQ_API_KEY", "EXPO_PUBLIC_GROQ_API_KEY")
    groq_base_url: str = os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
    groq_model: str = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")

    # Secondary provider (Yelp AI chat)
    yelp_api_key: str | None = _env("YELP_API_KEY", "EXPO_PUBLIC_YELP_API_KEY")
    yelp_ai_url: str = os.getenv("YELP_AI_URL", "https://api.yelp.com/ai/chat/v2")

    provider_timeout: float = float(os.getenv("PROVIDER_TIMEOUT", "30"))
    default_locale: str = os.getenv("DEFAULT_LOCALE", "en_US")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_file: str | None = os.getenv("LOG_FILE")

    @property
    def cache_prefix(self) -> str:
        """Namespace for cached AI responses."""
        return f"{self.storage_prefix}:ai_cache:"

    @property
    def chat_prefix(self) -> str:
        """Namespace for persisted restaurant conversations."""
        return f"{self.storage_prefix}:restaurant_chat:"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("AI_CACHE_TTL must be a positive number of seconds")

        if self.provider_timeout <= 0:
            raise ValueError("PROVIDER_TIMEOUT must be a positive number of seconds")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create an asyncio Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )
