import logging
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ─── App ──────────────────────────────
    APP_NAME: str = "numencoach"
    ENV: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ─── LLM (Groq, OpenAI-compatible) ────
    GROQ_API_KEY: Optional[str] = None
    LLM_BASE_URL: str = "https://api.groq.com/openai/v1"
    LLM_MODEL: str = "llama3-8b-8192"
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 150
    LLM_TIMEOUT: int = 30
    LLM_RETRIES: int = 3

    # ─── Cache ────────────────────────────
    CACHE_BACKEND: str = "memory"
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: Optional[str] = None
    REDIS_URL: Optional[str] = None
    REDIS_TIMEOUT: float = 5.0
    CACHE_PURGE_INTERVAL: int = 60

    # ─── Limits ───────────────────────────
    INSIGHT_RATE_LIMIT: int = 5
    INSIGHT_RATE_WINDOW: int = 60 * 60
    INSIGHT_WORD_LIMIT: int = 50
    CHAT_HISTORY_LIMIT: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Apply the configured log level to the root logger.
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
