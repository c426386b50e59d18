"""
Application configuration — reads all settings from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ──────────────────────────────────────────────
    APP_NAME: str = "Campus Assist"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: str = "*"
    ADMIN_API_KEY: str = ""

    # ── Database ─────────────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./campus_assist.db"

    # ── OpenAI ───────────────────────────────────────────
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_IMAGE_MODEL: str = "dall-e-3"
    FALLBACK_TIMEOUT_SECONDS: float = 30.0
    IMAGE_TIMEOUT_SECONDS: float = 60.0

    # ── Matching engine ──────────────────────────────────
    CONFIDENCE_THRESHOLD: float = 70.0
    VAGUE_CONFIDENCE_THRESHOLD: float = 85.0
    AMBIGUITY_MARGIN: float = 10.0
    AMBIGUITY_CEILING: float = 90.0
    MAX_AMBIGUOUS_OPTIONS: int = 3
    MIN_TERM_LENGTH: int = 1

    # ── Rate Limiting ────────────────────────────────────
    RATE_LIMIT_PER_MINUTE: int = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
