import os
import re
from typing import Optional, List
from functools import lru_cache


DEFAULT_PORT = 3001
DEFAULT_RATE_LIMIT = "100 per 15 minutes"


def _to_async_dsn(url: str) -> str:
    """Point plain PostgreSQL URLs at the asyncpg driver."""
    return re.sub(r"^postgres(ql)?://", "postgresql+asyncpg://", url, count=1)


class Settings:
    """Application settings, read from the environment once at startup"""

    def __init__(self, environ: Optional[dict] = None):
        env = os.environ if environ is None else environ

        # Database
        self.DATABASE_URL: str = _to_async_dsn(env.get("DATABASE_URL", ""))
        self.DB_POOL_SIZE: int = int(env.get("DB_POOL_SIZE", "5"))
        self.DB_ECHO: bool = env.get("DB_ECHO", "false").lower() == "true"

        # Email
        self.EMAIL_USER: str = env.get("EMAIL_USER", "")
        self.EMAIL_PASS: str = env.get("EMAIL_PASS", "")
        self.SMTP_HOST: str = env.get("SMTP_HOST", "smtp.gmail.com")
        self.SMTP_PORT: int = int(env.get("SMTP_PORT", "587"))

        # Server
        self.PORT: int = int(env.get("PORT") or DEFAULT_PORT)
        self.ENVIRONMENT: str = env.get("APP_ENV") or env.get("NODE_ENV") or "development"
        self.LOG_LEVEL: str = env.get("LOG_LEVEL") or ("DEBUG" if self.is_development else "INFO")

        # CORS
        self.CORS_ALLOW_ORIGINS: List[str] = ["*"]
        self.CORS_ALLOW_CREDENTIALS: bool = False  # wildcard forbids credentials

        # Rate Limiting
        self.RATE_LIMIT: str = env.get("RATE_LIMIT", DEFAULT_RATE_LIMIT)

        self._validate()

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    def _validate(self):
        """Validate required settings"""
        if not self.DATABASE_URL:
            raise ValueError("DATABASE_URL environment variable must be set")
        if not self.EMAIL_USER:
            raise ValueError("EMAIL_USER environment variable must be set")
        if not self.EMAIL_PASS:
            raise ValueError("EMAIL_PASS environment variable must be set")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
