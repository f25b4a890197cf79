from pydantic_settings import BaseSettings
from typing import List
import logging

from chore_calendar.core.env_config import cors_origins_for, loaded_env_files

logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "chore-calendar-dev-secret-change-me"


class Settings(BaseSettings):
    PROJECT_NAME: str = "Chore Calendar API"

    DATABASE_URL: str = "sqlite:///./chore_calendar.db"
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    # Sessions last a week
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    BCRYPT_ROUNDS: int = 12

    ENVIRONMENT: str = "development"
    FRONTEND_URL: str = "http://localhost:5173"

    # Derived from FRONTEND_URL when left empty
    CORS_ORIGINS: List[str] = []

    class Config:
        env_file = ".env"
        extra = "ignore"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Render and Heroku hand out postgres:// URLs
        if self.DATABASE_URL.startswith("postgres://"):
            self.DATABASE_URL = self.DATABASE_URL.replace("postgres://", "postgresql://", 1)

        if not self.CORS_ORIGINS:
            self.CORS_ORIGINS = cors_origins_for(self.FRONTEND_URL)

        if self.SECRET_KEY == DEFAULT_SECRET_KEY and self.ENVIRONMENT != "development":
            logger.warning("SECRET_KEY is the development default; set SECRET_KEY for %s", self.ENVIRONMENT)

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def get_environment_config(self) -> dict:
        """Get environment-specific configuration as a dictionary"""
        return {
            "environment": self.ENVIRONMENT,
            "frontend_url": self.FRONTEND_URL,
            "cors_origins": self.CORS_ORIGINS,
            "token_lifetime_minutes": self.ACCESS_TOKEN_EXPIRE_MINUTES,
            "loaded_config_files": list(loaded_env_files),
        }


settings = Settings()
