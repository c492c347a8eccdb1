from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "QwinHub"
    APP_BASE_URL: str = "http://localhost:8000"
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    # JWT
    JWT_SECRET_KEY: str = "dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60
    ADMIN_COOKIE_NAME: str = "admin-token"
    COOKIE_SECURE: bool = False

    # Banco de dados
    DATABASE_URL: str = "sqlite:///./qwinhub.db"
    DB_TIMEOUT_SECONDS: int = 10
    SQL_ECHO: bool = False

    # listings
    DEFAULT_PAGE_SIZE: int = 15
    MAX_PAGE_SIZE: int = 100


@lru_cache
def get_settings() -> Settings:
    return Settings()
