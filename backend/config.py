# backend/config.py
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(env_path), extra="ignore")

    SECRET_KEY: str = "develop"
    ALGORITHM: str = "HS256"
    # One day, same as the token lifetime the frontend expects
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    BCRYPT_ROUNDS: int = 10

    DATABASE_URL: str = "sqlite:///./service_orders.db"

    FRONTEND_URL: Optional[str] = None
    API_PREFIX: str = ""
    LOG_LEVEL: str = "info"


@lru_cache
def get_settings() -> Settings:
    return Settings()
