"""Application configuration using pydantic-settings."""

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    DATABASE_URL: str = "sqlite:///./lpg_connect.db"
    APP_NAME: str = "LPG Connect"
    # "auto" tries the database first and falls back to memory
    STORAGE_BACKEND: Literal["auto", "durable", "volatile"] = "auto"
    SEED_DEFAULT_DATA: bool = True
    VOLATILE_ID_START: int = 1001

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
