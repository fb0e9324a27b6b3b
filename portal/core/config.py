# /portal/core/config.py

"""
Centralised application settings.

Every value is configurable through the environment (or a local `.env`
file). The module exposes a cached `settings` instance that the rest of the
application imports directly.
"""

from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values from a local .env reach os.environ before the settings are read.
load_dotenv()


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    model_config = SettingsConfigDict(extra="ignore")

    # --- Application ---
    APP_NAME: str = "JàngHub Portal API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # --- Database ---
    DATABASE_URL: str = "sqlite:///./portal.db"

    # --- Authentication ---
    SECRET_KEY: str = "dev-secret-key-change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 8
    ALLOW_SELF_REGISTRATION: bool = True
    DEFAULT_USER_PASSWORD: str = "passer25"

    # --- School ---
    DEFAULT_CLASS_LABEL: str = "Licence 2 - Info"
    ADMIN_CLASS_LABEL: str = "ADMINISTRATION"
    CLASS_EMAIL_DOMAIN: str = "janghub.sn"

    # --- Object storage ---
    STORAGE_DIR: str = "./storage"
    STORAGE_BUCKET: str = "files"
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # --- Generative assistant ---
    GOOGLE_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
