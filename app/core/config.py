"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    APP_NAME: str = "Xcelerate"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Only holds notification read-state; profiles and users live in Supabase.
    DATABASE_URL: str = "postgresql+psycopg://postgres@localhost:5432/xcelerate"

    # hosted auth/database service
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_JWT_SECRET: str = ""
    SUPABASE_TIMEOUT_SECONDS: float = 15.0

    COOKIE_NAME: str = "xc_access"
    CORS_ORIGINS: str = "http://localhost:3000"
    LOGIN_PATH: str = "/login"

    # Calendar days for the notification windows are taken in this zone.
    TIMEZONE: str = "UTC"
    WEEKLY_ACTIVITY_TARGET: int = 5
    PASSWORD_MIN_LENGTH: int = 6
    NOTIFICATION_REFRESH_SECONDS: int = 60 * 60

    model_config = SettingsConfigDict(env_file=str(BASE_DIR / ".env"), env_file_encoding="utf-8")

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def supabase_ready(self) -> bool:
        return bool(self.SUPABASE_URL.strip() and self.SUPABASE_ANON_KEY.strip())


settings = Settings()
