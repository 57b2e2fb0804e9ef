"""
Core configuration module for InvoiceDesk.
Uses pydantic-settings for environment variable management with full validation.
"""
from __future__ import annotations

import json
from typing import Any

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────────────────────
    APP_NAME: str = "InvoiceDesk"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_V1_STR: str = "/api/v1"

    # ── Security ──────────────────────────────────────────────────────────────
    SECRET_KEY: str = "change-this-secret-key-in-production-min-32-chars"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # ── Mock authentication backend ───────────────────────────────────────────
    MOCK_PASSWORD: str = "password"
    MOCK_VERIFICATION_TOKEN: str = "mock-verification-token"
    SIMULATED_LATENCY_SECONDS: float = 1.0

    # ── Session persistence ───────────────────────────────────────────────────
    SESSION_STORAGE_KEY: str = "currentUser"
    SESSION_STORAGE_PATH: str = ".invoicedesk/session.json"

    # ── Data ──────────────────────────────────────────────────────────────────
    SEED_DATA: bool = True
    DEFAULT_CURRENCY: str = "USD"

    # ── CORS ──────────────────────────────────────────────────────────────────
    ALLOWED_ORIGINS: list[str] = ["*"]

    # ── Rate Limiting ─────────────────────────────────────────────────────────
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_LOGIN: str = "5/minute"

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v: Any) -> list[str]:
        """Accept JSON array string or Python list."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except (json.JSONDecodeError, ValueError):
                pass
            # Comma-separated fallback
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("DEFAULT_CURRENCY")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        if len(self.SECRET_KEY) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters long")
        if self.SIMULATED_LATENCY_SECONDS < 0:
            raise ValueError("SIMULATED_LATENCY_SECONDS cannot be negative")
        return self

    @property
    def access_token_expire_seconds(self) -> int:
        return self.ACCESS_TOKEN_EXPIRE_MINUTES * 60


settings = Settings()
