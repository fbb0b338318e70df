# -*- coding: utf-8 -*-
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "kalluba-dev-secret-change-me-before-deploying"


def _project_root() -> Path:
    return Path(__file__).resolve().parents[1]


class VConfig(BaseSettings):
    """Project configuration loaded from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=str(_project_root() / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ---------- App & Logging ----------
    app_env: str = Field("dev", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_requests: bool = Field(True, validation_alias="LOG_REQUESTS")
    request_id_header: str = Field("X-Request-ID", validation_alias="REQUEST_ID_HEADER")
    generate_request_id: bool = Field(True, validation_alias="GENERATE_REQUEST_ID")

    cors_origins: str = Field("*", validation_alias="CORS_ORIGINS")

    # ---------- Auth/JWT ----------
    jwt_secret_key: str = Field(DEV_JWT_SECRET, validation_alias="JWT_SECRET_KEY", min_length=32)
    jwt_algorithm: str = Field("HS256", validation_alias="JWT_ALGORITHM")
    jwt_issuer: str = Field("kalluba", validation_alias="JWT_ISSUER")
    jwt_expire_days: int = Field(7, validation_alias="JWT_EXPIRE_DAYS", ge=1)

    # ---------- Rate limit ----------
    rate_limit_window_seconds: int = Field(15 * 60, validation_alias="RATE_LIMIT_WINDOW_SECONDS", ge=1)
    login_max_attempts: int = Field(5, validation_alias="LOGIN_MAX_ATTEMPTS", ge=1)
    registration_max_attempts: int = Field(3, validation_alias="REGISTRATION_MAX_ATTEMPTS", ge=1)

    # ---------- Seed ----------
    seed_data: bool = Field(True, validation_alias="SEED_DATA")
    seed_user_password: str = Field("Kalluba2025", validation_alias="SEED_USER_PASSWORD", min_length=8)

    @field_validator("jwt_algorithm", mode="before")
    @classmethod
    def _normalize_algorithm(cls, v):
        # "" -> HS256
        if v is None or (isinstance(v, str) and not v.strip()):
            return "HS256"
        return str(v).strip().upper()

    def ensure_production_safe(self) -> None:
        if self.app_env != "dev" and self.jwt_secret_key == DEV_JWT_SECRET:
            raise RuntimeError("JWT_SECRET_KEY must be set in non-dev environments.")


@lru_cache(maxsize=1)
def get_config() -> VConfig:
    return VConfig()


vconfig = get_config()
