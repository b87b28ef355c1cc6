# app/backend/core/config.py
from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_SECRET_KEY = "tasktracker-dev-secret-key-change-me-0000"

_ALLOWED_ENVS = {"dev", "prod", "test"}
_ALLOWED_ALGORITHMS = {"HS256", "HS384", "HS512"}


class Settings(BaseSettings):
    """
    Process configuration. Built once at startup and handed to the
    token service, identity extractor and storage engine.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    app_env: str = Field("dev", alias="ENV")

    # DB
    database_url: str = Field("sqlite:///./tasktracker.db", alias="DATABASE_URL")
    db_sslmode: Optional[str] = Field(None, alias="DB_SSLMODE")

    # JWT
    jwt_secret_key: str = Field(DEV_SECRET_KEY, alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    jwt_issuer: str = Field("TaskTrackerApi", alias="JWT_ISSUER")
    jwt_audience: str = Field("TaskTrackerApiUsers", alias="JWT_AUDIENCE")
    access_token_expire_minutes: int = Field(60, alias="ACCESS_TOKEN_EXPIRE_MINUTES", gt=0)

    # passwords
    bcrypt_rounds: int = Field(12, alias="BCRYPT_ROUNDS", ge=4, le=31)

    # HTTP
    cors_allow_origins: str = Field("http://localhost:3000", alias="CORS_ALLOW_ORIGINS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("app_env")
    @classmethod
    def _check_env(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in _ALLOWED_ENVS:
            allowed = "|".join(sorted(_ALLOWED_ENVS))
            raise ValueError(f"ENV must be one of {allowed}")
        return v

    @field_validator("jwt_algorithm")
    @classmethod
    def _check_algorithm(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in _ALLOWED_ALGORITHMS:
            raise ValueError("JWT_ALGORITHM must be an HMAC-SHA2 algorithm (HS256/HS384/HS512)")
        return v

    @model_validator(mode="after")
    def _check_secret(self) -> "Settings":
        if self.app_env == "prod" and self.jwt_secret_key == DEV_SECRET_KEY:
            raise ValueError("JWT_SECRET_KEY must be set when ENV=prod")
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]
