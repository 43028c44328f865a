# File: winajaya/core/config.py

import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field, field_validator

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "https://winajaya.vercel.app",  # frontend production
    "capacitor://localhost",
    "http://localhost",
]


def _environment_from_env() -> str:
    return os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development"


def _origins_from_env():
    raw = os.getenv("CORS_ORIGINS")
    return raw if raw else list(DEFAULT_ALLOWED_ORIGINS)


class Settings(BaseModel):
    # Basic app info
    PROJECT_NAME: str = "Winajaya API"
    VERSION: str = "0.1.0"

    api_prefix: str = "/api"
    environment: str = Field(default_factory=_environment_from_env)
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "3001")))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # CORS
    allowed_origins: List[str] = Field(default_factory=_origins_from_env, validate_default=True)
    cors_allow_methods: List[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]
    cors_allow_headers: List[str] = [
        "Content-Type",
        "Authorization",
        "X-Requested-With",
        "Accept",
        "Origin",
        "Cache-Control",
    ]

    # Request bodies (JSON and urlencoded)
    max_body_size: int = 10 * 1024 * 1024  # 10mb

    # Database
    database_url: str = Field(
        default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///./winajaya.db")
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, (list, tuple)):
            return list(v)
        return []

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
