# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache
from pathlib import Path

import httpx
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "http://localhost:3001/api"


def validate_base_url(value: str) -> str:
    """Return ``value`` stripped of trailing slashes or raise ``ValueError``."""
    candidate = (value or "").strip()
    try:
        url = httpx.URL(candidate)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ValueError(f"invalid base url: {candidate!r}") from exc
    if not url.is_absolute_url or url.scheme not in ("http", "https") or not url.host:
        raise ValueError(f"base url must be an absolute http(s) url: {candidate!r}")
    return candidate.rstrip("/")


class StorageConfig(BaseSettings):
    persist_session: bool = Field(True, alias="PERSIST_SESSION")
    token_store_path: Path | None = Field(
        Path(".safisha/session.json"), alias="TOKEN_STORE_PATH"
    )
    token_key: str = Field("auth_token", alias="TOKEN_STORE_KEY")
    refresh_token_key: str = Field("refresh_token", alias="TOKEN_STORE_REFRESH_KEY")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )

    @field_validator("persist_session", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @field_validator("token_store_path", mode="before")
    @classmethod
    def _empty_path_is_none(cls, value: str | Path | None) -> str | Path | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def _storage_config_factory() -> StorageConfig:
    return StorageConfig()  # type: ignore[call-arg]


class ClientConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    api_base_url: str = Field(DEFAULT_API_BASE_URL, alias="API_BASE_URL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    storage: StorageConfig = Field(default_factory=_storage_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        validate_by_name=True,
    )

    @field_validator("api_base_url", mode="before")
    @classmethod
    def _validate_api_base_url(cls, value: str | None) -> str:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_API_BASE_URL
        return validate_base_url(value)

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> ClientConfig:
    return ClientConfig()  # type: ignore[call-arg]


__all__ = ["ClientConfig", "DEFAULT_API_BASE_URL", "StorageConfig", "load_config", "validate_base_url"]
