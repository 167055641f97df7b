"""Application configuration utilities."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(default=True, description="Enable JSON formatted logs")


class MerchantConfig(BaseModel):
    """Merchant profile used by the purchase flow when a request brings no payload."""

    name: str = Field(default="qrisdyn", description="Label printed under rendered QR codes")
    base_payload: str | None = Field(default=None, description="Static QRIS payload issued by the acquirer")
    verify_base_checksum: bool = Field(default=True, description="Reject base payloads whose CRC does not match")


class Settings(BaseSettings):
    """Central application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QRISDYN_",
        env_nested_delimiter="__",
        env_file=(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
    )

    app_name: str = Field(default="qrisdyn")
    environment: Literal["development", "staging", "production"] = Field(default="development")
    api_key: str = Field(default="dev-secret-key")
    merchant: MerchantConfig = Field(default_factory=MerchantConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return memoized application settings."""

    return Settings()


settings = get_settings()
