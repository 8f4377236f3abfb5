"""Runtime settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wssec.schemas import MAX_WINDOW_SECONDS, ValidationPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WSSEC_", extra="ignore")

    log_level: str = "info"
    # TTL used both when building tokens and as the freshness window on receipt
    timestamp_ttl_seconds: int = Field(default=300, ge=-MAX_WINDOW_SECONDS, le=MAX_WINDOW_SECONDS)
    max_future_skew_seconds: int = Field(default=0, ge=0, le=MAX_WINDOW_SECONDS)

    def policy(self) -> ValidationPolicy:
        return ValidationPolicy(
            ttl_seconds=self.timestamp_ttl_seconds,
            max_future_skew_seconds=self.max_future_skew_seconds,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
