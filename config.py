"""
config.py — Application Settings
=================================
Every tunable lives here, validated by pydantic and overridable from the
environment with the STEPENGINE_ prefix:

    STEPENGINE_LOG_LEVEL=DEBUG STEPENGINE_PORT=8080 python main.py
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STEPENGINE_",
        extra="ignore",
    )

    # Flask
    secret_key: str  = "dsa-step-engine-dev-secret"
    host:       str  = "127.0.0.1"
    port:       int  = 5000
    debug:      bool = False

    # Logging
    log_level:  str = "INFO"
    log_format: str = "console"  # "console" | "json"
    configure_logging: bool = True  # create_app() installs the handlers

    # Structure defaults
    circular_queue_capacity: int = Field(default=8, ge=1)
    bucket_capacity:         int = Field(default=10, ge=1)
    refill_interval_ms:      int = Field(default=1500, ge=1)
    leak_interval_ms:        int = Field(default=1500, ge=1)

    # Playback
    default_speed: str = "medium"

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        if value not in ("console", "json"):
            raise ValueError(f"log_format must be 'console' or 'json', got {value!r}")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
