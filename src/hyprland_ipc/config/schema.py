from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, field_validator

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ClientConfig(BaseModel):
    """Client settings loaded from config.yaml. All optional."""

    runtime_dir: Path | None = None
    instance: str | None = None
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}, got {v!r}")
        return level

    @field_validator("instance")
    @classmethod
    def validate_instance(cls, v: str | None) -> str | None:
        if v is not None and ("/" in v or not v.strip()):
            raise ValueError("instance must be a bare instance signature")
        return v
