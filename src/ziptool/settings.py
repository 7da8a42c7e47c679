"""Runtime settings sourced from ``ZIPTOOL_*`` environment variables."""

from __future__ import annotations

from typing import Final

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BUFFER_SIZE: Final[int] = 0x10000


class ZipToolSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ZIPTOOL_", extra="ignore")

    buffer_size: int = Field(
        default=DEFAULT_BUFFER_SIZE,
        gt=0,
        description="Size in bytes of the buffer used to copy entry contents",
    )
    log_level: str = Field(default="WARNING", description="Level for the ziptool logger")
    debug: bool = Field(
        default=False,
        description="Re-raise unexpected CLI failures with a traceback",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> str:
        return str(value).strip().upper() or "WARNING"


def get_settings() -> ZipToolSettings:
    """Return settings built from the current environment."""

    return ZipToolSettings()


def resolve_buffer_size(explicit: int | None) -> int:
    if explicit is not None:
        if explicit <= 0:
            raise ValueError(f"buffer_size must be positive, got {explicit}")
        return explicit
    return get_settings().buffer_size


__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "ZipToolSettings",
    "get_settings",
    "resolve_buffer_size",
]
