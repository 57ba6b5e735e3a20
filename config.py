'''
Runtime configuration for HotelOS, read from the environment (and a .env file).
'''
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_ROOM_TYPES = ("Simple", "Double", "Suite", "Deluxe", "Presidential")
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class Settings(BaseModel):
    """Application settings."""

    storage_dir: Path = Path(".hotelos")
    room_types: tuple[str, ...] = DEFAULT_ROOM_TYPES
    currency: str = "MAD"
    seed_demo: bool = True
    log_level: str = "INFO"
    recent_limit: int = Field(default=5, gt=0)

    @field_validator("room_types")
    @classmethod
    def room_types_not_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(label.strip() for label in value if label.strip())
        if not cleaned:
            raise ValueError("At least one room type must be configured.")
        return cleaned

    @field_validator("log_level")
    @classmethod
    def log_level_upper(cls, value: str) -> str:
        return value.strip().upper()


def _parse_flag(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(f"Invalid boolean flag: {raw!r}")


@lru_cache
def get_settings() -> Settings:
    """
    Build the settings from HOTELOS_* environment variables.

    Returns:
        Settings: Validated settings; unset variables keep their defaults.

    Raises:
        ValueError: If a variable holds an invalid value.
    """
    load_dotenv()
    values: dict[str, object] = {}

    storage_dir = os.environ.get("HOTELOS_STORAGE_DIR")
    if storage_dir:
        values["storage_dir"] = Path(storage_dir)

    room_types = os.environ.get("HOTELOS_ROOM_TYPES")
    if room_types:
        values["room_types"] = tuple(room_types.split(","))

    currency = os.environ.get("HOTELOS_CURRENCY")
    if currency:
        values["currency"] = currency.strip()

    seed_demo = os.environ.get("HOTELOS_SEED_DEMO")
    if seed_demo:
        values["seed_demo"] = _parse_flag(seed_demo)

    log_level = os.environ.get("HOTELOS_LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level

    return Settings(**values)
