'''
This file contains the key-value storage used to persist HotelOS collections.

Each collection lives in a named slot holding a JSON envelope:

    {"schema_version": 1, "items": [...]}

Slots written before the envelope existed hold a bare JSON array; both layouts load.
'''
import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from Hotels.errors import PersistenceWriteFailure

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
ROOMS_KEY = "hotelos_rooms"
RESERVATIONS_KEY = "hotelos_reservations"


class KeyValueStorage(Protocol):
    """Minimal get/set interface of a durable key-value store."""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Process-local storage; nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.slots: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.slots.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.slots[key] = value


class LocalStorage:
    """One JSON file per slot inside a directory."""

    # private interface
    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _slot_path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    # public interface
    def get_item(self, key: str) -> Optional[str]:
        path = self._slot_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._slot_path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)


def load(storage: KeyValueStorage, key: str, default: Any = None) -> Any:
    """
    Read a collection from a slot.

    Args:
        storage: Backend holding the slot.
        key: Slot name.
        default: Value returned when the slot is missing or unreadable.

    Returns:
        The stored list of records, or ``default``. Never raises for bad data.
    """
    if default is None:
        default = []
    # undecodable bytes surface as UnicodeDecodeError, a ValueError
    try:
        raw = storage.get_item(key)
    except (OSError, ValueError):
        logger.warning("Unable to read storage slot", extra={"key": key}, exc_info=True)
        return default
    if not raw:
        return default

    try:
        payload = json.loads(raw)
    except ValueError:
        logger.warning("Storage slot holds invalid JSON; using default", extra={"key": key})
        return default

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("items"), list):
        version = payload.get("schema_version")
        if version != SCHEMA_VERSION:
            logger.warning(
                "Unsupported schema version in storage slot; using default",
                extra={"key": key, "schema_version": version},
            )
            return default
        return payload["items"]

    logger.warning("Storage slot has an unexpected layout; using default", extra={"key": key})
    return default


def save(storage: KeyValueStorage, key: str, items: list[Any]) -> None:
    """
    Write a collection to a slot, synchronously.

    Args:
        storage: Backend holding the slot.
        key: Slot name.
        items: JSON-serializable records.

    Raises:
        PersistenceWriteFailure: When the backend refuses the write.
    """
    envelope = {"schema_version": SCHEMA_VERSION, "items": items}
    try:
        serialized = json.dumps(envelope, ensure_ascii=False)
        storage.set_item(key, serialized)
    except (OSError, TypeError, ValueError) as exc:
        logger.exception("Failed to save storage slot", extra={"key": key})
        raise PersistenceWriteFailure(key, str(exc)) from exc
