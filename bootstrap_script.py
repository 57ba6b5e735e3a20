from __future__ import annotations

import argparse
import logging
from typing import Sequence

from config import get_settings
from Database.db import RESERVATIONS_KEY, ROOMS_KEY, LocalStorage, load, save
from Hotels.inventory import HotelInventory


LOGGER = logging.getLogger(__name__)


def reset_storage(storage: LocalStorage) -> None:
    """Empty both slots so the next start installs the demo data again."""

    for key in (ROOMS_KEY, RESERVATIONS_KEY):
        save(storage, key, [])
        LOGGER.info("Cleared slot %s", key)


def describe_storage(storage: LocalStorage) -> dict[str, int]:
    """Count the records held by each slot."""

    return {key: len(load(storage, key, [])) for key in (ROOMS_KEY, RESERVATIONS_KEY)}


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point that prepares the storage directory and seeds demo data."""

    parser = argparse.ArgumentParser(description="Initialize HotelOS storage.")
    parser.add_argument("--reset", action="store_true", help="discard stored rooms and reservations first")
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(message)s")
    storage = LocalStorage(settings.storage_dir)

    if args.reset:
        LOGGER.info("Resetting storage under %s", settings.storage_dir)
        reset_storage(storage)

    HotelInventory.open(storage, settings)
    counts = describe_storage(storage)
    LOGGER.info(
        "Storage ready: %s rooms, %s reservations",
        counts[ROOMS_KEY],
        counts[RESERVATIONS_KEY],
    )


if __name__ == "__main__":
    main()
