# Rebuilds the screen table of the booking database from the seed CSV.
# Run this after editing Screens.csv; the booking terminal only seeds an empty table.

import sys

from cinema import PersistenceError
from cinema_logging import setup_logging
from cinema_settings import get_settings
from cinema_store import open_stores, seed_screens


def main():
    settings = get_settings()
    setup_logging(settings)

    try:
        screen_store, _ = open_stores(settings.database_url)
        screen_store.reset()  # seed_screens only fills an empty store
        added, duplicates = seed_screens(screen_store, settings.seed_csv)
    except PersistenceError as e:
        print(f"Error: {e.message}")
        return 1

    for duplicate in duplicates:
        print(f"Skipped: {duplicate.message}")
    print(f"{added} screens written to {settings.database_url}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
