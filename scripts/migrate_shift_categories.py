"""Rewrite legacy ``[PAID-LEAVE] ...`` department prefixes into the shifts.category column."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staff_hub.staff_hub.common.logging_config import setup_logging
from src.staff_hub.staff_hub.database.bootstrap import migrate_shift_categories


def main() -> None:
    setup_logging()
    settings = importlib.import_module(get_settings_module())
    migrated = migrate_shift_categories(dict(settings.DB_CONFIG))
    print(f"OK: Migrated {migrated} shift(s)")


if __name__ == "__main__":
    main()
