"""Archive stock requests delivered more than a week ago.

Meant to be run by cron (or any external scheduler), e.g. once a day.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.staff_hub.staff_hub.common.logging_config import setup_logging
from src.staff_hub.staff_hub.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    setup_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        json_output=bool(getattr(settings, "LOG_JSON", False)),
    )

    container = build_container(db_config=dict(settings.DB_CONFIG), stale_seconds=0)
    archived = container.stock_request_service.archive_due()
    print(f"OK: Archived {archived} stock request(s)")


if __name__ == "__main__":
    main()
