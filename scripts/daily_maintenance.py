"""Daily sweep: close yesterday's open shifts and clear away/suspended flags.

Meant to be run by cron shortly after midnight, e.g.::

    5 0 * * * cd /srv/barbershop-pos && python scripts/daily_maintenance.py
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from dotenv import load_dotenv

from barbershop_pos.config import get_settings_module
from barbershop_pos.container import build_container


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG))
    report = container.maintenance_service.run_daily()
    print(
        f"OK: {report.swept_date.isoformat()} -> "
        f"{report.shifts_closed} shift(s) closed, {report.users_reset} user(s) reset"
    )


if __name__ == "__main__":
    main()
