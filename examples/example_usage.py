"""Example: using the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib

from barbershop_pos.config import get_settings_module
from barbershop_pos.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    print(container.stats_service.daily_stats().to_dict())
    for entry in container.stats_service.mpesa_leaderboard():
        print(entry.to_dict())


if __name__ == "__main__":
    main()
