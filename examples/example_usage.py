"""Example: use the service layer without Flask.

Controllers are a thin layer; the school workflows live in the services, so a
script can reuse them directly (no login session, so no auth is attached).
"""

import importlib

from config import get_settings_module

from src.school_admin.school_admin.container import build_container
from src.school_admin.school_admin.core.enums import TargetGroup


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(sync_config=settings.SYNC_CONFIG, school_config=settings.SCHOOL_CONFIG)
    print(container.dashboard_service.summary())
    for line in container.nutrition_service.shopping_list(date="15/03/2567", target_group=TargetGroup.PRIMARY):
        print(line.ingredient.name, line.total_amount, line.total_price)


if __name__ == "__main__":
    main()
