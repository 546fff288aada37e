from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.bundy_kiosk.bundy_kiosk.database.bootstrap import seed_employees


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    count = seed_employees(db_config, settings.DEMO_EMPLOYEES, org_id=settings.ORG_ID)

    print(
        f"OK: Seeded {count} employees for org {settings.ORG_ID} -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
