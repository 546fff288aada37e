"""Check every eligible employee's history for broken in/out alternation.

Exit status is 1 when any finding is reported, so the script can run from cron.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.bundy_kiosk.bundy_kiosk.container import build_container
from src.bundy_kiosk.bundy_kiosk.logging_config import configure_logging


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--org", default=settings.ORG_ID, help="organization to audit")
    args = parser.parse_args()

    configure_logging(getattr(settings, "LOG_LEVEL", None))
    container = build_container(
        db_config=settings.DB_CONFIG,
        backend=settings.STORE_BACKEND,
        org_id=args.org,
        demo_employees=getattr(settings, "DEMO_EMPLOYEES", ()),
    )

    findings = container.kiosk_service.audit(args.org)
    for finding in findings:
        print(f"CORRUPT: {finding.describe()}")
    if findings:
        raise SystemExit(1)
    print(f"OK: ledger for org {args.org} alternates cleanly")


if __name__ == "__main__":
    main()
