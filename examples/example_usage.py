"""Example: drive the service layer without Flask.

Controllers stay thin; the kiosk use cases live in KioskService.
"""

import importlib

from config import get_settings_module

from src.bundy_kiosk.bundy_kiosk.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        backend="memory",
        org_id=settings.ORG_ID,
        demo_employees=settings.DEMO_EMPLOYEES,
    )
    first = container.kiosk_service.board(settings.ORG_ID)[0]
    event = container.kiosk_service.toggle(first.employee_id, settings.ORG_ID)
    print(f"{first.name} clocked {event.direction.value} at {event.created_at:%H:%M:%S}")
    for status in container.kiosk_service.board(settings.ORG_ID):
        print(f"{status.name:<20} {status.direction.value}")


if __name__ == "__main__":
    main()
