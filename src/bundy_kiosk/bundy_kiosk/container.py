from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .attendance.coordinator import ToggleCoordinator
from .attendance.ledger import EventLedger
from .attendance.memory_ledger import InMemoryEventLedger
from .attendance.mysql_event_ledger import MySQLEventLedger
from .attendance.service import KioskService
from .core.constants import DEFAULT_TOGGLE_LOCK_TIMEOUT_SECONDS, DEFAULT_TOGGLE_MAX_ATTEMPTS
from .core.enums import LedgerBackend
from .database.connection import DBConfig, DatabaseConnection
from .employees.directory import EmployeeDirectory
from .employees.memory_directory import InMemoryEmployeeDirectory
from .employees.mysql_employee_directory import MySQLEmployeeDirectory
from .employees.roster import RosterGate


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    directory: EmployeeDirectory
    ledger: EventLedger

    roster: RosterGate
    coordinator: ToggleCoordinator
    kiosk_service: KioskService


def build_services(
    directory: EmployeeDirectory,
    ledger: EventLedger,
    *,
    conn: Optional[DatabaseConnection] = None,
    max_attempts: int = DEFAULT_TOGGLE_MAX_ATTEMPTS,
    lock_timeout: Optional[float] = DEFAULT_TOGGLE_LOCK_TIMEOUT_SECONDS,
) -> Container:
    roster = RosterGate(directory)
    coordinator = ToggleCoordinator(ledger, roster, max_attempts=max_attempts, lock_timeout=lock_timeout)
    kiosk_service = KioskService(roster, ledger, coordinator)

    return Container(
        conn=conn,
        directory=directory,
        ledger=ledger,
        roster=roster,
        coordinator=coordinator,
        kiosk_service=kiosk_service,
    )


def build_container(
    *,
    db_config: dict,
    backend: str = LedgerBackend.MYSQL.value,
    org_id: str = "",
    demo_employees: Iterable[dict] = (),
    max_attempts: int = DEFAULT_TOGGLE_MAX_ATTEMPTS,
    lock_timeout: Optional[float] = DEFAULT_TOGGLE_LOCK_TIMEOUT_SECONDS,
) -> Container:
    if LedgerBackend(backend) is LedgerBackend.MEMORY:
        return build_services(
            InMemoryEmployeeDirectory.from_records(demo_employees, default_org_id=org_id),
            InMemoryEventLedger(),
            max_attempts=max_attempts,
            lock_timeout=lock_timeout,
        )

    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(
        MySQLEmployeeDirectory(conn),
        MySQLEventLedger(conn),
        conn=conn,
        max_attempts=max_attempts,
        lock_timeout=lock_timeout,
    )
