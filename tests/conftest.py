from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.bundy_kiosk.bundy_kiosk.attendance.coordinator import ToggleCoordinator
from src.bundy_kiosk.bundy_kiosk.attendance.memory_ledger import InMemoryEventLedger
from src.bundy_kiosk.bundy_kiosk.employees.memory_directory import InMemoryEmployeeDirectory
from src.bundy_kiosk.bundy_kiosk.employees.model import Employee
from src.bundy_kiosk.bundy_kiosk.employees.roster import RosterGate

ORG = "org-1"


class StepClock:
    """Deterministic clock: every call advances by ``step`` unless pinned with ``set``."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def set(self, value: datetime) -> None:
        self.now = value

    def __call__(self) -> datetime:
        value = self.now
        self.now = self.now + self.step
        return value


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 30, 0)


@pytest.fixture
def clock(fixed_now) -> StepClock:
    return StepClock(fixed_now)


@pytest.fixture
def employees() -> list[Employee]:
    return [
        Employee(employee_id="e1", org_id=ORG, name="Riley"),
        Employee(employee_id="e2", org_id=ORG, name="alex"),
        Employee(employee_id="e3", org_id=ORG, name="Morgan", active=False),
        Employee(employee_id="e4", org_id=ORG, name="Drew", deleted_at=datetime(2026, 1, 15, 9, 0)),
        Employee(employee_id="e5", org_id="org-2", name="Quinn"),
    ]


@pytest.fixture
def directory(employees) -> InMemoryEmployeeDirectory:
    return InMemoryEmployeeDirectory(employees)


@pytest.fixture
def roster(directory) -> RosterGate:
    return RosterGate(directory)


@pytest.fixture
def ledger(clock) -> InMemoryEventLedger:
    return InMemoryEventLedger(clock=clock)


@pytest.fixture
def coordinator(ledger, roster) -> ToggleCoordinator:
    return ToggleCoordinator(ledger, roster)


@pytest.fixture
def org_id() -> str:
    return ORG
