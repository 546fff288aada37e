from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Direction


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one immutable ledger entry.

    ``sequence`` counts the employee's events from 1 and orders events that
    share a ``created_at``.
    """

    event_id: int
    employee_id: str
    org_id: str
    direction: Direction
    sequence: int
    created_at: datetime


@dataclass(frozen=True)
class EmployeeStatus:
    """Read-model for one kiosk card."""

    employee_id: str
    name: str
    direction: Direction
    since: Optional[datetime] = None


@dataclass(frozen=True)
class LedgerCorruption:
    """Diagnostic: an event whose direction breaks the in/out alternation."""

    employee_id: str
    sequence: int
    direction: Direction
    previous_direction: Optional[Direction]

    def describe(self) -> str:
        previous = self.previous_direction.value if self.previous_direction else "none"
        return (
            f"employee {self.employee_id} event #{self.sequence} is "
            f"'{self.direction.value}' after '{previous}'"
        )
