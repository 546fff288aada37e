from __future__ import annotations

from typing import List

from ..employees.roster import RosterGate
from .coordinator import ToggleCoordinator
from .ledger import EventLedger
from .model import AttendanceEvent, EmployeeStatus, LedgerCorruption
from .projector import find_corruption, statuses_for


class KioskService:
    """Use cases behind the kiosk screen: show the board, toggle a card, audit the ledger."""

    def __init__(self, roster: RosterGate, ledger: EventLedger, coordinator: ToggleCoordinator):
        self._roster = roster
        self._ledger = ledger
        self._coordinator = coordinator

    def board(self, org_id: str) -> List[EmployeeStatus]:
        employees = self._roster.eligible_employees(org_id)
        latest = self._ledger.latest_for_all(e.employee_id for e in employees)
        statuses = statuses_for(employees, latest)

        out: List[EmployeeStatus] = []
        for e in employees:
            event = latest.get(e.employee_id)
            out.append(
                EmployeeStatus(
                    employee_id=e.employee_id,
                    name=e.name,
                    direction=statuses[e.employee_id],
                    since=event.created_at if event else None,
                )
            )
        return out

    def toggle(self, employee_id: str, org_id: str) -> AttendanceEvent:
        return self._coordinator.toggle(employee_id, org_id)

    def audit(self, org_id: str) -> List[LedgerCorruption]:
        # Walks the ledger, not the roster: deactivated or deleted employees keep their history.
        findings: List[LedgerCorruption] = []
        for employee_id in self._ledger.employees_with_events(org_id):
            findings.extend(find_corruption(self._ledger.events_for(employee_id)))
        return findings
