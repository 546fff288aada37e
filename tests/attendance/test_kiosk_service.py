from __future__ import annotations

from datetime import datetime

import pytest

from src.bundy_kiosk.bundy_kiosk.attendance.coordinator import ToggleCoordinator
from src.bundy_kiosk.bundy_kiosk.attendance.memory_ledger import InMemoryEventLedger
from src.bundy_kiosk.bundy_kiosk.attendance.model import AttendanceEvent
from src.bundy_kiosk.bundy_kiosk.attendance import service as service_module
from src.bundy_kiosk.bundy_kiosk.attendance.service import KioskService
from src.bundy_kiosk.bundy_kiosk.core.enums import Direction
from src.bundy_kiosk.bundy_kiosk.core.exceptions import NotEligible, ReadError


class CountingLedger(InMemoryEventLedger):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.single_reads = 0
        self.bulk_reads = 0

    def latest_for(self, employee_id):
        self.single_reads += 1
        return super().latest_for(employee_id)

    def latest_for_all(self, employee_ids):
        self.bulk_reads += 1
        return super().latest_for_all(employee_ids)


class DownLedger(InMemoryEventLedger):
    def latest_for_all(self, employee_ids):
        raise ReadError("store down")


class CorruptLedger(InMemoryEventLedger):
    """Holds a history the coordinator would never have written."""

    def __init__(self, events):
        super().__init__()
        self._history = list(events)

    def events_for(self, employee_id):
        return [e for e in self._history if e.employee_id == employee_id]

    def employees_with_events(self, org_id):
        return sorted({e.employee_id for e in self._history if e.org_id == org_id})


@pytest.fixture
def counting_ledger(clock):
    return CountingLedger(clock=clock)


@pytest.fixture
def service(roster, counting_ledger):
    return KioskService(roster, counting_ledger, ToggleCoordinator(counting_ledger, roster))


def test_board_lists_eligible_employees_out_by_default(service, org_id):
    board = service.board(org_id)

    assert [(s.employee_id, s.direction) for s in board] == [("e2", Direction.OUT), ("e1", Direction.OUT)]
    assert all(s.since is None for s in board)


def test_board_uses_one_bulk_read(service, counting_ledger, org_id):
    counting_ledger.append("e1", org_id, Direction.IN, after=None)

    service.board(org_id)

    assert counting_ledger.bulk_reads == 1
    assert counting_ledger.single_reads == 0


def test_board_reflects_toggle(service, org_id, fixed_now):
    event = service.toggle("e1", org_id)

    board = {s.employee_id: s for s in service.board(org_id)}

    assert board["e1"].direction == Direction.IN
    assert board["e1"].since == event.created_at == fixed_now
    assert board["e2"].direction == Direction.OUT


def test_board_is_stable_without_toggles(service, org_id):
    service.toggle("e2", org_id)
    assert service.board(org_id) == service.board(org_id)


def test_deleted_employee_is_hidden_and_refused(service, counting_ledger, org_id):
    assert "e4" not in {s.employee_id for s in service.board(org_id)}

    with pytest.raises(NotEligible):
        service.toggle("e4", org_id)

    assert counting_ledger.events_for("e4") == []


def test_board_read_failure_propagates(roster, org_id):
    ledger = DownLedger()
    service = KioskService(roster, ledger, ToggleCoordinator(ledger, roster))

    with pytest.raises(ReadError):
        service.board(org_id)


def test_audit_reports_repeated_direction(roster, org_id):
    events = [
        AttendanceEvent(1, "e1", org_id, Direction.IN, 1, datetime(2026, 2, 2, 8, 0)),
        AttendanceEvent(2, "e1", org_id, Direction.IN, 2, datetime(2026, 2, 2, 8, 0)),
        AttendanceEvent(3, "e2", org_id, Direction.IN, 1, datetime(2026, 2, 2, 8, 5)),
    ]
    ledger = CorruptLedger(events)
    service = KioskService(roster, ledger, ToggleCoordinator(ledger, roster))

    findings = service.audit(org_id)

    assert [(f.employee_id, f.sequence) for f in findings] == [("e1", 2)]


def test_audit_clean_after_toggles(service, org_id):
    for _ in range(3):
        service.toggle("e1", org_id)
        service.toggle("e2", org_id)

    assert service.audit(org_id) == []


def test_board_directions_come_from_the_projector(service, org_id, monkeypatch):
    calls = []
    real = service_module.statuses_for

    def spy(employees, latest):
        calls.append([e.employee_id for e in employees])
        return real(employees, latest)

    monkeypatch.setattr(service_module, "statuses_for", spy)
    service.toggle("e1", org_id)

    board = service.board(org_id)

    assert calls == [["e2", "e1"]]
    assert {s.employee_id: s.direction for s in board} == {"e2": Direction.OUT, "e1": Direction.IN}


def test_audit_covers_employees_no_longer_on_the_roster(roster, org_id):
    events = [
        AttendanceEvent(1, "e3", org_id, Direction.IN, 1, datetime(2026, 2, 2, 8, 0)),
        AttendanceEvent(2, "e3", org_id, Direction.IN, 2, datetime(2026, 2, 2, 9, 0)),
        AttendanceEvent(3, "e4", org_id, Direction.OUT, 1, datetime(2026, 2, 2, 8, 0)),
        AttendanceEvent(4, "e5", "org-2", Direction.OUT, 1, datetime(2026, 2, 2, 8, 0)),
    ]
    ledger = CorruptLedger(events)
    service = KioskService(roster, ledger, ToggleCoordinator(ledger, roster))

    findings = service.audit(org_id)

    assert [(f.employee_id, f.sequence) for f in findings] == [("e3", 2), ("e4", 1)]
