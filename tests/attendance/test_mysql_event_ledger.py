from __future__ import annotations

from datetime import datetime

import mysql.connector
import pytest

from src.bundy_kiosk.bundy_kiosk.attendance.model import AttendanceEvent
from src.bundy_kiosk.bundy_kiosk.attendance.mysql_event_ledger import MySQLEventLedger
from src.bundy_kiosk.bundy_kiosk.core.enums import Direction
from src.bundy_kiosk.bundy_kiosk.core.exceptions import ReadError, WriteConflict, WriteError


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = None

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), tuple(params)))
        if self._conn.execute_error is not None:
            raise self._conn.execute_error
        self.lastrowid = self._conn.next_id

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        pass


class FakeConn:
    def __init__(self, *, rows=(), execute_error=None, next_id=41):
        self.rows = list(rows)
        self.execute_error = execute_error
        self.next_id = next_id
        self.executed = []
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, conn=None, connect_error=None):
        self.conn = conn or FakeConn()
        self.connect_error = connect_error
        self.connects = 0

    def connect(self):
        self.connects += 1
        if self.connect_error is not None:
            raise self.connect_error
        return self.conn


def _row(event_id, employee_id, direction, seq, created_at):
    return {
        "event_id": event_id,
        "employee_id": employee_id,
        "org_id": "org-1",
        "direction": direction,
        "seq_no": seq,
        "created_at": created_at,
    }


def test_append_inserts_next_sequence_and_commits(fixed_now):
    factory = FakeConnFactory()
    ledger = MySQLEventLedger(factory, clock=lambda: fixed_now)
    previous = AttendanceEvent(40, "e1", "org-1", Direction.IN, 4, datetime(2026, 2, 2, 7, 0))

    event = ledger.append("e1", "org-1", Direction.OUT, after=previous)

    sql, params = factory.conn.executed[0]
    assert sql.startswith("INSERT INTO attendance_events")
    assert params == ("e1", "org-1", "out", 5, fixed_now)
    assert factory.conn.committed
    assert event == AttendanceEvent(41, "e1", "org-1", Direction.OUT, 5, fixed_now)


def test_append_clamps_time_to_previous_event(fixed_now):
    factory = FakeConnFactory()
    ledger = MySQLEventLedger(factory, clock=lambda: fixed_now)
    later = datetime(2026, 2, 2, 9, 0)
    previous = AttendanceEvent(40, "e1", "org-1", Direction.IN, 1, later)

    event = ledger.append("e1", "org-1", Direction.OUT, after=previous)

    assert event.created_at == later


def test_duplicate_sequence_is_a_conflict(fixed_now):
    error = mysql.connector.IntegrityError(msg="Duplicate entry", errno=1062)
    factory = FakeConnFactory(FakeConn(execute_error=error))
    ledger = MySQLEventLedger(factory, clock=lambda: fixed_now)

    with pytest.raises(WriteConflict) as exc:
        ledger.append("e1", "org-1", Direction.IN, after=None)

    assert exc.value.expected_sequence == 0
    assert factory.conn.rolled_back


def test_other_integrity_errors_are_write_errors(fixed_now):
    error = mysql.connector.IntegrityError(msg="Cannot add or update a child row", errno=1452)
    ledger = MySQLEventLedger(FakeConnFactory(FakeConn(execute_error=error)), clock=lambda: fixed_now)

    with pytest.raises(WriteError):
        ledger.append("ghost", "org-1", Direction.IN, after=None)


def test_unreachable_store_on_append_is_write_error(fixed_now):
    factory = FakeConnFactory(connect_error=mysql.connector.InterfaceError(msg="Can't connect"))
    ledger = MySQLEventLedger(factory, clock=lambda: fixed_now)

    with pytest.raises(WriteError):
        ledger.append("e1", "org-1", Direction.IN, after=None)


def test_unreachable_store_on_read_is_read_error():
    factory = FakeConnFactory(connect_error=mysql.connector.OperationalError(msg="gone away"))
    ledger = MySQLEventLedger(factory)

    with pytest.raises(ReadError):
        ledger.latest_for("e1")
    with pytest.raises(ReadError):
        ledger.latest_for_all(["e1"])


def test_latest_for_maps_row(fixed_now):
    factory = FakeConnFactory(FakeConn(rows=[_row(7, "e1", "in", 3, fixed_now)]))
    ledger = MySQLEventLedger(factory)

    event = ledger.latest_for("e1")

    assert event == AttendanceEvent(7, "e1", "org-1", Direction.IN, 3, fixed_now)
    assert factory.conn.executed[0][1] == ("e1",)


def test_latest_for_without_events():
    assert MySQLEventLedger(FakeConnFactory()).latest_for("e1") is None


def test_latest_for_all_is_a_single_query(fixed_now):
    rows = [_row(7, "e1", "in", 3, fixed_now), _row(9, "e2", "out", 2, fixed_now)]
    factory = FakeConnFactory(FakeConn(rows=rows))
    ledger = MySQLEventLedger(factory)

    latest = ledger.latest_for_all(["e1", "e2", "e3", "e1"])

    assert factory.connects == 1
    assert len(factory.conn.executed) == 1
    sql, params = factory.conn.executed[0]
    assert "GROUP BY employee_id" in sql
    assert params == ("e1", "e2", "e3")
    assert latest["e1"].direction == Direction.IN
    assert latest["e2"].direction == Direction.OUT
    assert latest["e3"] is None


def test_latest_for_all_empty_skips_the_store():
    factory = FakeConnFactory()
    assert MySQLEventLedger(factory).latest_for_all([]) == {}
    assert factory.connects == 0


def test_events_for_is_ordered_by_sequence(fixed_now):
    rows = [_row(1, "e1", "in", 1, fixed_now), _row(2, "e1", "out", 2, fixed_now)]
    factory = FakeConnFactory(FakeConn(rows=rows))

    events = MySQLEventLedger(factory).events_for("e1")

    assert [e.sequence for e in events] == [1, 2]
    assert "ORDER BY seq_no ASC" in factory.conn.executed[0][0]


def test_employees_with_events_queries_the_org():
    factory = FakeConnFactory(FakeConn(rows=[{"employee_id": "e1"}, {"employee_id": "e3"}]))

    ids = MySQLEventLedger(factory).employees_with_events("org-1")

    assert ids == ["e1", "e3"]
    sql, params = factory.conn.executed[0]
    assert "SELECT DISTINCT employee_id" in sql
    assert params == ("org-1",)
