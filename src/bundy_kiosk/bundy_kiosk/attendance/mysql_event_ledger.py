from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import not_before, now_utc
from ..core.constants import MYSQL_DUPLICATE_KEY_ERRNO
from ..core.enums import Direction
from ..core.exceptions import ReadError, WriteConflict, WriteError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, store_errors
from .ledger import EventLedger, next_sequence
from .model import AttendanceEvent

logger = logging.getLogger(__name__)

_COLUMNS = "event_id, employee_id, org_id, direction, seq_no, created_at"


def _to_event(r: dict) -> AttendanceEvent:
    return AttendanceEvent(
        event_id=int(r["event_id"]),
        employee_id=str(r["employee_id"]),
        org_id=str(r["org_id"]),
        direction=Direction(r["direction"]),
        sequence=int(r["seq_no"]),
        created_at=r["created_at"],
    )


class MySQLEventLedger(EventLedger):
    """Ledger over the ``attendance_events`` table.

    The unique (employee_id, seq_no) key is the commit point: an append
    computed from a stale read collides with the row written by the winner.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, clock: Callable[[], datetime] = now_utc):
        self._conn_factory = conn_factory
        self._clock = clock

    def append(
        self,
        employee_id: str,
        org_id: str,
        direction: Direction,
        *,
        after: Optional[AttendanceEvent],
    ) -> AttendanceEvent:
        direction = Direction(direction)
        sequence = next_sequence(after)
        created_at = not_before(self._clock(), after.created_at if after else None)

        with store_errors(WriteError, "appending attendance event"):
            try:
                with db_cursor(self._conn_factory) as (_, cur):
                    cur.execute(
                        """
                        INSERT INTO attendance_events(employee_id, org_id, direction, seq_no, created_at)
                        VALUES(%s,%s,%s,%s,%s)
                        """,
                        (employee_id, org_id, direction.value, sequence, created_at),
                    )
                    event_id = int(cur.lastrowid)
            except mysql.connector.IntegrityError as exc:
                if exc.errno != MYSQL_DUPLICATE_KEY_ERRNO:
                    raise
                logger.warning("Sequence %d already taken for employee %s", sequence, employee_id)
                raise WriteConflict(employee_id, sequence - 1) from exc

        return AttendanceEvent(
            event_id=event_id,
            employee_id=employee_id,
            org_id=org_id,
            direction=direction,
            sequence=sequence,
            created_at=created_at,
        )

    def latest_for(self, employee_id: str) -> Optional[AttendanceEvent]:
        with store_errors(ReadError, "reading latest attendance event"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM attendance_events
                    WHERE employee_id=%s
                    ORDER BY seq_no DESC
                    LIMIT 1
                    """,
                    (employee_id,),
                )
                r = fetchone(cur)
        return _to_event(r) if r else None

    def latest_for_all(self, employee_ids: Iterable[str]) -> Dict[str, Optional[AttendanceEvent]]:
        ids = list(dict.fromkeys(employee_ids))
        out: Dict[str, Optional[AttendanceEvent]] = {employee_id: None for employee_id in ids}
        if not ids:
            return out

        with store_errors(ReadError, "reading latest attendance events"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT e.event_id, e.employee_id, e.org_id, e.direction, e.seq_no, e.created_at
                    FROM attendance_events e
                    JOIN (
                        SELECT employee_id, MAX(seq_no) AS seq_no
                        FROM attendance_events
                        WHERE employee_id IN ({in_clause(ids)})
                        GROUP BY employee_id
                    ) newest ON newest.employee_id = e.employee_id AND newest.seq_no = e.seq_no
                    """,
                    tuple(ids),
                )
                rows = fetchall(cur)

        for r in rows:
            event = _to_event(r)
            out[event.employee_id] = event
        return out

    def events_for(self, employee_id: str) -> Sequence[AttendanceEvent]:
        with store_errors(ReadError, "reading attendance history"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM attendance_events
                    WHERE employee_id=%s
                    ORDER BY seq_no ASC
                    """,
                    (employee_id,),
                )
                rows = fetchall(cur)
        return [_to_event(r) for r in rows]

    def employees_with_events(self, org_id: str) -> Sequence[str]:
        with store_errors(ReadError, "listing ledger employees"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT DISTINCT employee_id
                    FROM attendance_events
                    WHERE org_id=%s
                    ORDER BY employee_id
                    """,
                    (org_id,),
                )
                rows = fetchall(cur)
        return [str(r["employee_id"]) for r in rows]
