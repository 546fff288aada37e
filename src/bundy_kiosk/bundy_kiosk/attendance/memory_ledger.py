from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..common.datetime_utils import not_before, now_utc
from ..core.enums import Direction
from ..core.exceptions import WriteConflict
from .ledger import EventLedger, next_sequence
from .model import AttendanceEvent


class InMemoryEventLedger(EventLedger):
    """Process-local ledger for development kiosks and tests.

    A single mutex makes each compare-and-append atomic, mirroring the unique
    (employee_id, sequence) key of the MySQL table.
    """

    def __init__(self, *, clock: Callable[[], datetime] = now_utc):
        self._clock = clock
        self._mutex = threading.Lock()
        self._events: Dict[str, List[AttendanceEvent]] = {}
        self._next_id = 1

    def append(
        self,
        employee_id: str,
        org_id: str,
        direction: Direction,
        *,
        after: Optional[AttendanceEvent],
    ) -> AttendanceEvent:
        with self._mutex:
            history = self._events.setdefault(employee_id, [])
            newest = history[-1] if history else None
            expected = after.event_id if after else None
            if (newest.event_id if newest else None) != expected:
                raise WriteConflict(employee_id, after.sequence if after else 0)

            event = AttendanceEvent(
                event_id=self._next_id,
                employee_id=employee_id,
                org_id=org_id,
                direction=Direction(direction),
                sequence=next_sequence(newest),
                created_at=not_before(self._clock(), newest.created_at if newest else None),
            )
            self._next_id += 1
            history.append(event)
            return event

    def latest_for(self, employee_id: str) -> Optional[AttendanceEvent]:
        with self._mutex:
            history = self._events.get(employee_id)
            return history[-1] if history else None

    def latest_for_all(self, employee_ids: Iterable[str]) -> Dict[str, Optional[AttendanceEvent]]:
        with self._mutex:
            out: Dict[str, Optional[AttendanceEvent]] = {}
            for employee_id in employee_ids:
                history = self._events.get(employee_id)
                out[employee_id] = history[-1] if history else None
            return out

    def events_for(self, employee_id: str) -> Sequence[AttendanceEvent]:
        with self._mutex:
            return list(self._events.get(employee_id, ()))

    def employees_with_events(self, org_id: str) -> Sequence[str]:
        with self._mutex:
            return sorted(
                employee_id
                for employee_id, history in self._events.items()
                if any(e.org_id == org_id for e in history)
            )
