from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol, Sequence

from ..core.enums import Direction
from .model import AttendanceEvent


class EventLedger(Protocol):
    """Append-only store of attendance events.

    Reads raise ``ReadError`` and appends raise ``WriteError`` when the store is
    unreachable. ``append`` is a compare-and-append: ``after`` must still be the
    newest event for the employee, otherwise ``WriteConflict`` is raised and
    nothing is written.
    """

    def append(
        self,
        employee_id: str,
        org_id: str,
        direction: Direction,
        *,
        after: Optional[AttendanceEvent],
    ) -> AttendanceEvent:
        raise NotImplementedError

    def latest_for(self, employee_id: str) -> Optional[AttendanceEvent]:
        raise NotImplementedError

    def latest_for_all(self, employee_ids: Iterable[str]) -> Dict[str, Optional[AttendanceEvent]]:
        """Newest event per employee in one bulk read; every requested id is a key."""

        raise NotImplementedError

    def events_for(self, employee_id: str) -> Sequence[AttendanceEvent]:
        """Full history of one employee, oldest first."""

        raise NotImplementedError

    def employees_with_events(self, org_id: str) -> Sequence[str]:
        """Ids of every employee with at least one event in the organization, sorted."""

        raise NotImplementedError


def next_sequence(after: Optional[AttendanceEvent]) -> int:
    return after.sequence + 1 if after else 1
