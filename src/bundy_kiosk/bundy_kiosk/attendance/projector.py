"""Pure derivations of presence state from ledger contents.

Nothing here performs I/O or mutates its inputs; a broken alternation is
reported, never repaired.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from ..core.enums import Direction
from ..employees.model import Employee
from .model import AttendanceEvent, LedgerCorruption

logger = logging.getLogger(__name__)


def status_of(event: Optional[AttendanceEvent]) -> Direction:
    return event.direction if event is not None else Direction.OUT


def next_direction(current: Direction) -> Direction:
    return Direction(current).opposite


def statuses_for(
    employees: Sequence[Employee],
    latest: Mapping[str, Optional[AttendanceEvent]],
) -> Dict[str, Direction]:
    return {e.employee_id: status_of(latest.get(e.employee_id)) for e in employees}


def find_corruption(events: Sequence[AttendanceEvent]) -> List[LedgerCorruption]:
    """Check one employee's history (oldest first) against the in/out alternation."""

    findings: List[LedgerCorruption] = []
    previous: Optional[AttendanceEvent] = None
    for event in events:
        expected = next_direction(status_of(previous))
        if event.direction != expected:
            finding = LedgerCorruption(
                employee_id=event.employee_id,
                sequence=event.sequence,
                direction=event.direction,
                previous_direction=previous.direction if previous else None,
            )
            logger.error("Ledger corruption: %s", finding.describe())
            findings.append(finding)
        previous = event
    return findings
