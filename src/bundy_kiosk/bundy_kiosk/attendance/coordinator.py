from __future__ import annotations

import logging
from typing import Optional

from ..common.locks import KeyedLock, LockTimeout
from ..core.constants import DEFAULT_TOGGLE_LOCK_TIMEOUT_SECONDS, DEFAULT_TOGGLE_MAX_ATTEMPTS
from ..core.exceptions import RetryExhausted, WriteConflict, WriteError
from ..employees.model import Employee
from ..employees.roster import RosterGate
from .ledger import EventLedger
from .model import AttendanceEvent
from .projector import next_direction, status_of

logger = logging.getLogger(__name__)


class ToggleCoordinator:
    """Sole writer of attendance events.

    Each toggle runs read-compute-append inside a per-employee critical
    section. Within a process the section is a keyed lock; across kiosk
    workers the ledger's compare-and-append rejects stale writes, which are
    retried from a fresh read up to ``max_attempts`` times.
    """

    def __init__(
        self,
        ledger: EventLedger,
        roster: RosterGate,
        *,
        locks: Optional[KeyedLock] = None,
        max_attempts: int = DEFAULT_TOGGLE_MAX_ATTEMPTS,
        lock_timeout: Optional[float] = DEFAULT_TOGGLE_LOCK_TIMEOUT_SECONDS,
    ):
        if int(max_attempts) < 1:
            raise ValueError("max_attempts must be at least 1")
        self._ledger = ledger
        self._roster = roster
        self._locks = locks if locks is not None else KeyedLock()
        self._max_attempts = int(max_attempts)
        self._lock_timeout = lock_timeout

    def toggle(self, employee_id: str, org_id: str) -> AttendanceEvent:
        employee = self._roster.require_eligible(employee_id, org_id)

        try:
            with self._locks.hold(employee.employee_id, timeout=self._lock_timeout):
                return self._toggle_locked(employee)
        except LockTimeout as exc:
            logger.error("Toggle for employee %s timed out waiting for its lock", employee.employee_id)
            raise WriteError(f"Toggle for employee {employee.employee_id} timed out") from exc

    def _toggle_locked(self, employee: Employee) -> AttendanceEvent:
        for attempt in range(1, self._max_attempts + 1):
            latest = self._ledger.latest_for(employee.employee_id)
            direction = next_direction(status_of(latest))
            try:
                event = self._ledger.append(
                    employee.employee_id,
                    employee.org_id,
                    direction,
                    after=latest,
                )
            except WriteConflict:
                logger.warning(
                    "Conflicting append for employee %s (attempt %d/%d)",
                    employee.employee_id,
                    attempt,
                    self._max_attempts,
                )
                continue

            logger.info(
                "Employee %s clocked %s (event %s, #%d)",
                employee.employee_id,
                event.direction.value,
                event.event_id,
                event.sequence,
            )
            return event

        logger.error("Giving up on toggle for employee %s after %d attempts", employee.employee_id, self._max_attempts)
        raise RetryExhausted(employee.employee_id, self._max_attempts)
