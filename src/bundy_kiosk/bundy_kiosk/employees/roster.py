from __future__ import annotations

import logging
from typing import List

from ..core.exceptions import NotEligible
from .directory import EmployeeDirectory
from .model import Employee

logger = logging.getLogger(__name__)


class RosterGate:
    """Use case: decide which employees may clock on a kiosk."""

    def __init__(self, directory: EmployeeDirectory):
        self._directory = directory

    def eligible_employees(self, org_id: str) -> List[Employee]:
        # Re-check org and eligibility; a stale or loose directory must not widen the roster.
        employees = [
            e for e in self._directory.list_active(org_id) if e.org_id == org_id and e.is_eligible
        ]
        employees.sort(key=lambda e: (e.name.casefold(), e.employee_id))
        return employees

    def require_eligible(self, employee_id: str, org_id: str) -> Employee:
        employee = self._directory.get_by_id(employee_id)
        if employee is None:
            reason = "unknown employee"
        elif employee.org_id != org_id:
            reason = "belongs to another organization"
        elif employee.deleted_at is not None:
            reason = "employee was deleted"
        elif not employee.active:
            reason = "employee is inactive"
        else:
            return employee

        logger.info("Refused toggle for employee %s in org %s: %s", employee_id, org_id, reason)
        raise NotEligible(employee_id, reason)
