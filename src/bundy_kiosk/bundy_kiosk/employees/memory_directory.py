from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

from .directory import EmployeeDirectory
from .model import Employee


class InMemoryEmployeeDirectory(EmployeeDirectory):
    """Static roster for development kiosks running without MySQL."""

    def __init__(self, employees: Iterable[Employee] = ()):
        self._by_id: Dict[str, Employee] = {e.employee_id: e for e in employees}

    @classmethod
    def from_records(cls, records: Iterable[dict], *, default_org_id: str = "") -> "InMemoryEmployeeDirectory":
        return cls(
            Employee(
                employee_id=str(r["employee_id"]),
                org_id=str(r.get("org_id") or default_org_id),
                name=str(r["name"]),
                active=bool(r.get("active", True)),
                deleted_at=r.get("deleted_at"),
            )
            for r in records
        )

    def list_active(self, org_id: str) -> Sequence[Employee]:
        return [e for e in self._by_id.values() if e.org_id == org_id and e.is_eligible]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)
