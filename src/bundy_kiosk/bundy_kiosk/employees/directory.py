from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeDirectory(Protocol):
    """Read-only view of the externally owned employee roster.

    Implementations raise ``ReadError`` when the roster store is unreachable.
    """

    def list_active(self, org_id: str) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError
