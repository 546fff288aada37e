from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as published by the Employee Directory.

    Note: the kiosk never writes these records; soft deletion is signalled by ``deleted_at``.
    """

    employee_id: str
    org_id: str
    name: str
    active: bool = True
    deleted_at: Optional[datetime] = None

    @property
    def is_eligible(self) -> bool:
        return self.active and self.deleted_at is None
