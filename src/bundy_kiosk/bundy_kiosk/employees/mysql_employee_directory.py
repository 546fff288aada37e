from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import ReadError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, store_errors
from .directory import EmployeeDirectory
from .model import Employee


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=str(row["employee_id"]),
        org_id=str(row["org_id"]),
        name=row["name"],
        active=bool(row.get("active", True)),
        deleted_at=row.get("deleted_at"),
    )


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self, org_id: str) -> Sequence[Employee]:
        with store_errors(ReadError, "listing employees"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT employee_id, org_id, name, active, deleted_at
                    FROM employees
                    WHERE org_id=%s AND active=1 AND deleted_at IS NULL
                    ORDER BY name
                    """,
                    (org_id,),
                )
                rows = fetchall(cur)
        return [_to_employee(r) for r in rows]

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with store_errors(ReadError, "loading employee"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT employee_id, org_id, name, active, deleted_at
                    FROM employees
                    WHERE employee_id=%s
                    """,
                    (employee_id,),
                )
                row = fetchone(cur)
        return _to_employee(row) if row else None
