from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Presence state of an employee, stored lowercase in the database."""

    IN = "in"
    OUT = "out"

    @property
    def opposite(self) -> "Direction":
        return Direction.OUT if self is Direction.IN else Direction.IN


class LedgerBackend(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"
