from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations.

    ``code`` is the stable identifier returned to kiosk clients.
    """

    code = "error"


class ValidationError(DomainError):
    """Raised when request input is missing or malformed."""

    code = "bad_request"


class NotEligible(DomainError):
    """Raised when a toggle targets an unknown, inactive, deleted or foreign employee."""

    code = "not_eligible"

    def __init__(self, employee_id: str, reason: str):
        super().__init__(f"Employee {employee_id} cannot clock: {reason}")
        self.employee_id = employee_id
        self.reason = reason


class StoreError(DomainError):
    """Raised when the underlying store cannot be reached."""

    code = "unavailable"


class ReadError(StoreError):
    """Raised when a ledger or directory read fails."""


class WriteError(StoreError):
    """Raised when an append fails or cannot complete in time."""


class RetryExhausted(WriteError):
    """Raised when every compare-and-append attempt lost a race."""

    code = "conflict_retry_exhausted"

    def __init__(self, employee_id: str, attempts: int):
        super().__init__(f"Toggle for employee {employee_id} conflicted {attempts} times")
        self.employee_id = employee_id
        self.attempts = attempts


class WriteConflict(Exception):
    """Raised by a ledger when a newer event exists than the one the writer read."""

    def __init__(self, employee_id: str, expected_sequence: int):
        super().__init__(f"Ledger moved past sequence {expected_sequence} for employee {employee_id}")
        self.employee_id = employee_id
        self.expected_sequence = expected_sequence
