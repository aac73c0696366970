"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from enum import Enum


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PermissionDeniedError(DomainException):
    """The acting role may not perform the requested operation."""


class PersistenceError(DomainException):
    """The backing store could not be read or written."""


class RollbackFailedError(PersistenceError):
    """Undoing a failed unit of work did not complete.

    Writes made inside the unit of work may still be in storage.
    """


class ConcurrencyConflictError(DomainException):
    """A conditional update found rows in an unexpected state.

    Raised when a serial was taken by another dispatch between scanning
    and confirmation.
    """

    def __init__(self, message: str, serials: list[str]) -> None:
        super().__init__(message)
        self.serials = serials


class ScanRejection(Enum):
    MISSING_SERIAL = "missing_serial"
    ALREADY_SCANNED = "already_scanned"
    NOT_FOUND = "not_found"
    ALREADY_DISPATCHED = "already_dispatched"
    UNITS_ALREADY_DISPATCHED = "units_already_dispatched"
    ALL_UNITS_SCANNED = "all_units_scanned"
    PRODUCT_NOT_IN_ORDER = "product_not_in_order"
    NO_AVAILABLE_STOCK = "no_available_stock"
    ALL_AVAILABLE_SCANNED = "all_available_scanned"


class ScanRejectedError(ValidationError):
    """A serial (or bulk request) was refused by the scan session.

    The session is left unchanged; ``reason`` tells callers which check
    failed.
    """

    def __init__(self, reason: ScanRejection, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class DispatchFailedError(DomainException):
    """A primary dispatch step failed.

    ``completed_steps`` lists the steps that had been applied before the
    failure, so the operator can be told exactly what happened.
    """

    def __init__(
        self, message: str, completed_steps: list[str], rolled_back: bool
    ) -> None:
        super().__init__(message)
        self.completed_steps = completed_steps
        self.rolled_back = rolled_back
