from __future__ import annotations

from enum import Enum


class ValidationErrorKind(str, Enum):
    EMPTY_ORDER = "EmptyOrder"
    INVALID_TABLE = "InvalidTable"
    UNKNOWN_STATUS = "UnknownStatus"
    INVALID_LINE_ITEMS = "InvalidLineItems"


class ValidationError(Exception):
    """Base class for recoverable order validation failures.

    Callers are expected to surface the message and let the user correct the input.
    """

    kind: ValidationErrorKind

    def __init__(self, kind: ValidationErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class EmptyOrderError(ValidationError):
    def __init__(self) -> None:
        super().__init__(
            ValidationErrorKind.EMPTY_ORDER, "Select at least one item for the order"
        )


class InvalidTableError(ValidationError):
    def __init__(self, table_number: object) -> None:
        super().__init__(
            ValidationErrorKind.INVALID_TABLE,
            f"Table number must be a positive integer, got {table_number!r}",
        )
        self.table_number = table_number


class UnknownStatusError(ValidationError):
    def __init__(self, status: object) -> None:
        super().__init__(
            ValidationErrorKind.UNKNOWN_STATUS,
            f"Unknown order status {status!r}. Expected waiting, cooking, ready or done.",
        )
        self.status = status


class InvalidLineItemsError(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__(ValidationErrorKind.INVALID_LINE_ITEMS, f"Invalid line items: {reason}")
        self.reason = reason
