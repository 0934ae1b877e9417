"""Custom exceptions for smartsheet_typed."""

from __future__ import annotations


class SmartsheetTypedError(Exception):
    """Base exception for all smartsheet_typed errors."""

    pass


class ConfigurationError(SmartsheetTypedError):
    """Raised when required configuration (e.g. the API token) is missing."""

    pass


class SchemaError(SmartsheetTypedError):
    """Raised when a locally declared schema is invalid."""

    pass


class ReconciliationError(SmartsheetTypedError):
    """Base exception for schema/live-sheet mismatches."""

    pass


class ColumnTypeMismatchError(ReconciliationError):
    """Raised when a matched column has a different type than declared."""

    def __init__(self, title: str, expected: str, actual: str) -> None:
        self.title = title
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'Column "{title}" type mismatch. Expected "{expected}", but got "{actual}".'
        )


class ColumnOptionsMismatchError(ReconciliationError):
    """Raised when a choice-list column's options differ from the declared set."""

    def __init__(
        self,
        title: str,
        expected: tuple[str, ...],
        actual: tuple[str, ...] | None,
    ) -> None:
        self.title = title
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'Column "{title}" options mismatch. '
            f"Expected {list(expected)}, but got {list(actual) if actual else actual}."
        )


class MissingSchemaEntryError(ReconciliationError):
    """Raised in strict mode when a live column has no schema entry."""

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(f'Column named "{title}" not found in the schema.')


class MissingColumnError(ReconciliationError):
    """Raised in strict mode when a schema entry has no live column."""

    def __init__(self, key: str, title: str) -> None:
        self.key = key
        self.title = title
        super().__init__(
            f'Schema entry "{key}" (column "{title}") not found in the sheet.'
        )


class TranscodeError(SmartsheetTypedError):
    """Base exception for row encode/decode failures."""

    pass


class ValueValidationError(TranscodeError):
    """Raised when one or more values do not match their column type."""

    def __init__(self, message: str, errors: dict[str, str] | None = None) -> None:
        self.errors = errors or {}
        super().__init__(message)


class TransportError(SmartsheetTypedError):
    """Base exception for transport-related errors."""

    pass


class AuthenticationError(TransportError):
    """Raised when authentication fails (401/403)."""

    pass


class APIError(TransportError):
    """Raised for other API errors."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(f"API error {status_code}: {message}")


class NotFoundError(SmartsheetTypedError):
    """Base exception for missing sheets and rows."""

    pass


class ResourceNotFoundError(TransportError, NotFoundError):
    """Raised by the transport on a 404 response."""

    pass


class SheetNotFoundError(NotFoundError):
    """Raised when a sheet cannot be resolved by name, permalink or id."""

    pass


class RowNotFoundError(NotFoundError):
    """Raised when a row id does not exist in the sheet."""

    def __init__(self, row_id: int) -> None:
        self.row_id = row_id
        super().__init__(f'Row "{row_id}" not found.')
