"""Column type registry: value validators for each column type.

Each column type maps to the Python shape of its cell values. Choice-list
types (PICKLIST, MULTI_PICKLIST) additionally take the declared option set
and only accept those literal strings. Every validator accepts ``None`` for
an empty cell.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Annotated, Any, Literal, Optional, Union

from pydantic import (
    BeforeValidator,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
)

from smartsheet_typed.columns import CHOICE_LIST_TYPES, ColumnType
from smartsheet_typed.exceptions import SchemaError, ValueValidationError

if TYPE_CHECKING:
    from smartsheet_typed.schema import ColumnDefinition


def _iso_date(value: Any) -> Any:
    if isinstance(value, str):
        return date.fromisoformat(value)
    if not isinstance(value, date):
        raise ValueError(f"expected a date or an ISO 8601 string, got {type(value).__name__}")
    return value


def _iso_datetime(value: Any) -> Any:
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    if not isinstance(value, datetime):
        raise ValueError(
            f"expected a datetime or an ISO 8601 string, got {type(value).__name__}"
        )
    return value


# Plain numbers are rejected rather than read as Unix timestamps.
IsoDate = Annotated[date, BeforeValidator(_iso_date)]
IsoDateTime = Annotated[datetime, BeforeValidator(_iso_datetime)]

_VALUE_TYPES: dict[ColumnType, Any] = {
    ColumnType.ABSTRACT_DATETIME: StrictStr,
    ColumnType.CHECKBOX: StrictBool,
    ColumnType.CONTACT_LIST: list[StrictStr],
    ColumnType.DATE: IsoDate,
    ColumnType.DATETIME: IsoDateTime,
    ColumnType.DURATION: Union[StrictInt, StrictFloat],
    ColumnType.MULTI_CONTACT_LIST: list[StrictStr],
    ColumnType.PREDECESSOR: StrictStr,
    ColumnType.TEXT_NUMBER: Union[StrictStr, StrictInt, StrictFloat],
}


@dataclass(frozen=True)
class ParseResult:
    """Outcome of ValueValidator.safe_parse."""

    success: bool
    value: Any = None
    error: str | None = None


class ValueValidator:
    """Validates cell values for one column type."""

    def __init__(self, column_type: ColumnType, value_type: Any) -> None:
        self.column_type = column_type
        self._adapter: TypeAdapter[Any] = TypeAdapter(Optional[value_type])

    def safe_parse(self, value: Any) -> ParseResult:
        """Validate without raising."""
        try:
            parsed = self._adapter.validate_python(value)
        except ValidationError as e:
            return ParseResult(success=False, error=_describe(e))
        return ParseResult(success=True, value=parsed)

    def parse(self, value: Any) -> Any:
        """Validate and return the parsed value.

        Raises:
            ValueValidationError: If the value does not match the column type.
        """
        result = self.safe_parse(value)
        if not result.success:
            raise ValueValidationError(
                f"Value {value!r} is not valid for a {self.column_type} column: "
                f"{result.error}"
            )
        return result.value


def _describe(error: ValidationError) -> str:
    messages = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item["loc"])
        messages.append(f"{loc}: {item['msg']}" if loc else item["msg"])
    return "; ".join(messages)


def value_validator(
    column_type: ColumnType | str,
    options: Sequence[str] | None = None,
) -> ValueValidator:
    """Return the value validator for a column type.

    Args:
        column_type: One of the eleven column types
        options: Declared options, required for PICKLIST/MULTI_PICKLIST and
            forbidden for every other type

    Raises:
        SchemaError: On unknown types or a wrong options declaration
    """
    try:
        column_type = ColumnType(column_type)
    except ValueError as e:
        raise SchemaError(f'Unknown column type "{column_type}".') from e

    if column_type in CHOICE_LIST_TYPES:
        if not options:
            raise SchemaError(f"{column_type} columns require a non-empty options list.")
        choice = Literal[tuple(options)]  # type: ignore[valid-type]
        if column_type == ColumnType.MULTI_PICKLIST:
            return ValueValidator(column_type, list[choice])  # type: ignore[valid-type]
        return ValueValidator(column_type, choice)

    if options is not None:
        raise SchemaError(f"{column_type} columns do not take options.")
    return ValueValidator(column_type, _VALUE_TYPES[column_type])


class RowValidator:
    """Combined validator for all fields of a schema."""

    def __init__(self, schema: Mapping[str, ColumnDefinition]) -> None:
        self._validators = {
            key: value_validator(definition.column_type, definition.options)
            for key, definition in schema.items()
        }

    def __contains__(self, key: object) -> bool:
        return key in self._validators

    def validate(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Validate the schema keys present in ``values``.

        Keys that are not part of the schema are ignored.

        Returns:
            Parsed values keyed by schema key

        Raises:
            ValueValidationError: Listing every key that failed
        """
        parsed: dict[str, Any] = {}
        errors: dict[str, str] = {}
        for key, value in values.items():
            validator = self._validators.get(key)
            if validator is None:
                continue
            result = validator.safe_parse(value)
            if result.success:
                parsed[key] = result.value
            else:
                errors[key] = f"{value!r} ({result.error})"

        if errors:
            details = "\n  - ".join(f"{key}: {msg}" for key, msg in errors.items())
            raise ValueValidationError(
                f"Values do not match the schema:\n  - {details}", errors
            )
        return parsed
