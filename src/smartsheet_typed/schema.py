"""Local sheet schemas.

A schema maps local keys to column definitions:

    >>> schema = {
    ...     "project_id": define_column("Project ID #", ColumnType.TEXT_NUMBER, primary=True),
    ...     "status": define_column(
    ...         "Status", ColumnType.PICKLIST, options=["Active", "Inactive"]
    ...     ),
    ... }
    >>> validate_schema(schema)

Keys are what application code uses; titles are what the live sheet uses.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from smartsheet_typed.columns import (
    CHOICE_LIST_TYPES,
    AutoNumberFormat,
    ColumnType,
    Symbol,
    SystemColumnType,
)
from smartsheet_typed.exceptions import SchemaError
from smartsheet_typed.formats import CellFormat, decode_format

Schema = Mapping[str, "ColumnDefinition"]


@dataclass(frozen=True)
class ColumnDefinition:
    """The local description of one column.

    Attributes:
        title: Column title in the live sheet (matched exactly)
        column_type: Expected column type
        primary: Whether this is the sheet's primary column
        options: Allowed values; required for choice-list types only
        default_format: Format applied to cells written without an explicit one
        system_column_type: Optional system behaviour (auto number, created by...)
        auto_number_format: Prefix/suffix/fill of an AUTO_NUMBER column
        symbol: Symbol set of a PICKLIST column (e.g. STAR_RATING)
        validation: Whether the service should enforce values on this column
    """

    title: str
    column_type: ColumnType
    primary: bool = False
    options: tuple[str, ...] | None = None
    default_format: CellFormat | None = None
    system_column_type: SystemColumnType | None = None
    auto_number_format: AutoNumberFormat | None = None
    symbol: Symbol | None = None
    validation: bool | None = None

    def __post_init__(self) -> None:
        try:
            column_type = ColumnType(self.column_type)
        except ValueError as e:
            raise SchemaError(
                f'Column "{self.title}" has unknown type "{self.column_type}".'
            ) from e
        object.__setattr__(self, "column_type", column_type)

        try:
            if self.system_column_type is not None:
                object.__setattr__(
                    self, "system_column_type", SystemColumnType(self.system_column_type)
                )
            if self.symbol is not None:
                object.__setattr__(self, "symbol", Symbol(self.symbol))
        except ValueError as e:
            raise SchemaError(f'Column "{self.title}": {e}') from e

        if column_type in CHOICE_LIST_TYPES:
            if not self.options:
                raise SchemaError(
                    f'Column "{self.title}" is {column_type} and must declare options.'
                )
            options = tuple(self.options)
            if len(set(options)) != len(options):
                raise SchemaError(f'Column "{self.title}" declares duplicate options.')
            object.__setattr__(self, "options", options)
        else:
            if self.options is not None:
                raise SchemaError(
                    f'Column "{self.title}" is {column_type} and cannot declare options.'
                )
            if self.symbol is not None:
                raise SchemaError(
                    f'Column "{self.title}" is {column_type} and cannot declare a symbol.'
                )

        if self.default_format is not None and not isinstance(
            self.default_format, CellFormat
        ):
            try:
                default_format = decode_format(self.default_format)
            except ValueError as e:
                raise SchemaError(f'Column "{self.title}": {e}') from e
            object.__setattr__(self, "default_format", default_format)

    @property
    def is_choice_list(self) -> bool:
        return self.column_type in CHOICE_LIST_TYPES


def define_column(
    title: str,
    column_type: ColumnType | str,
    *,
    primary: bool = False,
    options: Sequence[str] | None = None,
    default_format: CellFormat | Mapping[str, Any] | str | None = None,
    system_column_type: SystemColumnType | None = None,
    auto_number_format: AutoNumberFormat | None = None,
    symbol: Symbol | None = None,
    validation: bool | None = None,
) -> ColumnDefinition:
    """Declare a column for a schema.

    ``default_format`` may be a CellFormat, a partial mapping of format
    fields (``{"bold": True}``) or a wire format string.

    Raises:
        SchemaError: If options are missing for a choice-list type or
            declared for any other type
    """
    return ColumnDefinition(
        title=title,
        column_type=column_type,  # type: ignore[arg-type]
        primary=primary,
        options=tuple(options) if options is not None else None,
        default_format=default_format,  # type: ignore[arg-type]
        system_column_type=system_column_type,
        auto_number_format=auto_number_format,
        symbol=symbol,
        validation=validation,
    )


def validate_schema(schema: Schema) -> None:
    """Check that the schema has exactly one primary column.

    Raises:
        SchemaError: Stating how many primary columns were found
    """
    primary_keys = [key for key, definition in schema.items() if definition.primary]
    if len(primary_keys) != 1:
        raise SchemaError(
            f"Schema must have exactly one primary column, but got {len(primary_keys)}."
        )


def schema_from_dict(data: Mapping[str, Any]) -> dict[str, ColumnDefinition]:
    """Build a schema from plain data (e.g. parsed JSON).

    Each entry uses the API's camelCase names::

        {"status": {"title": "Status", "type": "PICKLIST",
                    "options": ["Active", "Inactive"],
                    "defaultFormat": {"bold": true}}}
    """
    schema: dict[str, ColumnDefinition] = {}
    for key, entry in data.items():
        if not isinstance(entry, Mapping):
            raise SchemaError(f'Schema entry "{key}" must be an object.')
        if "title" not in entry or "type" not in entry:
            raise SchemaError(f'Schema entry "{key}" needs "title" and "type".')
        auto_number = entry.get("autoNumberFormat")
        try:
            schema[key] = define_column(
                entry["title"],
                entry["type"],
                primary=bool(entry.get("primary", False)),
                options=entry.get("options"),
                default_format=entry.get("defaultFormat"),
                system_column_type=entry.get("systemColumnType"),
                auto_number_format=(
                    AutoNumberFormat.model_validate(auto_number) if auto_number else None
                ),
                symbol=entry.get("symbol"),
                validation=entry.get("validation"),
            )
        except ValidationError as e:
            raise SchemaError(f'Schema entry "{key}": {e}') from e
    return schema


def load_schema(path: str | Path) -> dict[str, ColumnDefinition]:
    """Load a schema from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise SchemaError(f"Cannot read schema file '{path}': {e}") from e
    if not isinstance(data, Mapping):
        raise SchemaError(f"Schema file '{path}' must contain a JSON object.")
    return schema_from_dict(data)
