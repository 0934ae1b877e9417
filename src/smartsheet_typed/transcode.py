"""Row transcoding between the wire format and schema-keyed values.

Wire rows carry cells keyed by numeric column id. Application code works
with values keyed by schema key. The ColumnMapping produced by
reconciliation connects the two.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from loguru import logger

from smartsheet_typed.exceptions import TranscodeError, ValueValidationError
from smartsheet_typed.formats import CellFormat, decode_format, encode_format
from smartsheet_typed.models import CellValue, NewCell, Row
from smartsheet_typed.reconcile import ColumnMapping
from smartsheet_typed.schema import Schema
from smartsheet_typed.value_types import RowValidator

FormatLike = CellFormat | Mapping[str, Any] | str


@dataclass
class DecodedRow:
    """A wire row decoded into schema-keyed values and formats."""

    id: int
    values: dict[str, Any]
    formats: dict[str, CellFormat]


def decode_row(
    row: Row,
    schema: Schema,
    mapping: ColumnMapping,
    validator: RowValidator | None = None,
) -> DecodedRow:
    """Decode a wire row.

    Cells of unmapped columns are dropped. Every schema key is present in
    the result: keys without a cell get ``None`` and the default format.

    Raises:
        ValueValidationError: If a remote value no longer matches the schema
    """
    validator = validator or RowValidator(schema)

    raw_values: dict[str, Any] = dict.fromkeys(schema)
    formats: dict[str, CellFormat] = {}
    for cell in row.cells:
        key = mapping.get(cell.column_id)
        if key is None:
            continue
        raw_values[key] = cell.value
        formats[key] = decode_format(cell.format)

    try:
        values = validator.validate(raw_values)
    except ValueValidationError as e:
        raise ValueValidationError(
            f"Row {row.id} does not match the schema. {e}", e.errors
        ) from e

    for key in schema:
        formats.setdefault(key, CellFormat())

    return DecodedRow(id=row.id, values=values, formats=formats)


def resolve_format(
    key: str,
    schema: Schema,
    formats: Mapping[str, FormatLike | None] | None = None,
) -> CellFormat:
    """Pick the format for a cell.

    Priority: explicit format for the key, then the column's declared
    default format, then the all-defaults format.

    Raises:
        TranscodeError: If the explicit format cannot be decoded
    """
    explicit = formats.get(key) if formats else None
    if explicit is not None:
        try:
            return decode_format(explicit)
        except ValueError as e:
            raise TranscodeError(f"Invalid format for {key!r}: {e}") from e
    definition = schema.get(key)
    if definition is not None and definition.default_format is not None:
        return definition.default_format
    return CellFormat()


def encode_cells(
    values: Mapping[str, Any],
    schema: Schema,
    mapping: ColumnMapping,
    formats: Mapping[str, FormatLike | None] | None = None,
    validator: RowValidator | None = None,
) -> list[NewCell]:
    """Encode schema-keyed values into wire cells.

    Keys that are not in the schema are ignored, which allows partial
    objects. All values are validated before any cell is built, so a
    single bad value yields no cells at all.

    Raises:
        ValueValidationError: If any value does not match its column type
        TranscodeError: If a format cannot be decoded or encoded
    """
    validator = validator or RowValidator(schema)
    parsed = validator.validate(values)

    cells: list[NewCell] = []
    for key, value in parsed.items():
        column_id = mapping.column_id_for(key)
        if column_id is None:
            logger.debug(f"Skipping {key!r}: no matching column in the sheet")
            continue
        fmt = resolve_format(key, schema, formats)
        try:
            wire_format = encode_format(fmt)
        except ValueError as e:
            raise TranscodeError(f"Invalid format for {key!r}: {e}") from e
        cells.append(
            NewCell(column_id=column_id, value=_to_wire_value(value), format=wire_format)
        )
    return cells


def _to_wire_value(value: Any) -> CellValue:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, list):
        return list(value)
    return value  # type: ignore[no-any-return]
