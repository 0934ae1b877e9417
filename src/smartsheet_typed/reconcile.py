"""Reconciliation of a local schema against a live sheet's columns.

Columns are matched by title, never by id. A matched column must have the
declared type and, for choice-list types, the same option set (order is
ignored). The result is a ColumnMapping from live column ids to schema keys.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from loguru import logger

from smartsheet_typed.columns import Column, NewColumn
from smartsheet_typed.exceptions import (
    ColumnOptionsMismatchError,
    ColumnTypeMismatchError,
    MissingColumnError,
    MissingSchemaEntryError,
)
from smartsheet_typed.schema import Schema


class ColumnMapping(Mapping[int, str]):
    """Immutable mapping of live column id -> schema key."""

    def __init__(self, keys_by_column_id: Mapping[int, str]) -> None:
        self._keys_by_column_id = dict(keys_by_column_id)
        self._column_ids_by_key = {
            key: column_id for column_id, key in self._keys_by_column_id.items()
        }

    def __getitem__(self, column_id: int) -> str:
        return self._keys_by_column_id[column_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._keys_by_column_id)

    def __len__(self) -> int:
        return len(self._keys_by_column_id)

    def __repr__(self) -> str:
        return f"ColumnMapping({self._keys_by_column_id!r})"

    def column_id_for(self, key: str) -> int | None:
        """Return the live column id of a schema key, or None if unmatched."""
        return self._column_ids_by_key.get(key)

    @property
    def schema_keys(self) -> frozenset[str]:
        return frozenset(self._column_ids_by_key)


def reconcile(
    columns: Iterable[Column],
    schema: Schema,
    *,
    strict: bool = False,
) -> ColumnMapping:
    """Match live columns to schema entries.

    Args:
        columns: Columns of the live sheet
        schema: The local schema
        strict: Reject live columns without a schema entry and schema
            entries without a live column. By default both are skipped so
            that extra columns added online do not break existing code.

    Returns:
        ColumnMapping covering every matched column

    Raises:
        ColumnTypeMismatchError: If a matched column has another type
        ColumnOptionsMismatchError: If a choice-list column's options differ
        MissingSchemaEntryError: Strict mode, live column not in schema
        MissingColumnError: Strict mode, schema entry not in sheet
    """
    keys_by_title: dict[str, str] = {}
    for key, definition in schema.items():
        keys_by_title.setdefault(definition.title, key)

    matched: dict[int, str] = {}
    matched_keys: set[str] = set()
    for column in columns:
        key = keys_by_title.get(column.title)
        if key is None:
            if strict:
                raise MissingSchemaEntryError(column.title)
            logger.debug(f"Ignoring column {column.title!r} (not in schema)")
            continue
        if key in matched_keys:
            logger.warning(
                f"Column title {column.title!r} appears more than once; "
                f"ignoring column {column.id}"
            )
            continue

        definition = schema[key]
        if column.type != definition.column_type:
            raise ColumnTypeMismatchError(
                column.title, str(definition.column_type), str(column.type)
            )
        if definition.is_choice_list and (
            not column.options or set(column.options) != set(definition.options)
        ):
            raise ColumnOptionsMismatchError(
                column.title,
                definition.options,
                tuple(column.options) if column.options is not None else None,
            )

        matched[column.id] = key
        matched_keys.add(key)

    unmatched = [key for key in schema if key not in matched_keys]
    if unmatched:
        if strict:
            key = unmatched[0]
            raise MissingColumnError(key, schema[key].title)
        logger.debug(f"Schema keys without a live column: {', '.join(unmatched)}")

    return ColumnMapping(matched)


def columns_from_schema(schema: Schema) -> list[NewColumn]:
    """Build the column list for creating a sheet from a schema.

    Columns are created in schema iteration order.
    """
    columns: list[NewColumn] = []
    for definition in schema.values():
        columns.append(
            NewColumn(
                title=definition.title,
                type=definition.column_type,
                primary=True if definition.primary else None,
                options=list(definition.options or ()) if definition.is_choice_list else None,
                system_column_type=definition.system_column_type,
                auto_number_format=definition.auto_number_format,
                symbol=definition.symbol,
                validation=definition.validation,
            )
        )
    return columns
