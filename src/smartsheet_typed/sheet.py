"""Prepared sheets and prepared rows.

A PreparedSheet is the handle returned by SmartsheetClient.prepare_sheet().
It holds a snapshot of the live sheet and the ColumnMapping built from it,
and exposes row operations that speak in schema keys instead of column ids.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from loguru import logger

from smartsheet_typed.api import SmartsheetAPI
from smartsheet_typed.columns import Column
from smartsheet_typed.exceptions import ResourceNotFoundError, RowNotFoundError
from smartsheet_typed.formats import RowFormat
from smartsheet_typed.models import NewCell, NewRow, Row, Sheet
from smartsheet_typed.reconcile import ColumnMapping
from smartsheet_typed.schema import ColumnDefinition, Schema
from smartsheet_typed.transcode import (
    DecodedRow,
    FormatLike,
    decode_row,
    encode_cells,
)
from smartsheet_typed.value_types import RowValidator


class PreparedRow:
    """A decoded row of a prepared sheet.

    Values are read and written by schema key (``row["status"]``); formats
    live in ``row.formats``. Changes stay local until ``await row.update()``,
    which always re-sends every mapped value and format (no diffing), so
    re-fetch the row first if it may have changed remotely.
    """

    def __init__(self, sheet: PreparedSheet, decoded: DecodedRow) -> None:
        self._sheet = sheet
        self.id = decoded.id
        self.values: dict[str, Any] = {}
        self.formats: dict[str, RowFormat] = {}
        self._load(decoded)

    def _load(self, decoded: DecodedRow) -> None:
        self.id = decoded.id
        self.values = dict(decoded.values)
        self.formats = {
            key: RowFormat.attach(fmt, self._sheet.schema[key].default_format)
            for key, fmt in decoded.formats.items()
        }

    @property
    def sheet(self) -> PreparedSheet:
        return self._sheet

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key not in self.values:
            raise KeyError(f"{key!r} is not part of the schema")
        self.values[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __repr__(self) -> str:
        return f"PreparedRow(id={self.id}, values={self.values!r})"

    async def update(self) -> None:
        """Push all values and formats of this row to the sheet."""
        await self._sheet.update_row(self)


class PreparedSheet:
    """A live sheet reconciled against a local schema.

    The sheet, its columns and its rows are a snapshot taken when the sheet
    was prepared. Prepare again to pick up remote column changes.
    """

    def __init__(
        self,
        api: SmartsheetAPI,
        sheet: Sheet,
        schema: Schema,
        mapping: ColumnMapping,
    ) -> None:
        self._api = api
        self._sheet = sheet
        self.schema: dict[str, ColumnDefinition] = dict(schema)
        self.mapping = mapping
        self._validator = RowValidator(self.schema)

    @property
    def sheet_id(self) -> int:
        return self._sheet.id

    @property
    def name(self) -> str:
        return self._sheet.name

    async def get_sheet(self) -> Sheet:
        return self._sheet

    async def get_columns(self) -> list[Column]:
        return list(self._sheet.columns)

    async def get_rows(self) -> list[PreparedRow]:
        """Decode every row of the snapshot."""
        return [self.decode(row) for row in self._sheet.rows]

    async def get_row(self, row_id: int) -> PreparedRow:
        """Fetch a single row from the service.

        Raises:
            RowNotFoundError: If the row does not exist
        """
        try:
            row = await self._api.rows.get_row(self.sheet_id, row_id)
        except ResourceNotFoundError as e:
            raise RowNotFoundError(row_id) from e
        if row is None:
            raise RowNotFoundError(row_id)
        return self.decode(row)

    async def insert_row(
        self,
        values: Mapping[str, Any],
        formats: Mapping[str, FormatLike | None] | None = None,
    ) -> PreparedRow:
        """Insert a row from schema-keyed values.

        Keys missing from ``values`` are left empty; keys outside the schema
        are ignored.
        """
        cells = self.encode(values, formats)
        created = await self._api.rows.insert_row(self.sheet_id, NewRow(cells=cells))
        logger.debug(f"Inserted row {created.id} into sheet {self.sheet_id}")
        return self.decode(created)

    async def insert_rows(self, rows: Iterable[Mapping[str, Any]]) -> list[PreparedRow]:
        """Insert several rows in one request.

        Every row is encoded before anything is sent, so a bad value in
        any row means no row is inserted.
        """
        new_rows = [NewRow(cells=self.encode(values)) for values in rows]
        if not new_rows:
            return []
        created = await self._api.rows.insert_rows(self.sheet_id, new_rows)
        return [self.decode(row) for row in created]

    async def update_row(self, row: PreparedRow) -> PreparedRow:
        """Overwrite a row with its current local values and formats.

        The row is refreshed in place from the service's response.
        """
        updated = await self._api.rows.update_row(self.sheet_id, self._to_update(row))
        row._load(self._decode(updated))
        return row

    async def update_rows(self, rows: Iterable[PreparedRow]) -> list[PreparedRow]:
        """Overwrite several rows in one request."""
        rows = list(rows)
        if not rows:
            return []
        payload = [self._to_update(row) for row in rows]
        updated = await self._api.rows.update_rows(self.sheet_id, payload)
        by_id = {item.id: item for item in updated}
        for row in rows:
            if row.id in by_id:
                row._load(self._decode(by_id[row.id]))
        return rows

    def encode(
        self,
        values: Mapping[str, Any],
        formats: Mapping[str, FormatLike | None] | None = None,
    ) -> list[NewCell]:
        """Encode schema-keyed values into cells of this sheet."""
        return encode_cells(values, self.schema, self.mapping, formats, self._validator)

    def decode(self, row: Row) -> PreparedRow:
        """Decode a wire row of this sheet."""
        return PreparedRow(self, self._decode(row))

    def _decode(self, row: Row) -> DecodedRow:
        return decode_row(row, self.schema, self.mapping, self._validator)

    def _to_update(self, row: PreparedRow) -> NewRow:
        if row.sheet is not self:
            raise ValueError(f"Row {row.id} belongs to another prepared sheet")
        cells = self.encode(row.values, row.formats)
        return NewRow(id=row.id, cells=cells)
