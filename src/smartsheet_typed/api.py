"""Typed wrappers for the Smartsheet endpoints used by this library.

Each call goes through a Transport and validates the response into wire
models, so code above this layer never touches raw JSON.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from smartsheet_typed.columns import NewColumn
from smartsheet_typed.exceptions import TransportError
from smartsheet_typed.models import NewRow, NewSheet, Row, Sheet, SheetSummary
from smartsheet_typed.transport import Transport

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse(model: type[ModelT], data: Any, what: str) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise TransportError(f"Unexpected {what} response: {e}") from e


def _as_list(result: Any) -> list[Any]:
    """Normalize a singleton-or-array result into a list."""
    if result is None:
        return []
    if isinstance(result, list):
        return result
    return [result]


def _result(response: Any, what: str) -> Any:
    if not isinstance(response, dict) or "result" not in response:
        raise TransportError(f"Unexpected {what} response: missing 'result'")
    return response["result"]


class SheetsAPI:
    """Sheet-level endpoints."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def list_sheets(
        self,
        *,
        include_all: bool = True,
        page: int | None = None,
        page_size: int | None = None,
    ) -> list[SheetSummary]:
        """GET /sheets"""
        params: dict[str, Any] = {"includeAll": include_all}
        if page is not None:
            params["page"] = page
        if page_size is not None:
            params["pageSize"] = page_size
        response = await self._transport.get("/sheets", params)
        data = response.get("data") if isinstance(response, dict) else None
        return [_parse(SheetSummary, item, "sheet list") for item in data or []]

    async def get_sheet(self, sheet_id: int, *, include_format: bool = True) -> Sheet:
        """GET /sheets/{sheetId}"""
        params = {"include": "format"} if include_format else None
        response = await self._transport.get(f"/sheets/{sheet_id}", params)
        return _parse(Sheet, response, "sheet")

    async def create_sheet(self, name: str, columns: Sequence[NewColumn]) -> SheetSummary:
        """POST /sheets"""
        payload = NewSheet(name=name, columns=list(columns)).to_payload()
        response = await self._transport.post("/sheets", payload)
        return _parse(SheetSummary, _result(response, "create sheet"), "create sheet")


class RowsAPI:
    """Row-level endpoints."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def insert_rows(self, sheet_id: int, rows: Sequence[NewRow]) -> list[Row]:
        """POST /sheets/{sheetId}/rows with an array of rows."""
        payload = [row.to_payload() for row in rows]
        response = await self._transport.post(f"/sheets/{sheet_id}/rows", payload)
        created = _as_list(_result(response, "insert rows"))
        if len(created) != len(rows):
            raise TransportError(
                f"Expected {len(rows)} created rows, but got {len(created)}."
            )
        return [_parse(Row, item, "insert rows") for item in created]

    async def insert_row(self, sheet_id: int, row: NewRow) -> Row:
        """POST /sheets/{sheetId}/rows with a single row."""
        response = await self._transport.post(
            f"/sheets/{sheet_id}/rows", row.to_payload()
        )
        created = _as_list(_result(response, "insert row"))
        if not created:
            raise TransportError("Failed to create the row.")
        return _parse(Row, created[0], "insert row")

    async def get_row(
        self, sheet_id: int, row_id: int, *, include_format: bool = True
    ) -> Row | None:
        """GET /sheets/{sheetId}/rows/{rowId}

        Returns None when the service answers with an empty body.
        """
        params = {"include": "format"} if include_format else None
        response = await self._transport.get(f"/sheets/{sheet_id}/rows/{row_id}", params)
        if not response:
            return None
        return _parse(Row, response, "row")

    async def update_rows(self, sheet_id: int, rows: Sequence[NewRow]) -> list[Row]:
        """PUT /sheets/{sheetId}/rows with an array of rows (each with an id)."""
        payload = [row.to_payload() for row in rows]
        response = await self._transport.put(
            f"/sheets/{sheet_id}/rows", payload, {"include": "format"}
        )
        updated = _as_list(_result(response, "update rows"))
        return [_parse(Row, item, "update rows") for item in updated]

    async def update_row(self, sheet_id: int, row: NewRow) -> Row:
        """PUT /sheets/{sheetId}/rows with a single row."""
        if row.id is None:
            raise ValueError("update_row requires a row id")
        response = await self._transport.put(
            f"/sheets/{sheet_id}/rows", row.to_payload(), {"include": "format"}
        )
        updated = _as_list(_result(response, "update row"))
        if not updated:
            raise TransportError("Failed to update the row.")
        return _parse(Row, updated[0], "update row")


class SmartsheetAPI:
    """Bundle of the endpoint wrappers sharing one transport."""

    def __init__(self, transport: Transport) -> None:
        self.sheets = SheetsAPI(transport)
        self.rows = RowsAPI(transport)
