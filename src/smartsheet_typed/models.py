"""Wire models for sheets, rows and cells.

Field names follow Python conventions; aliases carry the camelCase names
used by the Smartsheet API.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from smartsheet_typed.columns import Column, NewColumn

# A value that can be written to a cell.
CellValue = str | list[str] | int | float | bool | None


class Cell(BaseModel):
    """A cell of a live row."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    column_id: int = Field(alias="columnId")
    value: Any = Field(None)
    display_value: Any = Field(None, alias="displayValue")
    column_type: Any = Field(None, alias="columnType")
    formula: str | None = Field(None)
    strict: bool | None = Field(None)
    format: str | None = Field(None)


class NewCell(BaseModel):
    """A cell sent when inserting or updating a row.

    Exactly one of ``value`` and ``formula`` is meaningful; a ``None`` value
    clears the cell.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    column_id: int = Field(alias="columnId")
    value: CellValue = Field(None)
    formula: str | None = Field(None)
    format: str | None = Field(None)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"columnId": self.column_id}
        if self.formula is not None:
            payload["formula"] = self.formula
        else:
            payload["value"] = self.value
        if self.format is not None:
            payload["format"] = self.format
        return payload


class Row(BaseModel):
    """A row of a live sheet."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    row_number: int | None = Field(None, alias="rowNumber")
    expanded: bool | None = Field(None)
    locked: bool | None = Field(None)
    created_at: str | None = Field(None, alias="createdAt")
    modified_at: str | None = Field(None, alias="modifiedAt")
    cells: list[Cell] = Field(default_factory=list)


class NewRow(BaseModel):
    """A row sent to the insert/update endpoints."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int | None = Field(None)
    expanded: bool | None = Field(None)
    locked: bool | None = Field(None)
    cells: list[NewCell] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.id is not None:
            payload["id"] = self.id
        for key in ("expanded", "locked"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        payload["cells"] = [cell.to_payload() for cell in self.cells]
        return payload


class SheetSummary(BaseModel):
    """An entry of the sheet listing (also returned by sheet creation)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    name: str
    permalink: str | None = Field(None)
    access_level: str | None = Field(None, alias="accessLevel")
    created_at: str | None = Field(None, alias="createdAt")
    modified_at: str | None = Field(None, alias="modifiedAt")
    version: int | None = Field(None)


class Sheet(BaseModel):
    """A full sheet, including its columns and rows."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    name: str
    permalink: str | None = Field(None)
    version: int | None = Field(None)
    total_row_count: int | None = Field(None, alias="totalRowCount")
    columns: list[Column] = Field(default_factory=list)
    rows: list[Row] = Field(default_factory=list)


class NewSheet(BaseModel):
    """Payload of POST /sheets."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    columns: list[NewColumn]

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "columns": [column.to_payload() for column in self.columns],
        }
