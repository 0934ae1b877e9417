"""Column types and column wire models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ColumnType(StrEnum):
    """The main type of a column. Required when creating a column."""

    ABSTRACT_DATETIME = "ABSTRACT_DATETIME"
    CHECKBOX = "CHECKBOX"
    CONTACT_LIST = "CONTACT_LIST"
    DATE = "DATE"
    DATETIME = "DATETIME"
    DURATION = "DURATION"
    MULTI_CONTACT_LIST = "MULTI_CONTACT_LIST"
    MULTI_PICKLIST = "MULTI_PICKLIST"
    PICKLIST = "PICKLIST"
    PREDECESSOR = "PREDECESSOR"
    TEXT_NUMBER = "TEXT_NUMBER"


# Column types whose values are drawn from a declared option list.
CHOICE_LIST_TYPES = frozenset({ColumnType.PICKLIST, ColumnType.MULTI_PICKLIST})


class SystemColumnType(StrEnum):
    """System behaviour layered on top of a regular column type.

    Comparable to auto-increment or created_at/updated_at columns in SQL.
    Used together with a matching ColumnType (e.g. TEXT_NUMBER for
    AUTO_NUMBER, DATE or DATETIME for CREATED_DATE).
    """

    AUTO_NUMBER = "AUTO_NUMBER"
    CREATED_BY = "CREATED_BY"
    CREATED_DATE = "CREATED_DATE"
    MODIFIED_BY = "MODIFIED_BY"
    MODIFIED_DATE = "MODIFIED_DATE"


class Symbol(StrEnum):
    """Symbol sets available for PICKLIST columns."""

    STAR_RATING = "STAR_RATING"


class AutoNumberFormat(BaseModel):
    """Formatting of an AUTO_NUMBER system column."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    prefix: str | None = Field(None)
    suffix: str | None = Field(None)
    fill: str | None = Field(None, description='A string of 0s, e.g. "0000"')


class NewColumn(BaseModel):
    """Column definition sent when creating a sheet."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: str
    type: ColumnType
    system_column_type: SystemColumnType | None = Field(None, alias="systemColumnType")
    primary: bool | None = Field(None)
    options: list[str] | None = Field(None)
    symbol: Symbol | None = Field(None)
    auto_number_format: AutoNumberFormat | None = Field(None, alias="autoNumberFormat")
    validation: bool | None = Field(None)

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Column(BaseModel):
    """A column of a live sheet, as returned by the API."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int
    title: str
    # Unknown types are kept as plain strings so reconciliation can report them.
    type: ColumnType | str
    index: int | None = Field(None)
    primary: bool | None = Field(None)
    options: list[str] | None = Field(None)
    system_column_type: SystemColumnType | str | None = Field(
        None, alias="systemColumnType"
    )
    symbol: str | None = Field(None)
    validation: bool | None = Field(None)
