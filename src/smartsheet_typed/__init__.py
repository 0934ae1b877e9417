"""smartsheet_typed: Typed access to Smartsheet sheets through local schemas."""

from smartsheet_typed.client import SmartsheetClient
from smartsheet_typed.columns import (
    AutoNumberFormat,
    Column,
    ColumnType,
    Symbol,
    SystemColumnType,
)
from smartsheet_typed.config import Settings, get_settings
from smartsheet_typed.exceptions import (
    APIError,
    AuthenticationError,
    ColumnOptionsMismatchError,
    ColumnTypeMismatchError,
    ConfigurationError,
    MissingColumnError,
    MissingSchemaEntryError,
    NotFoundError,
    ReconciliationError,
    ResourceNotFoundError,
    RowNotFoundError,
    SchemaError,
    SheetNotFoundError,
    SmartsheetTypedError,
    TranscodeError,
    TransportError,
    ValueValidationError,
)
from smartsheet_typed.formats import (
    DEFAULT_FORMAT,
    DEFAULT_FORMAT_STRING,
    CellFormat,
    Color,
    Currency,
    DateFormat,
    FontFamily,
    FontSize,
    HorizontalAlign,
    NumberFormat,
    RowFormat,
    VerticalAlign,
    decode_format,
    encode_format,
)
from smartsheet_typed.reconcile import ColumnMapping, columns_from_schema, reconcile
from smartsheet_typed.schema import (
    ColumnDefinition,
    Schema,
    define_column,
    load_schema,
    schema_from_dict,
    validate_schema,
)
from smartsheet_typed.sheet import PreparedRow, PreparedSheet
from smartsheet_typed.transcode import DecodedRow, decode_row, encode_cells
from smartsheet_typed.transport import (
    LocalFileTransport,
    SmartsheetTransport,
    Transport,
)
from smartsheet_typed.value_types import RowValidator, value_validator

__version__ = "0.1.0"

__all__ = [
    # Client
    "SmartsheetClient",
    "PreparedSheet",
    "PreparedRow",
    # Schema
    "ColumnDefinition",
    "Schema",
    "define_column",
    "validate_schema",
    "schema_from_dict",
    "load_schema",
    # Columns
    "ColumnType",
    "SystemColumnType",
    "Symbol",
    "AutoNumberFormat",
    "Column",
    # Formats
    "CellFormat",
    "RowFormat",
    "Color",
    "Currency",
    "DateFormat",
    "FontFamily",
    "FontSize",
    "HorizontalAlign",
    "VerticalAlign",
    "NumberFormat",
    "DEFAULT_FORMAT",
    "DEFAULT_FORMAT_STRING",
    "decode_format",
    "encode_format",
    # Reconciliation and transcoding
    "ColumnMapping",
    "reconcile",
    "columns_from_schema",
    "DecodedRow",
    "decode_row",
    "encode_cells",
    "RowValidator",
    "value_validator",
    # Transport
    "Transport",
    "SmartsheetTransport",
    "LocalFileTransport",
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "SmartsheetTypedError",
    "ConfigurationError",
    "SchemaError",
    "ReconciliationError",
    "ColumnTypeMismatchError",
    "ColumnOptionsMismatchError",
    "MissingSchemaEntryError",
    "MissingColumnError",
    "TranscodeError",
    "ValueValidationError",
    "TransportError",
    "AuthenticationError",
    "APIError",
    "NotFoundError",
    "ResourceNotFoundError",
    "SheetNotFoundError",
    "RowNotFoundError",
]
