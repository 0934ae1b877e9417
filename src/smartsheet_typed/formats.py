"""
Cell format codec for Smartsheet cell formats.

Smartsheet describes the format of a cell with a compact string of 17
comma-separated positional fields:

    fontFamily,fontSize,bold,italic,underline,strikethrough,
    horizontalAlign,verticalAlign,textColor,backgroundColor,taskbarColor,
    currency,decimalCount,thousandsSeparator,numberFormat,textWrap,dateFormat

An empty field means "use the default". Enum-valued fields are indexes into
fixed tables, booleans are "0"/"1", the currency field carries the service's
own currency code and decimalCount is a plain integer.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, StrEnum
from typing import Any

# =============================================================================
# Enumerations (index order is part of the wire format)
# =============================================================================


class FontFamily(StrEnum):
    ARIAL = "Arial"
    ROBOTO = "Roboto"
    TAHOMA = "Tahoma"
    TIMES_NEW_ROMAN = "Times New Roman"
    VERDANA = "Verdana"


class FontSize(StrEnum):
    SIZE_8 = "8"
    SIZE_9 = "9"
    SIZE_10 = "10"
    SIZE_12 = "12"
    SIZE_14 = "14"
    SIZE_16 = "16"
    SIZE_18 = "18"
    SIZE_20 = "20"
    SIZE_24 = "24"
    SIZE_28 = "28"
    SIZE_32 = "32"
    SIZE_36 = "36"


class Color(StrEnum):
    """Palette colors, in the service's index order (not palette order)."""

    AUTOMATIC = ""
    BLACK = "#000000"
    WHITE = "#ffffff"
    TRANSPARENT = "transparent"

    # Fifth row of the color picker
    RED_LIGHTER = "#EDE3EB"
    ORANGE_LIGHTER = "#FDF4E2"
    YELLOW_LIGHTER = "#FFFEE9"
    GREEN_LIGHTER = "#EAF5EA"
    BLUE_LIGHTER = "#E6F1FD"
    PURPLE_LIGHTER = "#F1E5F4"
    BEIGE_LIGHTER = "#F0E9DF"

    # Fourth row
    RED_LIGHT = "#F8CED3"
    ORANGE_LIGHT = "#FAE2B5"
    YELLOW_LIGHT = "#FFFF96"
    GREEN_LIGHT = "#CDE6CB"
    BLUE_LIGHT = "#C0DCF9"
    PURPLE_LIGHT = "#E5C9ED"
    BEIGE_LIGHT = "#EBDDCD"
    BROWN_LIGHT = "#E5E5E5"

    # Third row
    RED = "#E88581"
    ORANGE = "#F7CF87"
    YELLOW = "#FEFE54"
    GREEN = "#91CF8D"
    BLUE = "#74B1F3"
    PURPLE = "#C793D5"
    BEIGE = "#CBB093"
    BROWN = "#BDBDBD"

    # Second row
    RED_DARK = "#D8473A"
    ORANGE_DARK = "#F09336"
    YELLOW_DARK = "#FCEE4F"
    GREEN_DARK = "#61AF58"
    BLUE_DARK = "#2D60BD"
    PURPLE_DARK = "#8621A7"
    BEIGE_DARK = "#8D501A"
    BROWN_DARK = "#757575"

    # First row
    RED_DARKER = "#8C231B"
    ORANGE_DARKER = "#D95B27"
    YELLOW_DARKER = "#E5C943"
    GREEN_DARKER = "#407E39"
    BLUE_DARKER = "#183378"
    PURPLE_DARKER = "#591086"
    BEIGE_DARKER = "#542F0B"


class Currency(StrEnum):
    """Currencies are matched by code, not by index."""

    NONE = "none"
    CAD = "4"
    EUR = "6"
    USD = "13"
    CNY = "16"


class DateFormat(StrEnum):
    LOCALE_BASED = "LOCALE_BASED"
    MMMM_D_YYYY = "MMMM_D_YYYY"
    MMM_D_YYYY = "MMM_D_YYYY"
    D_MMM_YYYY = "D_MMM_YYYY"
    YYYY_MM_DD_HYPHEN = "YYYY_MM_DD_HYPHEN"
    YYYY_MM_DD_DOT = "YYYY_MM_DD_DOT"
    DWWWW_MMMM_D_YYYY = "DWWWW_MMMM_D_YYYY"
    DWWW_DD_MMM_YYYY = "DWWW_DD_MMM_YYYY"
    DWWW_MM_DD_YYYY = "DWWW_MM_DD_YYYY"
    MMMM_D = "MMMM_D"
    D_MMMM = "D_MMMM"


class HorizontalAlign(StrEnum):
    DEFAULT = "default"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlign(StrEnum):
    DEFAULT = "default"
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class NumberFormat(StrEnum):
    NONE = "none"
    NUMBER = "NUMBER"
    CURRENCY = "CURRENCY"
    PERCENT = "PERCENT"


# =============================================================================
# Field table
# =============================================================================


@dataclass(frozen=True)
class _FieldSpec:
    name: str
    wire_name: str
    kind: str  # "enum", "bool", "currency" or "int"
    enum: type[Enum] | None = None


_FIELDS: tuple[_FieldSpec, ...] = (
    _FieldSpec("font_family", "fontFamily", "enum", FontFamily),
    _FieldSpec("font_size", "fontSize", "enum", FontSize),
    _FieldSpec("bold", "bold", "bool"),
    _FieldSpec("italic", "italic", "bool"),
    _FieldSpec("underline", "underline", "bool"),
    _FieldSpec("strikethrough", "strikethrough", "bool"),
    _FieldSpec("horizontal_align", "horizontalAlign", "enum", HorizontalAlign),
    _FieldSpec("vertical_align", "verticalAlign", "enum", VerticalAlign),
    _FieldSpec("text_color", "textColor", "enum", Color),
    _FieldSpec("background_color", "backgroundColor", "enum", Color),
    _FieldSpec("taskbar_color", "taskbarColor", "enum", Color),
    _FieldSpec("currency", "currency", "currency", Currency),
    _FieldSpec("decimal_count", "decimalCount", "int"),
    _FieldSpec("thousands_separator", "thousandsSeparator", "bool"),
    _FieldSpec("number_format", "numberFormat", "enum", NumberFormat),
    _FieldSpec("text_wrap", "textWrap", "bool"),
    _FieldSpec("date_format", "dateFormat", "enum", DateFormat),
)

FIELD_COUNT = 17

_FIELD_BY_NAME: dict[str, _FieldSpec] = {}
for _spec in _FIELDS:
    _FIELD_BY_NAME[_spec.name] = _spec
    _FIELD_BY_NAME[_spec.wire_name] = _spec

# Used whenever a cell carries no format, or a malformed one.
DEFAULT_FORMAT_STRING = ",2,,,,,,,,,,,,,,,"

_LEADING_INT = re.compile(r"\s*[+-]?\d+")

_DEFAULT_RAW = [value or "0" for value in DEFAULT_FORMAT_STRING.split(",")]
if len(_DEFAULT_RAW) != FIELD_COUNT or len(_FIELDS) != FIELD_COUNT:
    raise RuntimeError(
        "Invalid default format table. This is an internal error of smartsheet_typed."
    )


def _decode_field(spec: _FieldSpec, raw: str, default_raw: str) -> Any:
    value = raw or default_raw
    if spec.kind == "bool":
        return value == "1"
    if spec.kind == "int":
        # Leading digits only, so "3.5" and "3x" both read as 3.
        match = _LEADING_INT.match(value)
        return int(match.group()) if match else 0
    assert spec.enum is not None
    if spec.kind == "currency":
        try:
            return spec.enum(value)
        except ValueError:
            return Currency.NONE
    members = list(spec.enum)
    try:
        index = int(value)
    except ValueError:
        index = -1
    if 0 <= index < len(members):
        return members[index]
    if value == default_raw:
        raise RuntimeError(f"Default index {value!r} out of range for {spec.name}")
    return _decode_field(spec, "", default_raw)


def _encode_field(spec: _FieldSpec, value: Any) -> str:
    if spec.kind == "bool":
        return "1" if value else "0"
    if spec.kind == "int":
        return str(int(value))
    assert spec.enum is not None
    member = spec.enum(value)
    if spec.kind == "currency":
        return str(member.value)
    return str(list(spec.enum).index(member))


_DEFAULT_VALUES: tuple[Any, ...] = tuple(
    _decode_field(spec, "", raw) for spec, raw in zip(_FIELDS, _DEFAULT_RAW)
)


# =============================================================================
# Format record
# =============================================================================


@dataclass(eq=False)
class CellFormat:
    """Decoded representation of a cell format string.

    Instances are mutable so that a row's formats can be edited in place
    before pushing the row back.

    Example:
        >>> fmt = CellFormat.parse(",,1,,,,,,,23,,,,,,,")
        >>> fmt.bold, fmt.background_color
        (True, <Color.BLUE: '#74B1F3'>)
        >>> fmt.stringify()
        ',,1,,,,,,,23,,,,,,,'
    """

    font_family: FontFamily = FontFamily.ARIAL
    font_size: FontSize = FontSize.SIZE_10
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    horizontal_align: HorizontalAlign = HorizontalAlign.DEFAULT
    vertical_align: VerticalAlign = VerticalAlign.DEFAULT
    text_color: Color = Color.AUTOMATIC
    background_color: Color = Color.AUTOMATIC
    taskbar_color: Color = Color.AUTOMATIC
    currency: Currency = Currency.NONE
    decimal_count: int = 0
    thousands_separator: bool = False
    number_format: NumberFormat = NumberFormat.NONE
    text_wrap: bool = False
    date_format: DateFormat = DateFormat.LOCALE_BASED

    def _values(self) -> tuple[Any, ...]:
        return tuple(getattr(self, spec.name) for spec in _FIELDS)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CellFormat):
            return NotImplemented
        return self._values() == other._values()

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def parse(cls, format_string: str | None) -> CellFormat:
        """Parse a format string from a Smartsheet cell."""
        return decode_format(format_string)

    @classmethod
    def from_partial(cls, partial: Mapping[str, Any]) -> CellFormat:
        """Build a format from only the fields the caller cares about.

        Keys may use either the Python names (``background_color``) or the
        wire names (``backgroundColor``).
        """
        merged = CellFormat()
        for key, value in partial.items():
            spec = _FIELD_BY_NAME.get(key)
            if spec is None:
                raise ValueError(f"Unknown cell format field: {key!r}")
            setattr(merged, spec.name, value)
        return decode_format(encode_format(merged))

    def stringify(self) -> str:
        """Serialize into the string used in a Smartsheet cell object."""
        return encode_format(self)

    def copy(self) -> CellFormat:
        return CellFormat(**{spec.name: getattr(self, spec.name) for spec in _FIELDS})

    def is_default(self) -> bool:
        return self._values() == _DEFAULT_VALUES


@dataclass(eq=False)
class RowFormat(CellFormat):
    """A cell format attached to a prepared row.

    Remembers the column's declared default so the cell can be reset to it.
    """

    column_default: CellFormat | None = field(default=None, repr=False)

    @classmethod
    def attach(cls, fmt: CellFormat, column_default: CellFormat | None) -> RowFormat:
        row_format = cls(column_default=column_default)
        row_format.update_from(fmt)
        return row_format

    def update_from(self, fmt: CellFormat) -> None:
        for spec in _FIELDS:
            setattr(self, spec.name, getattr(fmt, spec.name))

    def apply_default_format(self) -> None:
        """Apply the default format declared for this column in the local schema."""
        self.update_from(self.column_default or CellFormat())


# =============================================================================
# Codec
# =============================================================================


def decode_format(value: str | Mapping[str, Any] | CellFormat | None) -> CellFormat:
    """Decode a wire format string (or a partial record) into a CellFormat.

    A string that does not split into exactly 17 fields decodes to the
    all-defaults record.
    """
    if value is None:
        value = DEFAULT_FORMAT_STRING
    elif isinstance(value, CellFormat):
        return value.copy()
    elif isinstance(value, Mapping):
        return CellFormat.from_partial(value)

    parts = value.split(",")
    if len(parts) != FIELD_COUNT:
        parts = DEFAULT_FORMAT_STRING.split(",")

    decoded = {
        spec.name: _decode_field(spec, raw, default_raw)
        for spec, raw, default_raw in zip(_FIELDS, parts, _DEFAULT_RAW)
    }
    return CellFormat(**decoded)


def encode_format(fmt: CellFormat) -> str:
    """Encode a CellFormat into the 17-field wire string.

    Fields equal to their default are left empty, so the all-defaults
    record encodes to sixteen bare commas.
    """
    parts: list[str] = []
    for spec, default in zip(_FIELDS, _DEFAULT_VALUES):
        value = getattr(fmt, spec.name)
        if value == default:
            parts.append("")
        else:
            parts.append(_encode_field(spec, value))
    return ",".join(parts)


DEFAULT_FORMAT = decode_format(DEFAULT_FORMAT_STRING)
