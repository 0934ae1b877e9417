"""Tests for the cell format codec."""

import pytest

from smartsheet_typed.formats import (
    DEFAULT_FORMAT,
    DEFAULT_FORMAT_STRING,
    FIELD_COUNT,
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

ALL_DEFAULTS = "," * 16

ENUM_FIELDS = {
    "font_family": FontFamily,
    "font_size": FontSize,
    "horizontal_align": HorizontalAlign,
    "vertical_align": VerticalAlign,
    "text_color": Color,
    "background_color": Color,
    "taskbar_color": Color,
    "currency": Currency,
    "number_format": NumberFormat,
    "date_format": DateFormat,
}

ENUM_MEMBERS = [
    pytest.param(name, member, id=f"{name}-{member.name}")
    for name, enum in ENUM_FIELDS.items()
    for member in enum
]


def wire(**fields: str) -> str:
    """Build a format string with the given positional fields set."""
    positions = {
        "font_family": 0,
        "font_size": 1,
        "bold": 2,
        "italic": 3,
        "text_color": 8,
        "background_color": 9,
        "currency": 11,
        "decimal_count": 12,
        "date_format": 16,
    }
    parts = [""] * FIELD_COUNT
    for name, value in fields.items():
        parts[positions[name]] = value
    return ",".join(parts)


class TestDecode:
    def test_none_decodes_to_defaults(self):
        fmt = decode_format(None)
        assert fmt == CellFormat()
        assert fmt.font_size == FontSize.SIZE_10
        assert fmt.font_family == FontFamily.ARIAL

    def test_default_string(self):
        assert decode_format(DEFAULT_FORMAT_STRING) == CellFormat()
        assert DEFAULT_FORMAT.is_default()

    def test_bold_blue_background(self):
        fmt = decode_format(",,1,,,,,,,23,,,,,,,")
        assert fmt.bold is True
        assert fmt.italic is False
        assert fmt.background_color == Color.BLUE
        assert fmt.text_color == Color.AUTOMATIC

    def test_wrong_field_count_decodes_to_defaults(self):
        assert decode_format("1,2,3") == CellFormat()
        assert decode_format("") == CellFormat()

    def test_out_of_range_index_uses_field_default(self):
        fmt = decode_format(wire(text_color="99", font_size="40"))
        assert fmt.text_color == Color.AUTOMATIC
        assert fmt.font_size == FontSize.SIZE_10

    def test_non_numeric_index_uses_field_default(self):
        fmt = decode_format(wire(font_family="x"))
        assert fmt.font_family == FontFamily.ARIAL

    def test_enum_indexes(self):
        fmt = decode_format(wire(font_family="3", font_size="3", date_format="4"))
        assert fmt.font_family == FontFamily.TIMES_NEW_ROMAN
        assert fmt.font_size == FontSize.SIZE_12
        assert fmt.date_format == DateFormat.YYYY_MM_DD_HYPHEN

    def test_currency_matched_by_code(self):
        assert decode_format(wire(currency="13")).currency == Currency.USD
        assert decode_format(wire(currency="6")).currency == Currency.EUR

    def test_unknown_currency_is_none(self):
        assert decode_format(wire(currency="99")).currency == Currency.NONE

    def test_decimal_count(self):
        assert decode_format(wire(decimal_count="2")).decimal_count == 2
        assert decode_format(wire(decimal_count="two")).decimal_count == 0

    @pytest.mark.parametrize("raw", ["3.5", "3x", "3"])
    def test_decimal_count_reads_leading_digits(self, raw):
        assert decode_format(wire(decimal_count=raw)).decimal_count == 3

    def test_decode_copies_records(self):
        original = CellFormat(bold=True)
        decoded = decode_format(original)
        assert decoded == original
        assert decoded is not original


class TestEncode:
    def test_defaults_encode_to_empty_fields(self):
        assert encode_format(CellFormat()) == ALL_DEFAULTS
        assert encode_format(DEFAULT_FORMAT) == ALL_DEFAULTS

    def test_stringify(self):
        fmt = CellFormat(bold=True, background_color=Color.BLUE)
        assert fmt.stringify() == ",,1,,,,,,,23,,,,,,,"

    def test_currency_encodes_code(self):
        assert encode_format(CellFormat(currency=Currency.EUR)) == wire(currency="6")

    def test_decimal_count(self):
        assert encode_format(CellFormat(decimal_count=3)) == wire(decimal_count="3")

    def test_mutation_in_place(self):
        fmt = CellFormat()
        fmt.italic = True
        assert fmt.stringify() == wire(italic="1")

    def test_full_record_survives_round_trip(self):
        fmt = CellFormat(
            font_family=FontFamily.VERDANA,
            font_size=FontSize.SIZE_14,
            bold=True,
            italic=True,
            underline=True,
            strikethrough=True,
            horizontal_align=HorizontalAlign.RIGHT,
            vertical_align=VerticalAlign.BOTTOM,
            text_color=Color.RED_DARK,
            background_color=Color.YELLOW_LIGHTER,
            taskbar_color=Color.GREEN,
            currency=Currency.USD,
            decimal_count=2,
            thousands_separator=True,
            number_format=NumberFormat.CURRENCY,
            text_wrap=True,
            date_format=DateFormat.MMMM_D,
        )
        encoded = encode_format(fmt)
        assert len(encoded.split(",")) == FIELD_COUNT
        assert decode_format(encoded) == fmt

    @pytest.mark.parametrize(("name", "member"), ENUM_MEMBERS)
    def test_every_enum_member_survives_round_trip(self, name, member):
        fmt = CellFormat(**{name: member})

        decoded = decode_format(encode_format(fmt))

        assert getattr(decoded, name) == member
        assert decoded == fmt


class TestPartialFormats:
    def test_python_and_wire_names(self):
        fmt = CellFormat.from_partial({"bold": True, "backgroundColor": Color.BLUE})
        assert fmt == CellFormat(bold=True, background_color=Color.BLUE)

    def test_enum_values_as_strings(self):
        fmt = CellFormat.from_partial({"text_color": "#74B1F3"})
        assert fmt.text_color == Color.BLUE

    def test_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown cell format field"):
            CellFormat.from_partial({"blink": True})

    def test_decode_mapping(self):
        assert decode_format({"bold": True}).bold is True


class TestCellFormat:
    def test_color_table(self):
        colors = list(Color)
        assert len(colors) == 42
        assert colors[0] == Color.AUTOMATIC

    def test_equality_by_value(self):
        assert CellFormat(bold=True) == CellFormat(bold=True)
        assert CellFormat(bold=True) != CellFormat()

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(CellFormat())

    def test_copy_is_independent(self):
        fmt = CellFormat(bold=True)
        other = fmt.copy()
        other.bold = False
        assert fmt.bold is True


class TestRowFormat:
    def test_apply_default_format(self):
        column_default = CellFormat.from_partial({"bold": True})
        row_format = RowFormat.attach(CellFormat(italic=True), column_default)
        assert row_format.italic is True

        row_format.apply_default_format()

        assert row_format == column_default

    def test_apply_default_without_column_default(self):
        row_format = RowFormat.attach(CellFormat(italic=True), None)
        row_format.apply_default_format()
        assert row_format.is_default()

    def test_attach_copies_fields(self):
        source = CellFormat(bold=True)
        row_format = RowFormat.attach(source, None)
        row_format.bold = False
        assert source.bold is True
