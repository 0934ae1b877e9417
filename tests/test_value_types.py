"""Tests for the column type registry and value validators."""

from datetime import date, datetime

import pytest

from smartsheet_typed.columns import ColumnType
from smartsheet_typed.exceptions import SchemaError, ValueValidationError
from smartsheet_typed.schema import define_column
from smartsheet_typed.value_types import RowValidator, value_validator


class TestValueValidator:
    def test_text_number_accepts_text_and_numbers(self):
        validator = value_validator(ColumnType.TEXT_NUMBER)
        assert validator.parse("abc") == "abc"
        assert validator.parse(42) == 42
        assert validator.parse(1.5) == 1.5

    def test_none_is_always_accepted(self):
        for column_type in (ColumnType.TEXT_NUMBER, ColumnType.CHECKBOX, ColumnType.DATE):
            assert value_validator(column_type).parse(None) is None

    def test_checkbox_is_strict(self):
        validator = value_validator(ColumnType.CHECKBOX)
        assert validator.parse(True) is True
        assert not validator.safe_parse("yes").success
        assert not validator.safe_parse(1).success

    def test_date_accepts_iso_strings(self):
        validator = value_validator(ColumnType.DATE)
        assert validator.parse("2024-01-31") == date(2024, 1, 31)
        assert validator.parse(date(2024, 2, 1)) == date(2024, 2, 1)
        assert not validator.safe_parse("next week").success

    def test_datetime(self):
        validator = value_validator(ColumnType.DATETIME)
        assert validator.parse("2024-01-31T10:00:00") == datetime(2024, 1, 31, 10, 0)
        assert validator.parse("2024-01-31T10:00:00Z").tzinfo is not None

    @pytest.mark.parametrize("value", [0, 1706659200, 1.5, True, "12"])
    def test_date_rejects_numbers(self, value):
        assert not value_validator(ColumnType.DATE).safe_parse(value).success

    @pytest.mark.parametrize("value", [12, 1706659200.0, False, "12"])
    def test_datetime_rejects_numbers(self, value):
        assert not value_validator(ColumnType.DATETIME).safe_parse(value).success

    def test_contact_list(self):
        validator = value_validator(ColumnType.CONTACT_LIST)
        assert validator.parse(["a@example.com"]) == ["a@example.com"]
        assert not validator.safe_parse("a@example.com").success

    def test_duration_is_numeric(self):
        validator = value_validator(ColumnType.DURATION)
        assert validator.parse(3) == 3
        assert not validator.safe_parse("3d").success

    def test_picklist_accepts_declared_options_only(self):
        validator = value_validator(ColumnType.PICKLIST, ["Active", "Inactive"])
        assert validator.parse("Active") == "Active"
        result = validator.safe_parse("Archived")
        assert not result.success
        assert result.error

    def test_multi_picklist(self):
        validator = value_validator(ColumnType.MULTI_PICKLIST, ["A", "B", "C"])
        assert validator.parse(["A", "C"]) == ["A", "C"]
        assert not validator.safe_parse(["A", "D"]).success
        assert not validator.safe_parse("A").success

    def test_parse_raises(self):
        with pytest.raises(ValueValidationError, match="CHECKBOX"):
            value_validator(ColumnType.CHECKBOX).parse("no")


class TestValueValidatorErrors:
    def test_unknown_type(self):
        with pytest.raises(SchemaError, match="Unknown column type"):
            value_validator("SPARKLINE")

    def test_picklist_requires_options(self):
        with pytest.raises(SchemaError, match="options"):
            value_validator(ColumnType.PICKLIST)
        with pytest.raises(SchemaError, match="options"):
            value_validator(ColumnType.MULTI_PICKLIST, [])

    def test_options_rejected_for_other_types(self):
        with pytest.raises(SchemaError, match="do not take options"):
            value_validator(ColumnType.TEXT_NUMBER, ["A"])


class TestRowValidator:
    @pytest.fixture
    def validator(self) -> RowValidator:
        return RowValidator(
            {
                "name": define_column("Name", ColumnType.TEXT_NUMBER, primary=True),
                "status": define_column("Status", ColumnType.PICKLIST, options=["A", "B"]),
                "done": define_column("Done", ColumnType.CHECKBOX),
            }
        )

    def test_ignores_keys_outside_schema(self, validator: RowValidator):
        assert validator.validate({"name": "x", "extra": object()}) == {"name": "x"}

    def test_partial_values(self, validator: RowValidator):
        assert validator.validate({"done": True}) == {"done": True}

    def test_reports_every_failing_key(self, validator: RowValidator):
        with pytest.raises(ValueValidationError) as exc_info:
            validator.validate({"name": "x", "status": "C", "done": "yes"})

        assert set(exc_info.value.errors) == {"status", "done"}
        assert "status" in str(exc_info.value)
        assert "done" in str(exc_info.value)

    def test_contains(self, validator: RowValidator):
        assert "status" in validator
        assert "extra" not in validator
