from __future__ import annotations

import pytest

from inventory_io.services.row_validator import RowValidationError, parse_number, validate_row


def test_minimal_valid_row_defaults():
    fields = validate_row({"name": " Pens ", "quantity": "50"}, 1)
    assert fields["name"] == "Pens"
    assert fields["quantity"] == 50
    assert isinstance(fields["quantity"], int)
    assert fields["minimum_quantity"] is None
    assert fields["status"] == "active"
    assert fields["category"] is None
    for key in ("description", "unit", "location_details", "preferred_vendor", "notes"):
        assert fields[key] is None


def test_optional_text_fields_are_trimmed():
    fields = validate_row(
        {
            "name": "Tape",
            "quantity": 3,
            "description": "  clear  ",
            "unit": "roll",
            "location_details": "",
            "status": " discontinued ",
            "category": " Office Supplies ",
        },
        4,
    )
    assert fields["description"] == "clear"
    assert fields["unit"] == "roll"
    assert fields["location_details"] is None
    assert fields["status"] == "discontinued"
    assert fields["category"] == "Office Supplies"


@pytest.mark.parametrize("name", [None, "", "   ", float("nan")])
def test_name_required(name):
    with pytest.raises(RowValidationError) as e:
        validate_row({"name": name, "quantity": "5"}, 3)
    assert str(e.value) == "Row 3: Name is required and must be a non-empty string"


def test_name_checked_before_quantity():
    with pytest.raises(RowValidationError) as e:
        validate_row({"name": "", "quantity": "abc"}, 1)
    assert "Name is required" in str(e.value)


@pytest.mark.parametrize("qty", [None, "", "  "])
def test_quantity_required(qty):
    with pytest.raises(RowValidationError) as e:
        validate_row({"name": "Pens", "quantity": qty}, 2)
    assert str(e.value) == "Row 2: Quantity is required"


def test_quantity_missing_key():
    with pytest.raises(RowValidationError, match="Quantity is required"):
        validate_row({"name": "Pens"}, 2)


@pytest.mark.parametrize("qty", ["abc", "-1", -0.5, "inf", True])
def test_quantity_must_be_non_negative_number(qty):
    with pytest.raises(RowValidationError) as e:
        validate_row({"name": "Pens", "quantity": qty}, 7)
    assert str(e.value) == "Row 7: Quantity must be a non-negative number"


def test_fractional_quantity_kept_as_float():
    assert validate_row({"name": "Wire", "quantity": "2.5"}, 1)["quantity"] == 2.5


def test_zero_quantity_is_valid():
    assert validate_row({"name": "Wire", "quantity": 0}, 1)["quantity"] == 0


def test_minimum_quantity_invalid():
    with pytest.raises(RowValidationError) as e:
        validate_row({"name": "Pens", "quantity": "5", "minimum_quantity": "-3"}, 9)
    assert str(e.value) == "Row 9: Minimum quantity must be a non-negative number"


def test_minimum_quantity_parsed():
    fields = validate_row({"name": "Pens", "quantity": "5", "minimum_quantity": "10"}, 1)
    assert fields["minimum_quantity"] == 10


def test_parse_number():
    assert parse_number("12") == 12
    assert parse_number(" 12.0 ") == 12
    assert parse_number(3.25) == 3.25
    assert parse_number("nan") is None
    assert parse_number(False) is None
    assert parse_number([1]) is None


def test_large_integer_quantity_keeps_precision():
    fields = validate_row({"name": "A", "quantity": "12345678901234567891"}, 1)
    assert fields["quantity"] == 12345678901234567891
    assert type(fields["quantity"]) is int
    assert parse_number(12345678901234567891) == 12345678901234567891
