"""Tests for structured response validation."""

from typing import Any

import pytest

from receipt_parser.extraction.exceptions import StructuringError, StructuringValidationError
from receipt_parser.extraction.validator import validate_and_build


def _valid_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "merchant": "Corner Grocery",
        "date": "2024-03-15",
        "total": 5,
        "items": [{"item": "Milk", "quantity": 2, "price": 1.25}],
    }
    payload.update(overrides)
    return payload


class TestValidPayload:
    def test_builds_record(self) -> None:
        record = validate_and_build(_valid_payload())
        assert record.merchant == "Corner Grocery"
        assert record.date == "2024-03-15"
        assert record.total == 5.0
        assert record.line_items[0].item == "Milk"
        assert record.line_items[0].quantity == 2.0

    def test_accepts_empty_items(self) -> None:
        record = validate_and_build(_valid_payload(items=[]))
        assert record.line_items == []


class TestMissingFields:
    @pytest.mark.parametrize("field", ["merchant", "date", "total", "items"])
    def test_missing_top_level_field(self, field: str) -> None:
        payload = _valid_payload()
        del payload[field]
        with pytest.raises(StructuringValidationError, match=f"Missing required field: {field}"):
            validate_and_build(payload)

    def test_missing_item_price(self) -> None:
        payload = _valid_payload(items=[{"item": "Milk", "quantity": 1}])
        with pytest.raises(StructuringValidationError, match="index 0.*'price'"):
            validate_and_build(payload)

    def test_is_a_structuring_error(self) -> None:
        payload = _valid_payload()
        del payload["total"]
        with pytest.raises(StructuringError):
            validate_and_build(payload)


class TestWrongTypes:
    def test_total_as_string(self) -> None:
        with pytest.raises(StructuringValidationError, match="'total' must be a number"):
            validate_and_build(_valid_payload(total="5.00"))

    def test_total_as_bool(self) -> None:
        with pytest.raises(StructuringValidationError, match="'total' must be a number"):
            validate_and_build(_valid_payload(total=True))

    def test_merchant_as_null(self) -> None:
        with pytest.raises(StructuringValidationError, match="'merchant' must be a string"):
            validate_and_build(_valid_payload(merchant=None))

    def test_items_not_a_list(self) -> None:
        with pytest.raises(StructuringValidationError, match="'items' must be a list"):
            validate_and_build(_valid_payload(items={"item": "Milk"}))

    def test_item_not_an_object(self) -> None:
        with pytest.raises(StructuringValidationError, match="index 0 must be an object"):
            validate_and_build(_valid_payload(items=["Milk"]))

    def test_item_quantity_as_string(self) -> None:
        payload = _valid_payload(items=[{"item": "Milk", "quantity": "2", "price": 1.0}])
        with pytest.raises(StructuringValidationError, match=r"items\[0\].quantity"):
            validate_and_build(payload)


class TestNonFiniteNumbers:
    @pytest.mark.parametrize("total", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite_total(self, total: float) -> None:
        with pytest.raises(StructuringValidationError, match="'total' must be a finite number"):
            validate_and_build(_valid_payload(total=total))

    def test_rejects_integer_too_large_for_float(self) -> None:
        with pytest.raises(StructuringValidationError, match="'total' is out of range"):
            validate_and_build(_valid_payload(total=10**400))

    def test_rejects_non_finite_item_price(self) -> None:
        payload = _valid_payload(items=[{"item": "Milk", "quantity": 1, "price": float("inf")}])
        with pytest.raises(StructuringValidationError, match=r"items\[0\].price"):
            validate_and_build(payload)


class TestDate:
    def test_accepts_empty_date(self) -> None:
        assert validate_and_build(_valid_payload(date="")).date == ""

    def test_strips_whitespace(self) -> None:
        assert validate_and_build(_valid_payload(date=" 2024-03-15 ")).date == "2024-03-15"

    @pytest.mark.parametrize("value", ["15/03/24", "March 15, 2024", "2024-3-15", "20240315"])
    def test_rejects_non_iso_date(self, value: str) -> None:
        with pytest.raises(StructuringValidationError, match="'date' must be a YYYY-MM-DD date"):
            validate_and_build(_valid_payload(date=value))

    def test_rejects_impossible_calendar_date(self) -> None:
        with pytest.raises(StructuringValidationError, match="not a valid date"):
            validate_and_build(_valid_payload(date="2024-02-30"))
