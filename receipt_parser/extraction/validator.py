"""Validates the parsed structuring response and builds an ExtractedRecord."""

import math
import re
from datetime import date as calendar_date
from typing import Any

from receipt_parser.extraction.exceptions import StructuringValidationError
from receipt_parser.extraction.models import ExtractedRecord, LineItem

_REQUIRED_FIELDS = ("merchant", "date", "total", "items")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_and_build(data: dict[str, Any]) -> ExtractedRecord:
    """Validate raw parsed JSON and build an ExtractedRecord.

    Field names and types must match the expense schema exactly. The date is
    either empty or a real calendar date in ``YYYY-MM-DD`` form, and every
    amount is a finite number.

    Raises:
        StructuringValidationError: on any validation failure.
    """
    _require_top_level_fields(data)
    merchant = _require_string(data["merchant"], "merchant")
    date = _require_iso_date(data["date"], "date")
    total = _require_number(data["total"], "total")
    line_items = _build_line_items(data["items"])
    return ExtractedRecord(merchant=merchant, date=date, total=total, line_items=line_items)


def _require_top_level_fields(data: dict[str, Any]) -> None:
    for field in _REQUIRED_FIELDS:
        if field not in data:
            raise StructuringValidationError(f"Missing required field: {field}")


def _require_string(raw: Any, path: str) -> str:
    if not isinstance(raw, str):
        raise StructuringValidationError(f"'{path}' must be a string")
    return raw


def _require_iso_date(raw: Any, path: str) -> str:
    value = _require_string(raw, path).strip()
    if not value:
        return value
    if not _ISO_DATE.match(value):
        raise StructuringValidationError(f"'{path}' must be a YYYY-MM-DD date, got {value!r}")
    try:
        calendar_date.fromisoformat(value)
    except ValueError as exc:
        raise StructuringValidationError(f"'{path}' is not a valid date: {value!r}") from exc
    return value


def _require_number(raw: Any, path: str) -> float:
    # bool is a subclass of int and is never a valid amount
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise StructuringValidationError(f"'{path}' must be a number")
    try:
        value = float(raw)
    except OverflowError as exc:
        raise StructuringValidationError(f"'{path}' is out of range") from exc
    if not math.isfinite(value):
        raise StructuringValidationError(f"'{path}' must be a finite number")
    return value


def _build_line_items(raw: Any) -> list[LineItem]:
    if not isinstance(raw, list):
        raise StructuringValidationError("'items' must be a list")
    return [_build_line_item(item, i) for i, item in enumerate(raw)]


def _build_line_item(raw: Any, index: int) -> LineItem:
    if not isinstance(raw, dict):
        raise StructuringValidationError(f"Item at index {index} must be an object")
    for field in ("item", "quantity", "price"):
        if field not in raw:
            raise StructuringValidationError(
                f"Item at index {index}: missing required field '{field}'"
            )
    return LineItem(
        item=_require_string(raw["item"], f"items[{index}].item"),
        quantity=_require_number(raw["quantity"], f"items[{index}].quantity"),
        price=_require_number(raw["price"], f"items[{index}].price"),
    )
