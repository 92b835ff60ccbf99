"""Maps an ExtractedRecord onto Notion page properties."""

from typing import Any

from receipt_parser.extraction.models import ExtractedRecord, LineItem
from receipt_parser.persistence.models import PropertyNames

MAX_RICH_TEXT_LENGTH = 2000


def build_properties(
    record: ExtractedRecord,
    names: PropertyNames | None = None,
) -> dict[str, Any]:
    """Build the ``properties`` object for a Notion page-create request."""
    if names is None:
        names = PropertyNames()
    return {
        names.title: {"title": _rich_text(build_title(record))},
        names.merchant: {"rich_text": _rich_text(record.merchant)},
        names.date: {"date": {"start": record.date} if record.date else None},
        names.total: {"number": record.total},
        names.items: {"rich_text": _rich_text(flatten_line_items(record.line_items))},
    }


def build_title(record: ExtractedRecord) -> str:
    return f"{record.merchant} - {record.date}"


def flatten_line_items(line_items: list[LineItem]) -> str:
    """Render line items one per line, truncated to the rich-text limit.

    Truncation is silent and applied after joining.
    """
    text = "\n".join(format_line_item(li) for li in line_items)
    return text[:MAX_RICH_TEXT_LENGTH]


def format_line_item(line_item: LineItem) -> str:
    """Render a line item as ``"2 x Milk @ 1.25"``."""
    return f"{_format_quantity(line_item.quantity)} x {line_item.item} @ {line_item.price:.2f}"


def _format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:g}"


def _rich_text(content: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": content[:MAX_RICH_TEXT_LENGTH]}}]
