from dataclasses import dataclass, field


@dataclass(frozen=True)
class LineItem:
    """A single purchased item on a receipt."""

    item: str
    quantity: float
    price: float


@dataclass(frozen=True)
class ExtractedRecord:
    """Structured data extracted from one receipt."""

    merchant: str
    date: str
    total: float
    line_items: list[LineItem] = field(default_factory=list)
