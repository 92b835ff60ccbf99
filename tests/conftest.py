import pytest

from receipt_parser.extraction.models import ExtractedRecord, LineItem
from receipt_parser.persistence.models import Credentials
from receipt_parser.processor.models import UploadItem

# PNG signature followed by filler; the pipeline never decodes image bytes.
_FAKE_PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture()
def png_bytes() -> bytes:
    return _FAKE_PNG


@pytest.fixture()
def upload_item() -> UploadItem:
    return UploadItem.from_bytes(_FAKE_PNG, "image/png", filename="receipt.png")


@pytest.fixture()
def credentials() -> Credentials:
    return Credentials(api_key="secret_test_key", database_id="db-123")


@pytest.fixture()
def record() -> ExtractedRecord:
    return ExtractedRecord(
        merchant="Corner Grocery",
        date="2024-03-15",
        total=5.0,
        line_items=[
            LineItem(item="Milk", quantity=2, price=1.25),
            LineItem(item="Bread", quantity=1, price=2.5),
        ],
    )
