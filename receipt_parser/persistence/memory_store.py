import uuid

from receipt_parser.extraction.models import ExtractedRecord
from receipt_parser.logging.logger import Log
from receipt_parser.persistence.base import BaseRecordStore
from receipt_parser.persistence.models import Credentials, PropertyNames
from receipt_parser.persistence.property_mapper import build_properties


class InMemoryRecordStore(BaseRecordStore):
    """Keeps rows in process memory. No network calls; used for dry runs and tests."""

    def __init__(self, property_names: PropertyNames | None = None) -> None:
        self._property_names = property_names or PropertyNames()
        self.rows: dict[str, dict[str, object]] = {}

    def save(self, record: ExtractedRecord, credentials: Credentials) -> str:
        row_id = str(uuid.uuid4())
        self.rows[row_id] = {
            "database_id": credentials.database_id,
            "properties": build_properties(record, self._property_names),
        }
        Log.info(f"Stored row {row_id} in memory ({len(self.rows)} rows)")
        return row_id
