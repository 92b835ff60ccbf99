from abc import ABC, abstractmethod

from receipt_parser.extraction.models import ExtractedRecord
from receipt_parser.persistence.models import Credentials


class BaseRecordStore(ABC):
    """Contract for all record store adapters."""

    @abstractmethod
    def save(self, record: ExtractedRecord, credentials: Credentials) -> str:
        """Create one new row for the record and return its identifier.

        Not idempotent: saving the same record twice creates two rows.

        Raises:
            PersistenceError: if the store rejects the write or is unreachable.
        """

    def close(self) -> None:
        """Release any connection held by the store."""

    def __enter__(self) -> "BaseRecordStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
