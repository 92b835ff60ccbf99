from receipt_parser.config.settings import Settings
from receipt_parser.persistence.base import BaseRecordStore
from receipt_parser.persistence.memory_store import InMemoryRecordStore
from receipt_parser.persistence.models import PropertyNames
from receipt_parser.persistence.notion_store import NotionRecordStore


class RecordStoreFactory:
    """Creates the configured record store adapter."""

    BACKENDS: tuple[str, ...] = ("notion", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseRecordStore:
        backend = settings.persistence_backend.lower()
        property_names = cls._property_names(settings)
        if backend == "notion":
            return NotionRecordStore(
                base_url=settings.notion_api_base_url,
                notion_version=settings.notion_version,
                timeout_seconds=settings.notion_timeout_seconds,
                property_names=property_names,
            )
        if backend == "memory":
            return InMemoryRecordStore(property_names=property_names)
        raise ValueError(
            f"Unknown persistence backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )

    @staticmethod
    def _property_names(settings: Settings) -> PropertyNames:
        return PropertyNames(
            title=settings.notion_title_property,
            merchant=settings.notion_merchant_property,
            date=settings.notion_date_property,
            total=settings.notion_total_property,
            items=settings.notion_items_property,
        )
