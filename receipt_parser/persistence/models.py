from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """Record store credentials supplied by the caller; never persisted."""

    api_key: str = field(repr=False)
    database_id: str

    def is_complete(self) -> bool:
        return bool(self.api_key.strip()) and bool(self.database_id.strip())


@dataclass(frozen=True)
class PropertyNames:
    """Column names of the target database."""

    title: str = "Name"
    merchant: str = "Merchant"
    date: str = "Date"
    total: str = "Total"
    items: str = "Items"
