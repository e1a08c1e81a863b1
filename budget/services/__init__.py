"""Services package."""

from budget.services.storage import (
    DuplicateError,
    InMemoryLedgerStorage,
    LedgerNotFoundError,
    LedgerStorageInterface,
    SQLiteLedgerStorage,
    StorageError,
)

__all__ = [
    # Storage services
    "DuplicateError",
    "InMemoryLedgerStorage",
    "LedgerNotFoundError",
    "LedgerStorageInterface",
    "SQLiteLedgerStorage",
    "StorageError",
]
