"""
Storage Services Package

Provides the abstract ledger interface and its implementations.
SQLite is the durable backend; the in-memory store backs tests.
"""

from budget.services.storage.interface import (
    DuplicateError,
    LedgerNotFoundError,
    LedgerStorageInterface,
    StorageError,
)
from budget.services.storage.memory_store import InMemoryLedgerStorage
from budget.services.storage.sqlite_store import SQLiteLedgerStorage

__all__ = [
    # Interface
    "LedgerStorageInterface",
    # Exceptions
    "DuplicateError",
    "LedgerNotFoundError",
    "StorageError",
    # Implementations
    "InMemoryLedgerStorage",
    "SQLiteLedgerStorage",
]
