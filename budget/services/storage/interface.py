"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for ledger storage.
This allows us to:
1. Keep the reporting core free of SQL
2. Use in-memory storage for testing
3. Swap SQLite for another backend without touching business logic

The interface is intentionally small - two read operations the core
consumes (list_categories, list_transactions) plus the writes and
lookups the commands need.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Optional

from budget.errors import LedgerError
from budget.models.ledger import Category, Transaction


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Any storage implementation (SQLite, in-memory, ...)
    must implement these methods.
    """

    @abstractmethod
    def create_ledger(self, categories: Iterable[Category], income: int) -> None:
        """
        (Re)initialize the ledger.

        DESTRUCTIVE: any existing categories and transactions are
        dropped. The new ledger holds the given categories, the income
        and no transactions.

        Raises:
            DuplicateError: If two categories share a name
            StorageError: If the ledger cannot be written
        """
        pass

    @abstractmethod
    def add_transaction(self, transaction: Transaction) -> Transaction:
        """
        Append one transaction.

        Args:
            transaction: The validated transaction (its id is ignored)

        Returns:
            The stored transaction with its store-assigned id

        Raises:
            LedgerNotFoundError: If no ledger has been created
            StorageError: If the insert fails
        """
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """
        List every planned category.

        Returns:
            Categories ordered ascending by name

        Raises:
            LedgerNotFoundError: If no ledger has been created
        """
        pass

    @abstractmethod
    def list_transactions(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        min_amount: Optional[int] = None,
        max_amount: Optional[int] = None,
    ) -> list[Transaction]:
        """
        List transactions matching optional inclusive bounds.

        Args:
            date_from: Keep transactions on or after this date
            date_to: Keep transactions on or before this date
            min_amount: Keep transactions with amount >= min_amount
            max_amount: Keep transactions with amount <= max_amount

        Returns:
            Matching transactions ordered by date, then id

        Raises:
            LedgerNotFoundError: If no ledger has been created
        """
        pass

    @abstractmethod
    def get_income(self) -> Optional[int]:
        """
        Monthly income stored at creation time.

        Returns:
            The income, or None if the ledger predates income storage
        """
        pass


class StorageError(LedgerError):
    """Base exception for storage operations."""
    pass


class LedgerNotFoundError(StorageError):
    """No ledger exists yet at the configured location."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
