"""
In-Memory Storage Implementation

Holds the ledger in plain lists. Used by tests and by anything that
wants to run the reporting core over a snapshot without a database.
"""

from datetime import date
from typing import Iterable, Optional

from budget.models.ledger import Category, Transaction
from budget.services.storage.interface import (
    DuplicateError,
    LedgerNotFoundError,
    LedgerStorageInterface,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """
    In-memory implementation of ledger storage.

    Ids are assigned from a counter, mirroring SQLite AUTOINCREMENT.
    """

    def __init__(self):
        self._categories: Optional[list[Category]] = None
        self._transactions: list[Transaction] = []
        self._income: Optional[int] = None
        self._next_id = 1

    def _require_ledger(self) -> None:
        if self._categories is None:
            raise LedgerNotFoundError("No budget has been created yet.")

    def create_ledger(self, categories: Iterable[Category], income: int) -> None:
        categories = list(categories)
        names = [c.name for c in categories]
        if len(names) != len(set(names)):
            raise DuplicateError("Duplicate category in budget")

        self._categories = categories
        self._transactions = []
        self._income = income
        self._next_id = 1

    def add_transaction(self, transaction: Transaction) -> Transaction:
        self._require_ledger()
        stored = transaction.model_copy(update={"id": self._next_id})
        self._next_id += 1
        self._transactions.append(stored)
        return stored

    def list_categories(self) -> list[Category]:
        self._require_ledger()
        return sorted(self._categories, key=lambda c: c.name)

    def list_transactions(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        min_amount: Optional[int] = None,
        max_amount: Optional[int] = None,
    ) -> list[Transaction]:
        self._require_ledger()

        results = []
        for t in self._transactions:
            if date_from is not None and t.date < date_from:
                continue
            if date_to is not None and t.date > date_to:
                continue
            if min_amount is not None and t.amount < min_amount:
                continue
            if max_amount is not None and t.amount > max_amount:
                continue
            results.append(t)

        results.sort(key=lambda t: (t.date, t.id))
        return results

    def get_income(self) -> Optional[int]:
        self._require_ledger()
        return self._income
