"""Shared fixtures: sample ledger data and storage backends."""

from datetime import date

import pytest

from budget.config import LedgerSettings
from budget.models.ledger import Category, Transaction
from budget.services.storage import InMemoryLedgerStorage, SQLiteLedgerStorage

BUDGET_YAML = """\
income: 300000
categories-planned:
  - name: food
    amount: 60000
  - name: car
    amount: 20000
  - name: rent
    amount: 120000
"""


@pytest.fixture
def categories():
    return [
        Category(name="food", planned_amount=60000),
        Category(name="car", planned_amount=20000),
        Category(name="rent", planned_amount=120000),
    ]


@pytest.fixture
def transactions():
    """Expenses across May and June 2024, ids in insertion order."""
    return [
        Transaction(id=1, date=date(2024, 5, 30), category="food", amount=4000),
        Transaction(id=2, date=date(2024, 6, 1), category="car", amount=5000, comment="fuel"),
        Transaction(id=3, date=date(2024, 6, 3), category="food", amount=1500),
        Transaction(id=4, date=date(2024, 6, 3), category="food", amount=700, comment="lunch"),
        Transaction(id=5, date=date(2024, 6, 10), category="rent", amount=120000),
        Transaction(id=6, date=date(2024, 7, 1), category="car", amount=900),
    ]


@pytest.fixture(params=["memory", "sqlite"])
def storage(request, tmp_path):
    """Each storage implementation, with no ledger created yet."""
    if request.param == "memory":
        return InMemoryLedgerStorage()
    return SQLiteLedgerStorage(tmp_path / "ledger" / "budget.db")


@pytest.fixture
def populated_storage(storage, categories, transactions):
    """A ledger holding the sample categories and expenses."""
    storage.create_ledger(categories, income=300000)
    for t in transactions:
        storage.add_transaction(t.model_copy(update={"id": None}))
    return storage


@pytest.fixture
def budget_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(BUDGET_YAML, encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path, budget_file):
    return LedgerSettings(
        db_path=tmp_path / "budget.db",
        config_path=budget_file,
    )
