"""
SQLite Storage Implementation

DESIGN DECISION: A single local SQLite file holds the whole ledger:
1. No server, no setup - one file per budget
2. Single-statement atomicity is all the commands need
3. Date and amount bounds are pushed down into SQL

Dates are stored as ISO-8601 text (YYYY-MM-DD), which sorts and
compares correctly as plain strings.
"""

import sqlite3
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

import structlog

from budget.models.ledger import Category, Transaction
from budget.services.storage.interface import (
    DuplicateError,
    LedgerNotFoundError,
    LedgerStorageInterface,
    StorageError,
)


SCHEMA_SQL = """
CREATE TABLE categories (
    id INTEGER NOT NULL PRIMARY KEY,
    name TEXT NOT NULL UNIQUE,
    amount INTEGER NOT NULL
);

CREATE TABLE expenses (
    id INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,
    date TEXT NOT NULL,
    category TEXT NOT NULL,
    amount INTEGER NOT NULL,
    comment TEXT NOT NULL DEFAULT ''
);

CREATE INDEX ix_expenses_date ON expenses (date);

CREATE TABLE ledger_meta (
    key TEXT NOT NULL PRIMARY KEY,
    value TEXT NOT NULL
);
"""

INCOME_KEY = "income"

logger = structlog.get_logger(__name__)


class SQLiteLedgerStorage(LedgerStorageInterface):
    """
    SQLite implementation of ledger storage.

    A connection is opened per operation and closed right after,
    since every command runs once and exits.
    """

    def __init__(self, db_path: Union[str, Path]):
        self._db_path = Path(db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    @contextmanager
    def _connect(self, must_exist: bool = True) -> Iterator[sqlite3.Connection]:
        if must_exist and not self._db_path.exists():
            raise LedgerNotFoundError(
                f"No budget found at {self._db_path}. Run `budget create` first."
            )
        try:
            conn = sqlite3.connect(str(self._db_path))
        except sqlite3.Error as e:
            raise StorageError(f"Failed to open ledger {self._db_path}: {e}")
        try:
            yield conn
        finally:
            conn.close()

    def _row_to_transaction(self, row: tuple) -> Transaction:
        return Transaction(
            id=row[0],
            date=date.fromisoformat(row[1]),
            category=row[2],
            amount=row[3],
            comment=row[4] or "",
        )

    def create_ledger(self, categories: Iterable[Category], income: int) -> None:
        """Drop any existing ledger file and write a fresh one."""
        categories = list(categories)
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._db_path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to reset ledger {self._db_path}: {e}")

        try:
            with self._connect(must_exist=False) as conn:
                try:
                    conn.executescript(SCHEMA_SQL)
                    conn.executemany(
                        "INSERT INTO categories (name, amount) VALUES (?, ?)",
                        [(c.name, c.planned_amount) for c in categories],
                    )
                    conn.execute(
                        "INSERT INTO ledger_meta (key, value) VALUES (?, ?)",
                        (INCOME_KEY, str(income)),
                    )
                    conn.commit()
                except sqlite3.IntegrityError as e:
                    raise DuplicateError(f"Duplicate category in budget: {e}")
                except sqlite3.Error as e:
                    raise StorageError(f"Failed to create ledger: {e}")
        except StorageError:
            # Leave no partial ledger behind
            self._db_path.unlink(missing_ok=True)
            raise

        logger.debug(
            "ledger_created",
            db_path=str(self._db_path),
            category_count=len(categories),
        )

    def add_transaction(self, transaction: Transaction) -> Transaction:
        """Insert one expense row and return it with its new id."""
        with self._connect() as conn:
            try:
                cursor = conn.execute(
                    "INSERT INTO expenses (date, category, amount, comment) "
                    "VALUES (?, ?, ?, ?)",
                    (
                        transaction.date.isoformat(),
                        transaction.category,
                        transaction.amount,
                        transaction.comment,
                    ),
                )
                conn.commit()
                new_id = cursor.lastrowid
            except sqlite3.Error as e:
                raise StorageError(f"Failed to save expense: {e}")

        return transaction.model_copy(update={"id": new_id})

    def list_categories(self) -> list[Category]:
        with self._connect() as conn:
            try:
                rows = conn.execute(
                    "SELECT name, amount FROM categories ORDER BY name ASC"
                ).fetchall()
            except sqlite3.Error as e:
                raise StorageError(f"Failed to list categories: {e}")

        return [Category(name=name, planned_amount=amount) for name, amount in rows]

    def list_transactions(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        min_amount: Optional[int] = None,
        max_amount: Optional[int] = None,
    ) -> list[Transaction]:
        """List expenses, narrowing by date and amount in SQL."""
        clauses = []
        params: list = []
        if date_from is not None:
            clauses.append("date >= ?")
            params.append(date_from.isoformat())
        if date_to is not None:
            clauses.append("date <= ?")
            params.append(date_to.isoformat())
        if min_amount is not None:
            clauses.append("amount >= ?")
            params.append(min_amount)
        if max_amount is not None:
            clauses.append("amount <= ?")
            params.append(max_amount)

        sql = "SELECT id, date, category, amount, comment FROM expenses"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY date ASC, id ASC"

        with self._connect() as conn:
            try:
                rows = conn.execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise StorageError(f"Failed to list expenses: {e}")

        return [self._row_to_transaction(row) for row in rows]

    def get_income(self) -> Optional[int]:
        with self._connect() as conn:
            try:
                row = conn.execute(
                    "SELECT value FROM ledger_meta WHERE key = ?",
                    (INCOME_KEY,),
                ).fetchone()
            except sqlite3.OperationalError as e:
                if "no such table" in str(e):
                    # Ledger written before income was stored
                    return None
                raise StorageError(f"Failed to read income: {e}")
            except sqlite3.Error as e:
                raise StorageError(f"Failed to read income: {e}")

        return int(row[0]) if row else None
