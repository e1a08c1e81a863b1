"""
Two-Stage Expense Validation

DESIGN DECISION: Validation happens in two distinct stages, both
BEFORE anything is written:

STAGE 1 - FORMAT VALIDATION:
- Date must be a real calendar date in YYYY-MM-DD form
- Amount must fit a signed 64-bit integer
- This needs no storage access

STAGE 2 - LEDGER VALIDATION:
- Category must name an existing planned category
- This needs storage access (the category list)

The category check lives here, at entry time, and nowhere else.
Reports never re-validate stored expenses.

IMPORTANT: Validation NEVER silently fixes input. The first failing
check raises, and the command is aborted with nothing written.
"""

import re
from datetime import date, datetime
from typing import Iterable, Optional, Union

from budget.errors import LedgerError
from budget.models.ledger import AMOUNT_MAX, AMOUNT_MIN, Transaction
from budget.services.storage import LedgerStorageInterface


DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


class InvalidDateError(LedgerError):
    """The date given for an expense is not a YYYY-MM-DD date."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Your date input couldn't be handled as date: {value!r} "
            f"(expected YYYY-MM-DD)"
        )


class UnknownCategoryError(LedgerError):
    """The category given for an expense is not a planned category."""

    def __init__(self, category: str, known_categories: Iterable[str]):
        self.category = category
        self.known_categories = sorted(known_categories)
        available = ", ".join(self.known_categories) or "(none)"
        super().__init__(
            f"Your category input ({category}) does not match any existing "
            f"expense category. Available categories: {available}"
        )


class InvalidAmountError(LedgerError):
    """An amount is outside the range the ledger can store."""

    def __init__(self, value: int):
        self.value = value
        super().__init__(
            f"Your amount input ({value}) is out of range "
            f"(allowed: {AMOUNT_MIN} to {AMOUNT_MAX})"
        )


def parse_date(value: Union[str, date]) -> date:
    """
    Parse a strict YYYY-MM-DD date.

    Raises:
        InvalidDateError: If the value is not a valid calendar date
    """
    if isinstance(value, date):
        return value
    text = value.strip() if isinstance(value, str) else ""
    if not DATE_PATTERN.fullmatch(text):
        raise InvalidDateError(str(value))
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        raise InvalidDateError(str(value))


def check_amount(value: int) -> int:
    """
    Check that an amount fits the ledger store.

    Raises:
        InvalidAmountError: If the value does not fit a signed 64-bit integer
    """
    if not AMOUNT_MIN <= value <= AMOUNT_MAX:
        raise InvalidAmountError(value)
    return value


class TransactionValidator:
    """
    Validates expense input through a two-stage pipeline.

    Stage 1: Format validation (can run without storage)
    Stage 2: Ledger validation (needs the category list)
    """

    def __init__(self, storage: LedgerStorageInterface):
        self._storage = storage

    def _validate_format(self, date_text: Union[str, date], amount: int) -> date:
        """Stage 1: the date must parse and the amount must be storable."""
        expense_date = parse_date(date_text)
        check_amount(amount)
        return expense_date

    def _validate_category(self, category: str) -> str:
        """Stage 2: the category must already exist."""
        category = category.strip()
        known = [c.name for c in self._storage.list_categories()]
        if category not in known:
            raise UnknownCategoryError(category, known)
        return category

    def validate(
        self,
        date_text: Union[str, date],
        category: str,
        amount: int,
        comment: Optional[str] = None,
    ) -> Transaction:
        """
        Run full validation and build the (unsaved) transaction.

        Args:
            date_text: Expense date as YYYY-MM-DD
            category: Name of a planned category
            amount: Expense amount
            comment: Optional note

        Returns:
            Transaction with id=None, ready to be stored

        Raises:
            InvalidDateError: If the date does not parse
            InvalidAmountError: If the amount is out of range
            UnknownCategoryError: If the category is not planned
            StorageError: If the category list cannot be read
        """
        expense_date = self._validate_format(date_text, amount)
        category = self._validate_category(category)

        return Transaction(
            date=expense_date,
            category=category,
            amount=amount,
            comment=comment if comment is not None else "",
        )
