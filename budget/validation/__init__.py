"""Expense validation package."""

from budget.validation.validator import (
    InvalidAmountError,
    InvalidDateError,
    TransactionValidator,
    UnknownCategoryError,
    check_amount,
    parse_date,
)

__all__ = [
    "InvalidAmountError",
    "InvalidDateError",
    "TransactionValidator",
    "UnknownCategoryError",
    "check_amount",
    "parse_date",
]
