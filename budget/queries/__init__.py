"""Reporting package: pure aggregation plus the storage-backed executor."""

from budget.queries.aggregation import (
    EmptyPeriodError,
    compute_status,
    filter_transactions,
)
from budget.queries.executor import LedgerQueryExecutor

__all__ = [
    "EmptyPeriodError",
    "LedgerQueryExecutor",
    "compute_status",
    "filter_transactions",
]
