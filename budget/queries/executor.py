"""
Query Execution Engine

DESIGN DECISION: Query execution is DETERMINISTIC and read-only.
The executor takes one snapshot read from storage per report and
passes it to the pure reporting functions. It never writes.

This is the only place where the reporting core meets storage.
"""

from typing import Optional

import structlog

from budget.models.ledger import (
    FilterCriteria,
    FilterResult,
    Period,
    StatusReport,
)
from budget.queries.aggregation import compute_status, filter_transactions
from budget.services.storage import LedgerStorageInterface


logger = structlog.get_logger(__name__)


class LedgerQueryExecutor:
    """
    Executes reports against ledger storage.

    GUARANTEES:
    - Only returns real data from storage
    - Same store contents give the same report
    - Errors propagate to the caller unchanged
    """

    def __init__(self, storage: LedgerStorageInterface):
        self._storage = storage

    def status(self, period: Optional[Period] = None) -> StatusReport:
        """
        Planned versus actual spending for a month.

        Args:
            period: Month to report on. Defaults to the current month.

        Raises:
            EmptyPeriodError: If no expense is recorded for the period
            StorageError: If the ledger cannot be read
        """
        period = period or Period.current()

        categories = self._storage.list_categories()
        transactions = self._storage.list_transactions(
            date_from=period.first_day,
            date_to=period.last_day,
        )
        income = self._storage.get_income()

        logger.debug(
            "status_snapshot",
            period=period.label,
            category_count=len(categories),
            transaction_count=len(transactions),
        )

        return compute_status(categories, transactions, period, income=income)

    def filter(self, criteria: FilterCriteria) -> FilterResult:
        """
        Expenses matching the criteria, in date order, with their sum.

        Date and amount bounds are narrowed by storage; the category
        set is applied afterwards by the reporting core.
        """
        if (
            criteria.date_from > criteria.date_to
            or criteria.min_amount > criteria.max_amount
        ):
            return FilterResult(criteria=criteria)

        transactions = self._storage.list_transactions(
            date_from=criteria.date_from,
            date_to=criteria.date_to,
            min_amount=criteria.min_amount,
            max_amount=criteria.max_amount,
        )

        logger.debug(
            "filter_snapshot",
            date_from=criteria.date_from.isoformat(),
            date_to=criteria.date_to.isoformat(),
            transaction_count=len(transactions),
        )

        return filter_transactions(transactions, criteria)

    def categories(self):
        """Planned categories ordered by name."""
        return self._storage.list_categories()
