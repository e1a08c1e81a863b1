"""
Budget Reporting Core

DESIGN DECISION: Both reports are PURE functions over a snapshot.
The executor reads categories and transactions from storage once,
then hands plain sequences to these functions. Nothing here touches
storage, the clock, or global state, so the results are fully
determined by the inputs.

compute_status     - planned vs actual per category for one period
filter_transactions - date/amount/category selection with a running sum
"""

from collections import defaultdict
from typing import Iterable, Optional, Sequence

from budget.errors import LedgerError
from budget.models.ledger import (
    TOTAL_LABEL,
    AggregateRow,
    Category,
    FilterCriteria,
    FilterResult,
    Period,
    StatusReport,
    Transaction,
)


class EmptyPeriodError(LedgerError):
    """No expenses are recorded for the requested period."""

    def __init__(self, period: Period):
        self.period = period
        super().__init__(
            f"You don't have any registered expenses for {period.label}"
        )


def compute_status(
    categories: Iterable[Category],
    transactions: Iterable[Transaction],
    period: Period,
    income: Optional[int] = None,
) -> StatusReport:
    """
    Reconcile planned category budgets against recorded expenses.

    Rows come out sorted by category name. Expenses whose category
    matches no planned category do not get a row, but they ARE counted
    in the totals row's actual - the totals are summed independently of
    the rows, so totals.actual can exceed the sum of row actuals.

    Args:
        categories: Planned categories
        transactions: Expenses, any period (out-of-period ones are skipped)
        period: Year and month to report on
        income: Monthly income carried into the report, if known

    Returns:
        StatusReport with one row per category and a TOTAL row

    Raises:
        EmptyPeriodError: If no expense at all falls within the period
    """
    in_period = [t for t in transactions if period.contains(t.date)]
    if not in_period:
        raise EmptyPeriodError(period)

    actual_by_category: dict[str, int] = defaultdict(int)
    for t in in_period:
        actual_by_category[t.category] += t.amount

    categories = sorted(categories, key=lambda c: c.name)
    rows = [
        AggregateRow(
            category=c.name,
            planned=c.planned_amount,
            actual=actual_by_category.get(c.name, 0),
        )
        for c in categories
    ]

    totals = AggregateRow(
        category=TOTAL_LABEL,
        planned=sum(c.planned_amount for c in categories),
        actual=sum(t.amount for t in in_period),
    )

    return StatusReport(period=period, rows=rows, totals=totals, income=income)


def filter_transactions(
    transactions: Sequence[Transaction],
    criteria: FilterCriteria,
) -> FilterResult:
    """
    Select expenses by date range, amount range and category set.

    Bounds are inclusive at both ends. An inverted range (from > to,
    min > max) matches nothing rather than failing. An empty category
    set means every category; unknown names simply never match.

    Output is ordered by date ascending; expenses on the same day keep
    their input order (sorted() is stable), which is id order when the
    input comes from storage.
    """
    # Pass 1: date and amount window. Storage already narrows on these,
    # re-checking keeps the function correct for any input sequence.
    windowed = [
        t for t in transactions
        if criteria.date_from <= t.date <= criteria.date_to
        and criteria.min_amount <= t.amount <= criteria.max_amount
    ]

    # Pass 2: category set
    if criteria.categories:
        windowed = [t for t in windowed if t.category in criteria.categories]

    matches = sorted(windowed, key=lambda t: t.date)

    return FilterResult(
        criteria=criteria,
        matches=matches,
        total=sum(t.amount for t in matches),
    )
