"""Tests for the monthly status aggregation."""

import pytest
from datetime import date

from budget.models.ledger import Category, Period, Transaction
from budget.queries.aggregation import EmptyPeriodError, compute_status


JUNE = Period(year=2024, month=6)


class TestComputeStatus:
    """Tests for compute_status."""

    def test_single_category_scenario(self):
        """One planned category with one expense this month."""
        report = compute_status(
            [Category(name="car", planned_amount=20000)],
            [Transaction(id=1, date=date(2024, 6, 5), category="car", amount=5000)],
            JUNE,
        )
        assert len(report.rows) == 1
        row = report.rows[0]
        assert (row.category, row.planned, row.actual, row.balance) == ("car", 20000, 5000, 15000)
        totals = report.totals
        assert (totals.category, totals.planned, totals.actual, totals.balance) == (
            "TOTAL", 20000, 5000, 15000,
        )

    def test_no_expenses_in_period_raises(self):
        """A month without expenses is refused rather than shown as zeros."""
        with pytest.raises(EmptyPeriodError) as exc_info:
            compute_status([Category(name="car", planned_amount=20000)], [], JUNE)
        assert exc_info.value.period == JUNE
        assert "2024-06" in str(exc_info.value)

    def test_expenses_only_in_other_months_raises(self, categories, transactions):
        other = [t for t in transactions if t.date.month != 6]
        with pytest.raises(EmptyPeriodError):
            compute_status(categories, other, JUNE)

    def test_same_month_other_year_is_excluded(self, categories):
        with pytest.raises(EmptyPeriodError):
            compute_status(
                categories,
                [Transaction(id=1, date=date(2023, 6, 5), category="car", amount=5000)],
                JUNE,
            )

    def test_rows_sorted_by_category_name(self, categories, transactions):
        report = compute_status(categories, transactions, JUNE)
        assert [r.category for r in report.rows] == ["car", "food", "rent"]

    def test_actuals_sum_only_current_period(self, categories, transactions):
        report = compute_status(categories, transactions, JUNE)
        actual = {r.category: r.actual for r in report.rows}
        assert actual == {"car": 5000, "food": 2200, "rent": 120000}

    def test_category_without_expenses_has_zero_actual(self, transactions):
        categories = [
            Category(name="car", planned_amount=20000),
            Category(name="travel", planned_amount=30000),
        ]
        report = compute_status(categories, transactions, JUNE)
        travel = next(r for r in report.rows if r.category == "travel")
        assert travel.actual == 0
        assert travel.balance == 30000

    def test_totals_planned_equals_sum_of_rows(self, categories, transactions):
        report = compute_status(categories, transactions, JUNE)
        assert report.totals.planned == sum(r.planned for r in report.rows)
        assert report.totals.planned == sum(c.planned_amount for c in categories)

    def test_unknown_category_counts_in_totals_only(self):
        """
        Pins current behavior: an expense whose category is not planned
        gets no row, but its amount is still part of the totals actual.
        """
        categories = [Category(name="car", planned_amount=20000)]
        transactions = [
            Transaction(id=1, date=date(2024, 6, 5), category="car", amount=5000),
            Transaction(id=2, date=date(2024, 6, 6), category="gifts", amount=3000),
        ]
        report = compute_status(categories, transactions, JUNE)

        assert [r.category for r in report.rows] == ["car"]
        assert sum(r.actual for r in report.rows) == 5000
        assert report.totals.actual == 8000
        assert report.totals.balance == 12000

    def test_only_unknown_category_expenses_still_reports(self):
        report = compute_status(
            [Category(name="car", planned_amount=20000)],
            [Transaction(id=1, date=date(2024, 6, 5), category="gifts", amount=3000)],
            JUNE,
        )
        assert report.rows[0].actual == 0
        assert report.totals.actual == 3000

    def test_overspent_category_has_negative_balance(self):
        report = compute_status(
            [Category(name="car", planned_amount=1000)],
            [Transaction(id=1, date=date(2024, 6, 5), category="car", amount=1500)],
            JUNE,
        )
        assert report.rows[0].balance == -500

    def test_income_is_carried_into_report(self, categories, transactions):
        report = compute_status(categories, transactions, JUNE, income=300000)
        assert report.income == 300000
        assert report.unallocated == 100000

    def test_idempotent(self, categories, transactions):
        first = compute_status(categories, transactions, JUNE)
        second = compute_status(categories, transactions, JUNE)
        assert first == second

    def test_does_not_depend_on_input_order(self, categories, transactions):
        forward = compute_status(categories, transactions, JUNE)
        backward = compute_status(
            list(reversed(categories)), list(reversed(transactions)), JUNE,
        )
        assert forward == backward
