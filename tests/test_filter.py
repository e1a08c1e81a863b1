"""Tests for transaction filtering."""

from datetime import date

from budget.models.ledger import FilterCriteria, Transaction
from budget.queries.aggregation import filter_transactions


def criteria(**overrides):
    values = {
        "date_from": date(2024, 1, 1),
        "date_to": date(2024, 12, 31),
        "min_amount": 0,
        "max_amount": 1000000,
    }
    values.update(overrides)
    return FilterCriteria(**values)


class TestFilterTransactions:
    """Tests for filter_transactions."""

    def test_amount_window_scenario(self):
        """Only the expense inside min..max is kept, and it is the whole sum."""
        transactions = [
            Transaction(id=1, date=date(2024, 6, 1), category="car", amount=500),
            Transaction(id=2, date=date(2024, 6, 2), category="car", amount=1500),
            Transaction(id=3, date=date(2024, 6, 3), category="car", amount=2500),
        ]
        result = filter_transactions(transactions, criteria(min_amount=1000, max_amount=2000))
        assert [t.amount for t in result.matches] == [1500]
        assert result.total == 1500

    def test_amount_bounds_are_inclusive(self, transactions):
        result = filter_transactions(transactions, criteria(min_amount=700, max_amount=1500))
        assert sorted(t.amount for t in result.matches) == [700, 900, 1500]

    def test_date_bounds_are_inclusive(self, transactions):
        result = filter_transactions(
            transactions,
            criteria(date_from=date(2024, 6, 1), date_to=date(2024, 6, 10)),
        )
        assert [t.id for t in result.matches] == [2, 3, 4, 5]

    def test_single_day_window(self, transactions):
        day = date(2024, 6, 3)
        result = filter_transactions(transactions, criteria(date_from=day, date_to=day))
        assert [t.id for t in result.matches] == [3, 4]
        assert result.total == 2200

    def test_empty_categories_means_no_restriction(self, transactions):
        window = criteria(date_from=date(2024, 6, 1), date_to=date(2024, 6, 30))
        result = filter_transactions(transactions, window)
        expected = [
            t for t in transactions
            if window.date_from <= t.date <= window.date_to
        ]
        assert result.matches == expected

    def test_category_set_narrows_matches(self, transactions):
        result = filter_transactions(transactions, criteria(categories={"car", "rent"}))
        assert [t.id for t in result.matches] == [2, 5, 6]
        assert result.total == 5000 + 120000 + 900

    def test_unknown_category_matches_nothing(self, transactions):
        result = filter_transactions(transactions, criteria(categories={"yachts"}))
        assert result.matches == []
        assert result.total == 0

    def test_sum_covers_only_category_matches(self, transactions):
        result = filter_transactions(transactions, criteria(categories={"food"}))
        assert result.total == 4000 + 1500 + 700

    def test_inverted_date_range_is_empty(self, transactions):
        result = filter_transactions(
            transactions,
            criteria(date_from=date(2024, 6, 30), date_to=date(2024, 6, 1)),
        )
        assert result.matches == []
        assert result.total == 0

    def test_inverted_amount_range_is_empty(self, transactions):
        result = filter_transactions(transactions, criteria(min_amount=2000, max_amount=1000))
        assert result.matches == []

    def test_output_sorted_by_date_with_stable_ties(self):
        transactions = [
            Transaction(id=1, date=date(2024, 6, 9), category="car", amount=10),
            Transaction(id=2, date=date(2024, 6, 2), category="car", amount=20),
            Transaction(id=3, date=date(2024, 6, 9), category="car", amount=30),
            Transaction(id=4, date=date(2024, 6, 2), category="car", amount=40),
        ]
        result = filter_transactions(transactions, criteria())
        dates = [t.date for t in result.matches]
        assert dates == sorted(dates)
        assert [t.id for t in result.matches] == [2, 4, 1, 3]

    def test_result_keeps_criteria(self, transactions):
        c = criteria(categories={"car"})
        assert filter_transactions(transactions, c).criteria == c
