"""Tests for the category aggregator and its utilities."""

from datetime import date
from decimal import Decimal

import pytest

from spendwise.schemas.analytics import AnalyticsFilters, CategorySpend
from spendwise.services.aggregation import (
    aggregate_category_spends,
    filter_category_spends_by_min_amount,
    sort_category_spends_by_amount,
)


@pytest.fixture
def june() -> AnalyticsFilters:
    return AnalyticsFilters(start_date=date(2025, 6, 1), end_date=date(2025, 6, 30))


def test_single_transaction_per_category(make_txn, june):
    transactions = [
        make_txn(60, category_id="food", category_name="Food"),
        make_txn(40, category_id="transport", category_name="Transport"),
    ]

    spends = {s.category_name: s for s in aggregate_category_spends(transactions, june)}

    assert spends["Food"].total_amount == Decimal("60")
    assert spends["Food"].transaction_count == 1
    assert spends["Food"].percentage == pytest.approx(60.0)
    assert spends["Transport"].total_amount == Decimal("40")
    assert spends["Transport"].transaction_count == 1
    assert spends["Transport"].percentage == pytest.approx(40.0)


def test_percentages_sum_to_one_hundred(make_txn, june):
    transactions = [
        make_txn(10, category_id="a", category_name="A"),
        make_txn(10, category_id="b", category_name="B"),
        make_txn(10, category_id="c", category_name="C"),
        make_txn("33.33", category_id="c", category_name="C"),
        make_txn("0.07", category_id="d", category_name="D"),
    ]

    spends = aggregate_category_spends(transactions, june)

    assert abs(sum(s.percentage for s in spends) - 100) <= 0.01


def test_zero_grand_total_gives_zero_percentages(make_txn, june):
    transactions = [
        make_txn(0, category_id="a", category_name="A"),
        make_txn(0, category_id="b", category_name="B"),
    ]

    spends = aggregate_category_spends(transactions, june)

    assert len(spends) == 2
    assert all(s.percentage == 0 for s in spends)


def test_empty_input(june):
    assert aggregate_category_spends([], june) == []


def test_income_is_ignored(make_txn, june):
    transactions = [
        make_txn(3000, type="income", category_id="salary", category_name="Salary"),
        make_txn(25),
    ]

    spends = aggregate_category_spends(transactions, june)

    assert [s.category_name for s in spends] == ["Food"]
    assert spends[0].percentage == pytest.approx(100.0)


def test_category_restriction(make_txn):
    filters = AnalyticsFilters(
        start_date=date(2025, 6, 1),
        end_date=date(2025, 6, 30),
        category_ids={"food"},
    )
    transactions = [
        make_txn(20, category_id="food"),
        make_txn(80, category_id="rent", category_name="Rent"),
    ]

    spends = aggregate_category_spends(transactions, filters)

    assert [s.category_id for s in spends] == ["food"]
    assert spends[0].percentage == pytest.approx(100.0)


def test_transactions_outside_window_are_ignored(make_txn, june):
    transactions = [make_txn(20), make_txn(500, day=date(2025, 5, 31))]

    spends = aggregate_category_spends(transactions, june)

    assert spends[0].total_amount == Decimal("20")


def test_groups_sum_and_count(make_txn, june):
    transactions = [
        make_txn("12.50"),
        make_txn("7.50"),
        make_txn(30, category_id="fun", category_name="Fun"),
    ]

    spends = {s.category_id: s for s in aggregate_category_spends(transactions, june)}

    assert spends["food"].total_amount == Decimal("20.00")
    assert spends["food"].transaction_count == 2
    assert spends["food"].percentage == pytest.approx(40.0)


def test_default_order_is_first_seen(make_txn, june):
    transactions = [
        make_txn(5, category_id="b", category_name="B"),
        make_txn(50, category_id="a", category_name="A"),
        make_txn(5, category_id="b", category_name="B"),
        make_txn(1, category_id="c", category_name="C"),
    ]

    spends = aggregate_category_spends(transactions, june)

    assert [s.category_id for s in spends] == ["b", "a", "c"]


def test_display_name_is_most_recently_seen(make_txn, june):
    transactions = [
        make_txn(5, category_id="food", category_name="Food"),
        make_txn(5, category_id="food", category_name="Groceries"),
    ]

    spends = aggregate_category_spends(transactions, june)

    assert spends[0].category_name == "Groceries"


@pytest.fixture
def spends() -> list[CategorySpend]:
    return [
        CategorySpend(category_id="cat2", category_name="Transport", total_amount=Decimal("75"), transaction_count=3, percentage=37.5),
        CategorySpend(category_id="cat1", category_name="Food", total_amount=Decimal("100"), transaction_count=5, percentage=50),
        CategorySpend(category_id="cat3", category_name="Utilities", total_amount=Decimal("25"), transaction_count=1, percentage=12.5),
    ]


class TestSortCategorySpends:
    def test_descending_by_default(self, spends):
        result = sort_category_spends_by_amount(spends)
        assert [s.category_id for s in result] == ["cat1", "cat2", "cat3"]

    def test_ascending(self, spends):
        result = sort_category_spends_by_amount(spends, ascending=True)
        assert [s.category_id for s in result] == ["cat3", "cat2", "cat1"]

    def test_does_not_mutate_input(self, spends):
        original = list(spends)
        sort_category_spends_by_amount(spends)
        assert spends == original


class TestFilterByMinAmount:
    def test_keeps_entries_at_or_above_threshold(self, spends):
        result = filter_category_spends_by_min_amount(spends, Decimal("75"))
        assert {s.category_id for s in result} == {"cat1", "cat2"}

    def test_threshold_above_everything(self, spends):
        assert filter_category_spends_by_min_amount(spends, Decimal("1000")) == []
