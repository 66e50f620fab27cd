"""Category aggregation tests."""

from __future__ import annotations

from datetime import date

import pytest

from spendlens.services.spending import (
    WEEKDAYS,
    analyze_categories,
    classify_time_of_month,
    weekday_name,
)
from tests.conftest import assert_float_equal, make_category, make_expense


@pytest.fixture
def categories():
    return {
        1: make_category(1, "Groceries", icon="🛒"),
        2: make_category(2, "Gas", icon="⛽", color="#F59E0B"),
    }


def test_groceries_and_gas_patterns(categories):
    expenses = [
        make_expense("Market", 100.0, date(2024, 3, 5), category_id=1),
        make_expense("Market", 100.0, date(2024, 3, 12), category_id=1),
        make_expense("Market", 100.0, date(2024, 3, 19), category_id=1),
        make_expense("Station", 50.0, date(2024, 3, 25), category_id=2),
    ]

    patterns = analyze_categories(expenses, categories)

    assert [p.category for p in patterns] == ["Groceries", "Gas"]
    groceries, gas = patterns
    assert groceries.total_spent == 300.0
    assert groceries.frequency == 3
    assert groceries.avg_per_transaction == 100.0
    assert groceries.trend == 0.0
    assert groceries.icon == "🛒"
    assert gas.total_spent == 50.0
    assert gas.color == "#F59E0B"
    assert gas.time_of_month == "late"


def test_partition_totals_match_input(categories):
    expenses = [
        make_expense("A", 12.5, date(2024, 1, 2), category_id=1),
        make_expense("B", 7.25, date(2024, 1, 3), category_id=2),
        make_expense("C", 3.0, date(2024, 1, 4)),
        make_expense("D", 40.0, date(2024, 1, 5), category_id=99),
    ]

    patterns = analyze_categories(expenses, categories)

    assert_float_equal(sum(p.total_spent for p in patterns), 62.75)
    assert sum(p.frequency for p in patterns) == len(expenses)


def test_missing_and_dangling_categories_group_as_uncategorized(categories):
    expenses = [
        make_expense("No category", 10.0, date(2024, 1, 2)),
        make_expense("Deleted category", 15.0, date(2024, 1, 3), category_id=42),
    ]

    patterns = analyze_categories(expenses, categories)

    assert len(patterns) == 1
    assert patterns[0].category == "Uncategorized"
    assert patterns[0].total_spent == 25.0
    assert patterns[0].icon == "📦"


def test_trend_uses_chronological_order(categories):
    # Supplied newest first; the later half spends more.
    expenses = [
        make_expense("Market", 150.0, date(2024, 2, 20), category_id=1),
        make_expense("Market", 100.0, date(2024, 1, 10), category_id=1),
    ]

    pattern = analyze_categories(expenses, categories)[0]

    assert pattern.trend == pytest.approx(50.0)


def test_output_sorted_by_total_descending(categories):
    expenses = [
        make_expense("Station", 20.0, date(2024, 1, 2), category_id=2),
        make_expense("Market", 80.0, date(2024, 1, 3), category_id=1),
        make_expense("Misc", 40.0, date(2024, 1, 4)),
    ]

    totals = [p.total_spent for p in analyze_categories(expenses, categories)]

    assert totals == sorted(totals, reverse=True)


def test_day_of_week_histogram_is_sunday_first(categories):
    # 2024-03-03 is a Sunday, 2024-03-04 a Monday.
    expenses = [
        make_expense("Market", 10.0, date(2024, 3, 3), category_id=1),
        make_expense("Market", 10.0, date(2024, 3, 10), category_id=1),
        make_expense("Market", 10.0, date(2024, 3, 4), category_id=1),
    ]

    pattern = analyze_categories(expenses, categories)[0]

    assert list(pattern.day_of_week) == list(WEEKDAYS)
    assert pattern.day_of_week["Sunday"] == 2
    assert pattern.day_of_week["Monday"] == 1
    assert sum(pattern.day_of_week.values()) == 3
    assert pattern.peak_day == "Sunday"


def test_weekday_name():
    assert weekday_name(date(2024, 3, 3)) == "Sunday"
    assert weekday_name(date(2024, 3, 9)) == "Saturday"


@pytest.mark.parametrize(
    ("days", "expected"),
    [
        ([1, 5, 10, 25], "early"),
        ([11, 15, 20], "mid"),
        ([21, 28, 31, 2], "late"),
        ([5, 15], "consistent"),
        ([5, 15, 25], "consistent"),
        ([5, 6, 25, 26, 15], "consistent"),
    ],
)
def test_classify_time_of_month(days, expected):
    assert classify_time_of_month(days) == expected


def test_pattern_to_dict_keys(categories):
    pattern = analyze_categories(
        [make_expense("Market", 33.333, date(2024, 3, 5), category_id=1)], categories
    )[0]

    payload = pattern.to_dict()

    assert payload["totalSpent"] == 33.33
    assert payload["timeOfMonthPattern"] == "early"
    assert payload["peakDay"] == "Tuesday"
    assert set(payload["dayOfWeekPattern"]) == set(WEEKDAYS)


def test_empty_input_yields_no_patterns(categories):
    assert analyze_categories([], categories) == []
