from datetime import date, timedelta

import pytest

from services import forecast
from tests.factories import make_tx


def _rows():
    return [
        make_tx("i1", "income", "2024-06-01", 15000, "Salary", recurring=True),
        make_tx("i2", "income", "2024-06-10", 2500, "Freelance"),
        make_tx("e1", "expense", "2024-06-03", 1800, "Rent", recurring=True),
        make_tx("e2", "expense", "2024-06-05", 650, "Groceries"),
    ]


def test_run_rate_projects_linearly_to_month_end():
    result = forecast.run_rate(_rows(), date(2024, 6, 15))
    assert result["expense"] == 2450
    assert result["days_so_far"] == 15
    assert result["days_in_month"] == 30
    assert result["run_rate"] == pytest.approx(2450 / 15)
    assert result["projected"] == pytest.approx(4900)


def test_run_rate_first_day_of_month():
    result = forecast.run_rate([make_tx(date="2024-02-01", amount=29)], date(2024, 2, 1))
    assert result["days_so_far"] == 1
    assert result["run_rate"] == 29
    assert result["projected"] == pytest.approx(29 * 29)


def test_run_rate_empty_month_is_zero():
    result = forecast.run_rate([], date(2024, 6, 15))
    assert result["run_rate"] == 0
    assert result["projected"] == 0


def test_top_categories_sorted_descending():
    top = forecast.top_categories({"Groceries": 650, "Rent": 1800, "Transport": 220, "Other": 900})
    assert top == [("Rent", 1800), ("Other", 900), ("Groceries", 650)]


def test_top_categories_ties_keep_first_seen_order():
    top = forecast.top_categories({"A": 10, "B": 20, "C": 10}, n=3)
    assert top == [("B", 20), ("A", 10), ("C", 10)]


def test_top_categories_fewer_than_n():
    assert forecast.top_categories({"Rent": 1800}, n=3) == [("Rent", 1800)]
    assert forecast.top_categories({}) == []


def test_next_occurrence_later_this_month():
    assert forecast.next_occurrence(date(2024, 1, 20), date(2024, 6, 15)) == date(2024, 6, 20)


def test_next_occurrence_same_day_is_not_advanced():
    assert forecast.next_occurrence(date(2024, 1, 15), date(2024, 6, 15)) == date(2024, 6, 15)


def test_next_occurrence_past_day_moves_to_next_month():
    assert forecast.next_occurrence(date(2024, 5, 3), date(2024, 6, 15)) == date(2024, 7, 3)


def test_next_occurrence_rolls_over_short_month():
    # 31 Feb 2023 lands on 3 March
    assert forecast.next_occurrence(date(2023, 1, 31), date(2023, 2, 10)) == date(2023, 3, 3)
    assert forecast.next_occurrence(date(2024, 1, 31), date(2024, 2, 10)) == date(2024, 3, 2)


def test_is_within_horizon_is_inclusive():
    ref = date(2024, 6, 15)
    assert forecast.is_within_horizon(ref, ref)
    assert forecast.is_within_horizon(ref, ref + timedelta(days=30))
    assert not forecast.is_within_horizon(ref, ref + timedelta(days=31))


def test_upcoming_recurring_lists_only_recurring_items():
    items = forecast.upcoming_recurring(_rows(), date(2024, 6, 15))
    assert [(i.transaction.id, i.due_date, i.days_away) for i in items] == [
        ("i1", date(2024, 7, 1), 16),
        ("e1", date(2024, 7, 3), 18),
    ]


def test_upcoming_recurring_due_today_is_zero_days_away():
    rows = [make_tx("r", date="2024-03-15", recurring=True)]
    items = forecast.upcoming_recurring(rows, date(2024, 6, 15))
    assert len(items) == 1
    assert items[0].due_date == date(2024, 6, 15)
    assert items[0].days_away == 0


def test_upcoming_recurring_respects_horizon():
    rows = [make_tx("r", date="2024-05-14", recurring=True)]
    ref = date(2024, 6, 15)
    items = forecast.upcoming_recurring(rows, ref)
    assert items[0].due_date == date(2024, 7, 14)
    assert items[0].days_away == 29
    assert forecast.upcoming_recurring(rows, ref, horizon_days=28) == []


def test_upcoming_recurring_boundary_at_thirty_days():
    rows = [make_tx("r", date="2023-11-30", recurring=True)]
    items = forecast.upcoming_recurring(rows, date(2024, 1, 31))
    assert items[0].due_date == date(2024, 3, 1)
    assert items[0].days_away == 30
    assert forecast.upcoming_recurring(rows, date(2024, 1, 31), horizon_days=29) == []


def test_upcoming_recurring_skips_unparseable_dates():
    rows = [make_tx("r", date="someday", recurring=True)]
    assert forecast.upcoming_recurring(rows, date(2024, 6, 15)) == []


def test_upcoming_recurring_requires_a_list():
    with pytest.raises(TypeError):
        forecast.upcoming_recurring({"r": 1}, date(2024, 6, 15))
