from datetime import date

import pytest

from services import aggregation as agg
from tests.factories import make_tx
from utils.date_helpers import normalize_date


def _june_rows():
    return [
        make_tx("i1", "income", "2024-06-01", 15000, "Salary"),
        make_tx("e1", "expense", "2024-06-03", 1800, "Rent", notes="Room"),
        make_tx("e2", "expense", "2024-06-05", 650, "Groceries", notes="Weekly FOOD run"),
        make_tx("e3", "expense", "2024-05-28", 300, "Groceries"),
        make_tx("i2", "income", "2024-07-01", 500, "Gifts"),
    ]


def test_sum_for_month_splits_income_and_expense():
    totals = agg.sum_for_month(_june_rows(), 2024, 6)
    assert totals == {"income": 15000, "expense": 2450}


def test_sum_for_month_empty_month_is_zero():
    assert agg.sum_for_month(_june_rows(), 2023, 1) == {"income": 0.0, "expense": 0.0}


def test_sum_for_month_skips_unparseable_dates():
    rows = _june_rows() + [make_tx("bad", "expense", "not-a-date", 999)]
    assert agg.sum_for_month(rows, 2024, 6)["expense"] == 2450


def test_unknown_type_counts_as_expense():
    rows = [make_tx("x", "refund", "2024-06-02", 40)]
    assert agg.sum_for_month(rows, 2024, 6) == {"income": 0.0, "expense": 40}


def test_non_list_input_raises_type_error():
    with pytest.raises(TypeError):
        agg.sum_for_month(None, 2024, 6)
    with pytest.raises(TypeError):
        agg.compute_stats("rows")


def test_sum_by_category_uses_other_for_blank_category():
    rows = [
        make_tx("a", "expense", "2024-06-02", 10, "Transport"),
        make_tx("b", "expense", "2024-06-03", 5, ""),
        make_tx("c", "expense", "2024-06-04", 7, "Transport"),
        make_tx("d", "income", "2024-06-04", 100, ""),
    ]
    expense_by_cat, income_by_cat = agg.sum_by_category_for_month(rows, 2024, 6)
    assert expense_by_cat == {"Transport": 17, "Other": 5}
    assert list(expense_by_cat) == ["Transport", "Other"]
    assert income_by_cat == {"Other": 100}


def test_filter_by_type_and_newest_first():
    rows = agg.filter_transactions(_june_rows(), "expense")
    assert [t.id for t in rows] == ["e2", "e1", "e3"]


def test_filter_equal_dates_keep_snapshot_order():
    rows = [
        make_tx("a", date="2024-06-05"),
        make_tx("b", date="2024-06-05"),
        make_tx("c", date="2024-06-06"),
    ]
    assert [t.id for t in agg.filter_transactions(rows, "expense")] == ["c", "a", "b"]


def test_filter_date_bounds_are_inclusive():
    rows = agg.filter_transactions(
        _june_rows(), "expense", date_from="2024-06-03", date_to="2024-06-05"
    )
    assert [t.id for t in rows] == ["e2", "e1"]


def test_filter_category_and_case_insensitive_search():
    rows = agg.filter_transactions(_june_rows(), "expense", category="Groceries")
    assert {t.id for t in rows} == {"e2", "e3"}
    rows = agg.filter_transactions(_june_rows(), "expense", search="food")
    assert [t.id for t in rows] == ["e2"]


def test_filter_empty_criteria_match_everything():
    rows = agg.filter_transactions(_june_rows(), "income", "", "", "", "")
    assert len(rows) == 2


def test_compute_stats_empty():
    assert agg.compute_stats([]) == {"total": 0.0, "avg_per_day": 0.0, "max": 0.0}


def test_compute_stats_uses_inclusive_day_span():
    rows = [
        make_tx("a", date="2024-06-01", amount=100),
        make_tx("b", date="2024-06-10", amount=400),
    ]
    stats = agg.compute_stats(rows)
    assert stats["total"] == 500
    assert stats["max"] == 400
    assert stats["avg_per_day"] == pytest.approx(50.0)


def test_compute_stats_single_day():
    stats = agg.compute_stats([make_tx(amount=80), make_tx("b", amount=20)])
    assert stats["avg_per_day"] == 100


def test_compute_stats_without_parseable_dates():
    stats = agg.compute_stats([make_tx(date="", amount=30)])
    assert stats == {"total": 30, "avg_per_day": 30, "max": 30}


def test_monthly_trend_covers_months_oldest_first():
    trend = agg.monthly_trend(_june_rows(), date(2024, 7, 15), months=3)
    assert [(p["year"], p["month"]) for p in trend] == [(2024, 5), (2024, 6), (2024, 7)]
    assert [p["label"] for p in trend] == ["May", "Jun", "Jul"]
    assert trend[0]["expense"] == 300
    assert trend[1] == {
        "year": 2024, "month": 6, "label": "Jun", "income": 15000, "expense": 2450,
    }
    assert trend[2]["income"] == 500


def test_monthly_trend_crosses_year_boundary():
    trend = agg.monthly_trend([], date(2024, 2, 1), months=12)
    assert len(trend) == 12
    assert (trend[0]["year"], trend[0]["month"]) == (2023, 3)
    assert (trend[-1]["year"], trend[-1]["month"]) == (2024, 2)


def test_category_totals_add_up_to_month_totals():
    rows = _june_rows() + [make_tx("x", "expense", "2024-06-09", 12.5, "")]
    totals = agg.sum_for_month(rows, 2024, 6)
    expense_by_cat, income_by_cat = agg.sum_by_category_for_month(rows, 2024, 6)
    assert sum(expense_by_cat.values()) == pytest.approx(totals["expense"])
    assert sum(income_by_cat.values()) == pytest.approx(totals["income"])


def test_removed_label_aggregates_under_literal_name():
    rows = [make_tx("a", "expense", "2024-06-02", 10, "Old Label")]
    expense_by_cat, _ = agg.sum_by_category_for_month(rows, 2024, 6)
    assert expense_by_cat == {"Old Label": 10}


def test_compute_stats_single_record():
    stats = agg.compute_stats([make_tx(date="2024-06-01", amount=100)])
    assert stats == {"total": 100, "avg_per_day": 100, "max": 100}


def test_month_totals_cover_every_record_in_month():
    rows = _june_rows()
    totals = agg.sum_for_month(rows, 2024, 6)
    in_june = sum(t.amount for t in rows if t.date.startswith("2024-06"))
    assert totals["income"] + totals["expense"] == in_june


def test_filter_bounds_hold_for_normalized_dates():
    rows = [
        make_tx("slash", date=normalize_date("2024/06/20"), amount=20),
        make_tx("dash", date="2024-06-30", amount=30),
        make_tx("july", date=normalize_date("2024.07.01"), amount=40),
    ]
    result = agg.filter_transactions(rows, "expense", date_from="2024-06-01", date_to="2024-06-30")
    assert [t.id for t in result] == ["dash", "slash"]
    assert agg.compute_stats(result)["total"] == 50
