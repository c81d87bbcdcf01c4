"""Aggregation over a snapshot of transactions.

Every function here is pure: it reads the list it is given and returns plain
values (lists, dicts, floats). Formatting is left to the caller.
"""
import logging
from datetime import date
from typing import Sequence

from models.transaction import Transaction
from utils.constants import DEFAULT_CATEGORY, TREND_MONTHS
from utils.date_helpers import parse_date, months_back, month_label

logger = logging.getLogger(__name__)


def ensure_rows(rows) -> Sequence[Transaction]:
    if not isinstance(rows, (list, tuple)):
        raise TypeError(
            f"rows must be a list of transactions, got {type(rows).__name__}"
        )
    return rows


def category_label(tx: Transaction) -> str:
    """The key a record aggregates under: its category, or 'Other' when blank."""
    return tx.category or DEFAULT_CATEGORY


def _in_month(tx: Transaction, year: int, month: int) -> bool:
    d = parse_date(tx.date)
    if d is None:
        logger.debug("Skipping transaction %s with unparseable date %r", tx.id, tx.date)
        return False
    return d.year == year and d.month == month


def filter_transactions(
    rows: Sequence[Transaction],
    type_: str,
    date_from: str | None = None,
    date_to: str | None = None,
    category: str | None = None,
    search: str | None = None,
) -> list[Transaction]:
    """Records of `type_` matching every supplied criterion, newest first.

    Date bounds are inclusive and compared as ISO strings. `search` is a
    case-insensitive substring match against notes. Empty criteria match all.
    """
    rows = ensure_rows(rows)
    needle = search.lower() if search else ""
    result = []
    for tx in rows:
        if tx.type != type_:
            continue
        if date_from and tx.date < date_from:
            continue
        if date_to and tx.date > date_to:
            continue
        if category and tx.category != category:
            continue
        if needle and needle not in (tx.notes or "").lower():
            continue
        result.append(tx)
    # sorted() is stable, so equal dates keep snapshot order
    return sorted(result, key=lambda t: t.date, reverse=True)


def sum_for_month(rows: Sequence[Transaction], year: int, month: int) -> dict:
    """{income, expense} totals for one calendar month. Non-income counts as expense."""
    rows = ensure_rows(rows)
    income = 0.0
    expense = 0.0
    for tx in rows:
        if not _in_month(tx, year, month):
            continue
        if tx.type == "income":
            income += tx.amount
        else:
            expense += tx.amount
    return {"income": income, "expense": expense}


def sum_by_category_for_month(
    rows: Sequence[Transaction], year: int, month: int
) -> tuple[dict[str, float], dict[str, float]]:
    """(expense_by_category, income_by_category) for one month.

    Keys appear in order of first occurrence in the snapshot.
    """
    rows = ensure_rows(rows)
    expense_by_cat: dict[str, float] = {}
    income_by_cat: dict[str, float] = {}
    for tx in rows:
        if not _in_month(tx, year, month):
            continue
        target = income_by_cat if tx.type == "income" else expense_by_cat
        key = category_label(tx)
        target[key] = target.get(key, 0.0) + tx.amount
    return expense_by_cat, income_by_cat


def compute_stats(rows: Sequence[Transaction]) -> dict:
    """{total, avg_per_day, max} over an already filtered list.

    avg_per_day divides by the inclusive day span between the earliest and
    latest dates present, not by the calendar month length.
    """
    rows = ensure_rows(rows)
    if not rows:
        return {"total": 0.0, "avg_per_day": 0.0, "max": 0.0}

    total = 0.0
    largest = 0.0
    dates: list[date] = []
    for tx in rows:
        total += tx.amount
        if tx.amount > largest:
            largest = tx.amount
        d = parse_date(tx.date)
        if d is not None:
            dates.append(d)

    day_span = 1 + (max(dates) - min(dates)).days if dates else 1
    return {"total": total, "avg_per_day": total / day_span, "max": largest}


def monthly_trend(
    rows: Sequence[Transaction], ref: date, months: int = TREND_MONTHS
) -> list[dict]:
    """[{year, month, label, income, expense}] for the `months` months ending at ref."""
    rows = ensure_rows(rows)
    result = []
    for year, month in months_back(ref, months):
        totals = sum_for_month(rows, year, month)
        result.append({
            "year": year,
            "month": month,
            "label": month_label(year, month),
            "income": totals["income"],
            "expense": totals["expense"],
        })
    return result
