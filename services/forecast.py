"""Current-month run rate, top categories and the upcoming recurring horizon."""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from models.transaction import Transaction
from services.aggregation import sum_for_month, ensure_rows
from utils.constants import TOP_CATEGORY_COUNT, UPCOMING_HORIZON_DAYS
from utils.date_helpers import (
    today, parse_date, days_in_month, reproject_day, add_months, days_between,
)

logger = logging.getLogger(__name__)


@dataclass
class UpcomingItem:
    transaction: Transaction
    due_date: date
    days_away: int


def run_rate(rows: Sequence[Transaction], ref: date | None = None) -> dict:
    """Linear month-end projection from the expenses recorded so far this month.

    Returns {expense, days_so_far, days_in_month, run_rate, projected}.
    """
    ref = ref or today()
    expense = sum_for_month(rows, ref.year, ref.month)["expense"]
    days_so_far = max(1, ref.day)
    month_days = days_in_month(ref.year, ref.month)
    rate = expense / days_so_far
    return {
        "expense": expense,
        "days_so_far": days_so_far,
        "days_in_month": month_days,
        "run_rate": rate,
        "projected": rate * month_days,
    }


def top_categories(
    by_category: dict[str, float], n: int = TOP_CATEGORY_COUNT
) -> list[tuple[str, float]]:
    """Largest n (category, amount) pairs; ties keep the mapping's order."""
    ranked = sorted(by_category.items(), key=lambda kv: kv[1], reverse=True)
    return ranked[:n]


def next_occurrence(stored: date, ref: date) -> date:
    """Next monthly occurrence of `stored`'s day-of-month on or after ref.

    The day is placed in ref's month; a day past month end rolls into the
    following month. If that lands before ref it moves one month ahead.
    """
    candidate = reproject_day(ref.year, ref.month, stored.day)
    if candidate < ref:
        candidate = add_months(candidate, 1)
    return candidate


def is_within_horizon(ref: date, due: date, horizon_days: int = UPCOMING_HORIZON_DAYS) -> bool:
    return days_between(ref, due) <= horizon_days


def upcoming_recurring(
    rows: Sequence[Transaction],
    ref: date | None = None,
    horizon_days: int = UPCOMING_HORIZON_DAYS,
) -> list[UpcomingItem]:
    """Recurring records whose next occurrence falls within horizon_days of ref.

    Only a monthly cadence is modeled, whatever the record's frequency says.
    """
    rows = ensure_rows(rows)
    ref = ref or today()
    result = []
    for tx in rows:
        if not tx.recurring:
            continue
        stored = parse_date(tx.date)
        if stored is None:
            logger.debug("Skipping recurring %s with unparseable date %r", tx.id, tx.date)
            continue
        due = next_occurrence(stored, ref)
        if is_within_horizon(ref, due, horizon_days):
            result.append(UpcomingItem(tx, due, days_between(ref, due)))
    return result
