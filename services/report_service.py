from datetime import date

from database.transaction_dao import TransactionDAO
from models.transaction import Transaction
from services import aggregation, forecast
from services.forecast import UpcomingItem
from utils.constants import TOP_CATEGORY_COUNT, TREND_MONTHS, UPCOMING_HORIZON_DAYS
from utils.date_helpers import today


class ReportService:
    """Derived views for the UI. Each call reads a fresh snapshot from the store."""

    def __init__(self, tx_dao: TransactionDAO):
        self._tx_dao = tx_dao

    def _snapshot(self) -> list[Transaction]:
        return self._tx_dao.get_all()

    def get_filtered(
        self,
        type_: str,
        date_from: str | None = None,
        date_to: str | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> tuple[list[Transaction], dict]:
        """(rows newest first, {total, avg_per_day, max}) for a register view."""
        rows = aggregation.filter_transactions(
            self._snapshot(), type_, date_from, date_to, category, search
        )
        return rows, aggregation.compute_stats(rows)

    def get_summary(self, ref: date | None = None) -> dict:
        """Current-month KPIs: income, expense, net, run rate and projection."""
        ref = ref or today()
        rows = self._snapshot()
        totals = aggregation.sum_for_month(rows, ref.year, ref.month)
        rate = forecast.run_rate(rows, ref)
        return {
            "income": totals["income"],
            "expense": totals["expense"],
            "net": totals["income"] - totals["expense"],
            "run_rate": rate["run_rate"],
            "projected": rate["projected"],
            "days_so_far": rate["days_so_far"],
            "days_in_month": rate["days_in_month"],
        }

    def get_category_breakdown(
        self, year: int, month: int
    ) -> tuple[dict[str, float], dict[str, float]]:
        return aggregation.sum_by_category_for_month(self._snapshot(), year, month)

    def get_top_categories(
        self, ref: date | None = None, n: int = TOP_CATEGORY_COUNT
    ) -> list[tuple[str, float]]:
        ref = ref or today()
        expense_by_cat, _ = self.get_category_breakdown(ref.year, ref.month)
        return forecast.top_categories(expense_by_cat, n)

    def get_upcoming_recurring(
        self, ref: date | None = None, horizon_days: int = UPCOMING_HORIZON_DAYS
    ) -> list[UpcomingItem]:
        return forecast.upcoming_recurring(self._snapshot(), ref or today(), horizon_days)

    def get_monthly_chart_data(
        self, ref: date | None = None, months: int = TREND_MONTHS
    ) -> list[dict]:
        """[{year, month, label, income, expense}] for the trend bar chart."""
        return aggregation.monthly_trend(self._snapshot(), ref or today(), months)
