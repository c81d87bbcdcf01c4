from datetime import date, datetime, timedelta
import calendar
from utils.constants import DATE_FORMAT


def today() -> date:
    return date.today()


def today_str() -> str:
    return date.today().strftime(DATE_FORMAT)


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str or not isinstance(date_str, str):
        return None
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str.strip(), fmt).date()
        except ValueError:
            continue
    return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def normalize_date(date_str: str) -> str:
    """ISO form of any accepted date spelling; unparseable input comes back stripped."""
    d = parse_date(date_str)
    return format_date(d) if d else str(date_str or "").strip()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def reproject_day(year: int, month: int, day: int) -> date:
    """Build year/month/day, letting a day past month end roll forward.

    reproject_day(2023, 2, 31) is 2023-03-03, the same result a calendar
    date constructor with overflow gives.
    Setting the month and then the day on a copy of the stored date would
    give March 31 instead; that stepwise behavior is not reproduced here.
    """
    return date(year, month, 1) + timedelta(days=day - 1)


def add_months(d: date, n: int) -> date:
    """Add n months to date d, rolling an out-of-range day into the next month."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    return reproject_day(year, month, d.day)


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end is earlier)."""
    return (end - start).days


def months_back(ref: date, count: int) -> list[tuple[int, int]]:
    """(year, month) tuples for the `count` months ending with ref's month, oldest first."""
    periods = []
    for i in range(count - 1, -1, -1):
        first = add_months(ref.replace(day=1), -i)
        periods.append((first.year, first.month))
    return periods


def month_label(year: int, month: int) -> str:
    """Short month name, e.g. 'Jun'."""
    return date(year, month, 1).strftime("%b")


def friendly_month(year: int, month: int) -> str:
    """e.g. 'June 2024'."""
    return date(year, month, 1).strftime("%B %Y")
