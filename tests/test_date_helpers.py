from datetime import date

from utils import date_helpers as dh
from utils.currency import currency_symbol, format_currency, format_signed


def test_parse_date_accepts_iso_and_separators():
    assert dh.parse_date("2024-06-05") == date(2024, 6, 5)
    assert dh.parse_date(" 2024/06/05 ") == date(2024, 6, 5)
    assert dh.parse_date("2024.06.05") == date(2024, 6, 5)


def test_parse_date_rejects_garbage():
    assert dh.parse_date("") is None
    assert dh.parse_date("2024-13-01") is None
    assert dh.parse_date("yesterday") is None
    assert dh.parse_date(None) is None


def test_reproject_day_rolls_past_month_end():
    assert dh.reproject_day(2023, 2, 31) == date(2023, 3, 3)
    assert dh.reproject_day(2024, 4, 31) == date(2024, 5, 1)
    assert dh.reproject_day(2024, 6, 15) == date(2024, 6, 15)


def test_add_months_across_year():
    assert dh.add_months(date(2024, 11, 10), 3) == date(2025, 2, 10)
    assert dh.add_months(date(2024, 1, 10), -1) == date(2023, 12, 10)
    assert dh.add_months(date(2024, 1, 31), 1) == date(2024, 3, 2)


def test_days_in_month_and_between():
    assert dh.days_in_month(2024, 2) == 29
    assert dh.days_in_month(2023, 2) == 28
    assert dh.days_between(date(2024, 6, 15), date(2024, 7, 15)) == 30
    assert dh.days_between(date(2024, 6, 15), date(2024, 6, 14)) == -1


def test_months_back_oldest_first():
    assert dh.months_back(date(2024, 2, 29), 3) == [(2023, 12), (2024, 1), (2024, 2)]


def test_month_labels():
    assert dh.month_label(2024, 6) == "Jun"
    assert dh.friendly_month(2024, 6) == "June 2024"


def test_currency_symbols():
    assert currency_symbol("ZAR") == "R"
    assert currency_symbol("GBP") == "£"
    assert currency_symbol("JPY") == "JPY "


def test_format_currency():
    assert format_currency(1234.5) == "R1,234.50"
    assert format_currency(0, "USD") == "$0.00"
    assert format_currency(12, "CHF") == "CHF 12.00"
    assert format_signed(-50, "EUR") == "-€50.00"
    assert format_signed(50, "EUR") == "+€50.00"


def test_normalize_date():
    assert dh.normalize_date("2024/06/20") == "2024-06-20"
    assert dh.normalize_date("2024.6.2") == "2024-06-02"
    assert dh.normalize_date(" 2024-06-20 ") == "2024-06-20"
    assert dh.normalize_date(" someday ") == "someday"
    assert dh.normalize_date(None) == ""
