from utils.constants import CURRENCY_SYMBOLS, DEFAULT_CURRENCY


def currency_symbol(code: str) -> str:
    """Display prefix for a currency code; unknown codes render as 'CODE '."""
    return CURRENCY_SYMBOLS.get(code, f"{code} ")


def format_currency(amount: float, code: str = DEFAULT_CURRENCY) -> str:
    """Format a float as currency string, e.g. 'R1,234.56'."""
    return f"{currency_symbol(code)}{amount:,.2f}"


def format_signed(amount: float, code: str = DEFAULT_CURRENCY) -> str:
    """Format with +/- sign."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{currency_symbol(code)}{abs(amount):,.2f}"
