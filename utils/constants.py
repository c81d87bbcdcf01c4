APP_NAME = "Pocket Ledger"
APP_WIDTH = 1200
APP_HEIGHT = 760
DB_FILE = "pocket_ledger.db"

DATE_FORMAT = "%Y-%m-%d"

DEFAULT_CATEGORY = "Other"
DEFAULT_CURRENCY = "ZAR"
DEFAULT_THEME = "dark"

DEFAULT_EXPENSE_CATEGORIES = ["Groceries", "Transport", "Rent", "Eating Out", "Other"]
DEFAULT_INCOME_CATEGORIES = ["Salary", "Freelance", "Gifts", "Other"]

TRANSACTION_TYPES = ["expense", "income"]
FREQUENCIES = ["monthly"]
THEMES = ["dark", "light"]

CURRENCY_SYMBOLS = {
    "ZAR": "R",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

UPCOMING_HORIZON_DAYS = 30
TOP_CATEGORY_COUNT = 3
TREND_MONTHS = 12

EXPORT_VERSION = 1
