from database.db_manager import DatabaseManager
from database.category_dao import CategoryDAO
from models.settings import Settings
from utils.constants import CURRENCY_SYMBOLS, DEFAULT_CURRENCY, DEFAULT_THEME, THEMES


class SettingsService:
    def __init__(self, db: DatabaseManager, category_dao: CategoryDAO):
        self._db = db
        self._cat_dao = category_dao

    def get(self) -> Settings:
        return Settings(
            currency=self._db.get_setting("currency", DEFAULT_CURRENCY),
            theme=self._db.get_setting("theme", DEFAULT_THEME),
            beginner_hints=self._db.get_setting("beginner_hints", "1") == "1",
            expense_categories=self._cat_dao.get_names("expense"),
            income_categories=self._cat_dao.get_names("income"),
        )

    def set_currency(self, code: str):
        if code not in CURRENCY_SYMBOLS:
            raise ValueError(f"Unsupported currency: {code}")
        self._db.set_setting("currency", code)

    def set_theme(self, theme: str):
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme}")
        self._db.set_setting("theme", theme)

    def toggle_theme(self) -> str:
        next_theme = "light" if self.get().theme == "dark" else "dark"
        self.set_theme(next_theme)
        return next_theme

    def set_beginner_hints(self, on: bool):
        self._db.set_setting("beginner_hints", "1" if on else "0")
