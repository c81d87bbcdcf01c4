from dataclasses import dataclass, field

from utils.constants import (
    DEFAULT_CURRENCY, DEFAULT_THEME,
    DEFAULT_EXPENSE_CATEGORIES, DEFAULT_INCOME_CATEGORIES,
)


@dataclass
class Settings:
    currency: str = DEFAULT_CURRENCY
    theme: str = DEFAULT_THEME          # 'dark' | 'light'
    beginner_hints: bool = True
    expense_categories: list[str] = field(
        default_factory=lambda: list(DEFAULT_EXPENSE_CATEGORIES)
    )
    income_categories: list[str] = field(
        default_factory=lambda: list(DEFAULT_INCOME_CATEGORIES)
    )

    def categories_for(self, type_: str) -> list[str]:
        return self.income_categories if type_ == "income" else self.expense_categories
