"""Export and import the whole ledger (settings + transactions) as JSON,
load demo records, and reset the store.

The backup layout is the one the ledger has always written:

    {"settings": {"currency", "theme", "beginnerHints",
                  "expenseCategories", "incomeCategories"},
     "transactions": [{"id", "type", "date", "amount", "category",
                       "account", "notes", "recurring", "frequency"?}, ...]}
"""
import logging
import math
from datetime import date, datetime

from database.db_manager import DatabaseManager
from database.category_dao import CategoryDAO
from database.transaction_dao import TransactionDAO
from models.settings import Settings
from models.transaction import Transaction
from services.settings_service import SettingsService
from services.transaction_service import new_id
from utils.constants import EXPORT_VERSION, THEMES, TRANSACTION_TYPES
from utils.date_helpers import normalize_date, today

logger = logging.getLogger(__name__)


class DataService:
    def __init__(
        self,
        db: DatabaseManager,
        category_dao: CategoryDAO,
        tx_dao: TransactionDAO,
        settings_service: SettingsService,
    ):
        self._db = db
        self._category_dao = category_dao
        self._tx_dao = tx_dao
        self._settings_svc = settings_service

    # ── Export ────────────────────────────────────────────────────────────────

    def export_json(self) -> dict:
        """Return a full export dict (caller writes to disk)."""
        settings = self._settings_svc.get()
        return {
            "export_version": EXPORT_VERSION,
            "exported_at": datetime.now().isoformat(),
            "settings": {
                "currency": settings.currency,
                "theme": settings.theme,
                "beginnerHints": settings.beginner_hints,
                "expenseCategories": settings.expense_categories,
                "incomeCategories": settings.income_categories,
            },
            "transactions": [self._tx_to_dict(t) for t in self._tx_dao.get_all()],
        }

    def _tx_to_dict(self, tx: Transaction) -> dict:
        row = {
            "id": tx.id,
            "type": tx.type,
            "date": tx.date,
            "amount": tx.amount,
            "category": tx.category,
            "account": tx.account,
            "notes": tx.notes,
            "recurring": tx.recurring,
        }
        if tx.frequency:
            row["frequency"] = tx.frequency
        return row

    # ── Import ────────────────────────────────────────────────────────────────

    def import_json(self, data: dict) -> dict:
        """Replace the whole ledger with a previously exported JSON dict.

        Settings missing from the payload fall back to defaults. Returns
        {"transactions": imported, "skipped": skipped}.
        """
        if not isinstance(data, dict) or not isinstance(data.get("transactions"), list):
            raise ValueError("This file does not look like a valid backup.")

        raw_settings = data.get("settings") or {}
        if not isinstance(raw_settings, dict):
            raise ValueError("This file does not look like a valid backup.")
        settings = self._merge_settings(raw_settings)

        transactions: list[Transaction] = []
        seen: set[str] = set()
        skipped = 0
        for raw in data["transactions"]:
            tx = self._dict_to_tx(raw, seen)
            if tx is None:
                skipped += 1
                continue
            seen.add(tx.id)
            transactions.append(tx)

        self._apply_settings(settings)
        self._tx_dao.replace_all(transactions)
        logger.info(
            "Imported %d transaction(s), skipped %d", len(transactions), skipped
        )
        return {"transactions": len(transactions), "skipped": skipped}

    def _merge_settings(self, raw: dict) -> Settings:
        defaults = Settings()
        theme = raw.get("theme", defaults.theme)
        return Settings(
            currency=str(raw.get("currency") or defaults.currency),
            theme=theme if theme in THEMES else defaults.theme,
            beginner_hints=bool(raw.get("beginnerHints", defaults.beginner_hints)),
            expense_categories=self._label_list(
                raw.get("expenseCategories"), defaults.expense_categories
            ),
            income_categories=self._label_list(
                raw.get("incomeCategories"), defaults.income_categories
            ),
        )

    def _label_list(self, value, fallback: list[str]) -> list[str]:
        if not isinstance(value, list):
            return fallback
        return [str(v).strip() for v in value if str(v).strip()]

    def _dict_to_tx(self, raw, seen: set[str]) -> Transaction | None:
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object transaction entry: %r", raw)
            return None
        type_ = raw.get("type")
        if type_ not in TRANSACTION_TYPES:
            logger.warning("Skipping transaction with unknown type %r", type_)
            return None
        try:
            amount = float(raw.get("amount"))
        except (TypeError, ValueError):
            logger.warning("Skipping transaction with bad amount %r", raw.get("amount"))
            return None
        if not math.isfinite(amount):
            logger.warning("Skipping transaction with non-finite amount %r", raw.get("amount"))
            return None

        tx_id = str(raw.get("id") or "")
        if not tx_id or tx_id in seen:
            tx_id = new_id()
        recurring = bool(raw.get("recurring"))
        return Transaction(
            id=tx_id,
            type=type_,
            date=normalize_date(raw.get("date")),
            amount=amount,
            category=str(raw.get("category") or ""),
            account=str(raw.get("account") or ""),
            notes=str(raw.get("notes") or ""),
            recurring=recurring,
            frequency=(raw.get("frequency") or "monthly") if recurring else None,
        )

    def _apply_settings(self, settings: Settings):
        self._db.set_setting("currency", settings.currency)
        self._db.set_setting("theme", settings.theme)
        self._db.set_setting("beginner_hints", "1" if settings.beginner_hints else "0")
        self._category_dao.replace_for_type("expense", settings.expense_categories)
        self._category_dao.replace_for_type("income", settings.income_categories)

    # ── Sample data & reset ───────────────────────────────────────────────────

    def load_sample_data(self, ref: date | None = None) -> list[Transaction]:
        """Replace all records with a small demo month dated in ref's month."""
        ref = ref or today()
        prefix = f"{ref.year}-{ref.month:02d}"
        sample = [
            ("income", "01", 15000.0, "Salary", "Bank", "Main job", True),
            ("income", "10", 2500.0, "Freelance", "Bank", "Video project", False),
            ("expense", "03", 1800.0, "Rent", "Bank", "Room", True),
            ("expense", "05", 650.0, "Groceries", "Card", "Food", False),
            ("expense", "12", 220.0, "Transport", "Cash", "Taxi", False),
            ("expense", "16", 400.0, "Eating Out", "Card", "Dinner", False),
        ]
        transactions = [
            Transaction(
                id=new_id(),
                type=type_,
                date=f"{prefix}-{day}",
                amount=amount,
                category=category,
                account=account,
                notes=notes,
                recurring=recurring,
                frequency="monthly" if recurring else None,
            )
            for type_, day, amount, category, account, notes, recurring in sample
        ]
        self._tx_dao.replace_all(transactions)
        logger.info("Loaded %d sample transactions for %s", len(transactions), prefix)
        return transactions

    def reset(self):
        """Delete ALL data and restore default settings and categories."""
        self._db.reset()
