import logging
import math
import uuid
from typing import Iterable

from models.transaction import Transaction
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from utils.constants import DEFAULT_CATEGORY, FREQUENCIES, TRANSACTION_TYPES
from utils.date_helpers import normalize_date, parse_date

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


class TransactionService:
    def __init__(self, tx_dao: TransactionDAO, category_dao: CategoryDAO):
        self._dao = tx_dao
        self._cat_dao = category_dao

    def get_all(self) -> list[Transaction]:
        return self._dao.get_all()

    def get_by_id(self, tx_id: str) -> Transaction | None:
        return self._dao.get_by_id(tx_id)

    def create(
        self,
        type_: str,
        amount: float,
        date: str,
        category: str = "",
        account: str = "",
        notes: str = "",
        recurring: bool = False,
        frequency: str | None = None,
    ) -> Transaction:
        category = category or DEFAULT_CATEGORY
        frequency = self._normalize_frequency(recurring, frequency)
        self._validate(type_, amount, date, category, frequency)
        tx = self._dao.create(Transaction(
            id=new_id(),
            type=type_,
            date=normalize_date(date),
            amount=float(amount),
            category=category,
            account=account.strip(),
            notes=notes.strip(),
            recurring=recurring,
            frequency=frequency,
        ))
        logger.info("Created %s %s on %s (%.2f)", type_, tx.id, date, tx.amount)
        return tx

    def update(
        self,
        tx_id: str,
        amount: float,
        date: str,
        category: str = "",
        account: str = "",
        notes: str = "",
        recurring: bool = False,
        frequency: str | None = None,
    ) -> Transaction:
        """Update a record in place. Its type is fixed at creation."""
        existing = self._dao.get_by_id(tx_id)
        if existing is None:
            raise ValueError("Transaction not found.")
        category = category or DEFAULT_CATEGORY
        frequency = self._normalize_frequency(recurring, frequency)
        self._validate(existing.type, amount, date, category, frequency)
        tx = self._dao.update(Transaction(
            id=tx_id,
            type=existing.type,
            date=normalize_date(date),
            amount=float(amount),
            category=category,
            account=account.strip(),
            notes=notes.strip(),
            recurring=recurring,
            frequency=frequency,
        ))
        logger.info("Updated %s %s", existing.type, tx_id)
        return tx

    def delete(self, tx_id: str) -> bool:
        deleted = self._dao.delete(tx_id) > 0
        if deleted:
            logger.info("Deleted transaction %s", tx_id)
        return deleted

    def delete_bulk(self, type_: str, ids: Iterable[str]) -> int:
        """Delete the given ids, but only those of kind `type_`. Returns the count."""
        count = self._dao.delete_bulk(type_, ids)
        logger.info("Bulk deleted %d %s record(s)", count, type_)
        return count

    def _normalize_frequency(self, recurring: bool, frequency: str | None) -> str | None:
        if not recurring:
            return None
        return frequency or FREQUENCIES[0]

    def _validate(self, type_, amount, date, category, frequency):
        if type_ not in TRANSACTION_TYPES:
            raise ValueError(f"Invalid type: {type_}")
        try:
            value = float(amount)
        except (TypeError, ValueError):
            raise ValueError("Please enter a valid amount.") from None
        if not math.isfinite(value):
            raise ValueError("Please enter a valid amount.")
        if not value > 0:
            raise ValueError("Amount must be positive.")
        if not parse_date(date):
            raise ValueError("Invalid date format. Use YYYY-MM-DD.")
        if category not in self._cat_dao.get_names(type_):
            raise ValueError(f"Unknown {type_} category: '{category}'.")
        if frequency is not None and frequency not in FREQUENCIES:
            raise ValueError(f"Unsupported frequency: {frequency}")
