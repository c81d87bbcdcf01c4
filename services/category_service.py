import logging

from database.category_dao import CategoryDAO
from database.transaction_dao import TransactionDAO
from utils.constants import TRANSACTION_TYPES

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, category_dao: CategoryDAO, tx_dao: TransactionDAO):
        self._dao = category_dao
        self._tx_dao = tx_dao

    def get_for_type(self, type_: str) -> list[str]:
        self._check_type(type_)
        return self._dao.get_names(type_)

    def add(self, type_: str, name: str) -> str:
        """Append a label to a kind's list. Adding an existing label is a no-op."""
        self._check_type(type_)
        name = name.strip()
        if not name:
            raise ValueError("Category name cannot be empty.")
        if self._dao.get_by_name(type_, name) is None:
            self._dao.create(type_, name)
            logger.info("Added %s category '%s'", type_, name)
        return name

    def is_in_use(self, type_: str, name: str) -> bool:
        """True when any record of this kind carries the label."""
        return self._tx_dao.count_by_category(type_, name) > 0

    def remove(self, type_: str, name: str) -> bool:
        """Drop a label from future selection. Records keep their literal category."""
        self._check_type(type_)
        removed = self._dao.delete(type_, name) > 0
        if removed:
            logger.info("Removed %s category '%s'", type_, name)
        return removed

    def _check_type(self, type_: str):
        if type_ not in TRANSACTION_TYPES:
            raise ValueError(f"Invalid type: {type_}")
