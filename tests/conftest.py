import pytest

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO
from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.settings_service import SettingsService
from services.report_service import ReportService
from services.data_service import DataService


@pytest.fixture
def db():
    manager = DatabaseManager(":memory:")
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def tx_dao(db):
    return TransactionDAO(db)


@pytest.fixture
def category_dao(db):
    return CategoryDAO(db)


@pytest.fixture
def tx_service(tx_dao, category_dao):
    return TransactionService(tx_dao, category_dao)


@pytest.fixture
def category_service(category_dao, tx_dao):
    return CategoryService(category_dao, tx_dao)


@pytest.fixture
def settings_service(db, category_dao):
    return SettingsService(db, category_dao)


@pytest.fixture
def report_service(tx_dao):
    return ReportService(tx_dao)


@pytest.fixture
def data_service(db, category_dao, tx_dao, settings_service):
    return DataService(db, category_dao, tx_dao, settings_service)
