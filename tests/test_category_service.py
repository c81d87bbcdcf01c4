import pytest

from utils.constants import DEFAULT_EXPENSE_CATEGORIES, DEFAULT_INCOME_CATEGORIES


def test_defaults_are_seeded(category_service):
    assert category_service.get_for_type("expense") == DEFAULT_EXPENSE_CATEGORIES
    assert category_service.get_for_type("income") == DEFAULT_INCOME_CATEGORIES


def test_add_appends_trimmed_name(category_service):
    assert category_service.add("expense", "  Utilities ") == "Utilities"
    assert category_service.get_for_type("expense")[-1] == "Utilities"


def test_add_duplicate_is_noop(category_service):
    category_service.add("income", "Salary")
    assert category_service.get_for_type("income").count("Salary") == 1


def test_add_same_name_to_both_lists(category_service):
    category_service.add("income", "Refunds")
    category_service.add("expense", "Refunds")
    assert "Refunds" in category_service.get_for_type("income")
    assert "Refunds" in category_service.get_for_type("expense")


def test_add_empty_name_rejected(category_service):
    with pytest.raises(ValueError, match="cannot be empty"):
        category_service.add("expense", "   ")


def test_invalid_type_rejected(category_service):
    with pytest.raises(ValueError, match="Invalid type"):
        category_service.get_for_type("savings")


def test_remove_keeps_existing_records(category_service, tx_service):
    tx = tx_service.create("expense", 40, "2024-06-05", "Transport")
    assert category_service.is_in_use("expense", "Transport")
    assert not category_service.is_in_use("income", "Transport")

    assert category_service.remove("expense", "Transport") is True
    assert "Transport" not in category_service.get_for_type("expense")
    assert tx_service.get_by_id(tx.id).category == "Transport"
    assert category_service.remove("expense", "Transport") is False


def test_removed_category_can_no_longer_be_chosen(category_service, tx_service):
    category_service.remove("expense", "Rent")
    with pytest.raises(ValueError):
        tx_service.create("expense", 10, "2024-06-05", "Rent")


def test_defaults_seeded_only_once(db, category_service):
    category_service.remove("income", "Gifts")
    db.initialize()
    assert "Gifts" not in category_service.get_for_type("income")


def test_settings_reflect_category_lists(category_service, settings_service):
    category_service.add("expense", "Pets")
    settings = settings_service.get()
    assert settings.expense_categories[-1] == "Pets"
    assert settings.categories_for("income") == DEFAULT_INCOME_CATEGORIES
