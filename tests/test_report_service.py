import os
from datetime import date

import pytest

from database.db_manager import DatabaseManager
from utils import app_config
from utils.constants import DB_FILE

REF = date(2024, 6, 15)


@pytest.fixture
def sample(data_service):
    return data_service.load_sample_data(REF)


def test_summary_for_sample_month(sample, report_service):
    summary = report_service.get_summary(REF)
    assert summary["income"] == 17500
    assert summary["expense"] == 3070
    assert summary["net"] == 14430
    assert summary["days_so_far"] == 15
    assert summary["days_in_month"] == 30
    assert summary["run_rate"] == pytest.approx(3070 / 15)
    assert summary["projected"] == pytest.approx(3070 / 15 * 30)


def test_summary_for_empty_month(sample, report_service):
    summary = report_service.get_summary(date(2024, 8, 10))
    assert summary["income"] == 0
    assert summary["expense"] == 0
    assert summary["projected"] == 0


def test_top_categories(sample, report_service):
    assert report_service.get_top_categories(REF) == [
        ("Rent", 1800), ("Groceries", 650), ("Eating Out", 400),
    ]
    assert report_service.get_top_categories(REF, n=1) == [("Rent", 1800)]


def test_category_breakdown(sample, report_service):
    expense_by_cat, income_by_cat = report_service.get_category_breakdown(2024, 6)
    assert income_by_cat == {"Salary": 15000, "Freelance": 2500}
    assert sum(expense_by_cat.values()) == 3070


def test_upcoming_recurring(sample, report_service):
    items = report_service.get_upcoming_recurring(REF)
    assert [(i.transaction.category, i.due_date, i.days_away) for i in items] == [
        ("Salary", date(2024, 7, 1), 16),
        ("Rent", date(2024, 7, 3), 18),
    ]


def test_filtered_register_and_stats(sample, report_service):
    rows, stats = report_service.get_filtered("expense")
    assert [t.date for t in rows] == [
        "2024-06-16", "2024-06-12", "2024-06-05", "2024-06-03",
    ]
    assert stats["total"] == 3070
    assert stats["max"] == 1800
    assert stats["avg_per_day"] == pytest.approx(3070 / 14)

    rows, stats = report_service.get_filtered("expense", search="TAXI")
    assert len(rows) == 1
    assert stats == {"total": 220, "avg_per_day": 220, "max": 220}


def test_views_follow_mutations(sample, report_service, tx_service):
    tx_service.create("expense", 1000, "2024-06-14", "Transport")
    assert report_service.get_summary(REF)["expense"] == 4070
    assert report_service.get_top_categories(REF)[0] == ("Rent", 1800)
    assert report_service.get_top_categories(REF)[1] == ("Transport", 1220)


def test_monthly_chart_data(sample, report_service):
    data = report_service.get_monthly_chart_data(REF)
    assert len(data) == 12
    assert data[-1]["label"] == "Jun"
    assert data[-1]["income"] == 17500
    assert all(d["expense"] == 0 for d in data[:-1])


def test_open_default_creates_store_in_folder(tmp_path):
    folder = tmp_path / "ledger"
    db = DatabaseManager.open_default(str(folder))
    try:
        assert os.path.exists(folder / DB_FILE)
        assert db.get_setting("currency") == "ZAR"
    finally:
        db.close()


def test_app_config_round_trip(tmp_path, monkeypatch):
    monkeypatch.setattr(app_config, "CONFIG_DIR", tmp_path)
    monkeypatch.setattr(app_config, "CONFIG_FILE", tmp_path / "config.json")
    assert app_config.get_db_folder() is None
    assert app_config.get_log_level() == "INFO"

    app_config.set_db_folder("/data/ledger")
    assert app_config.get_db_folder() == "/data/ledger"
    app_config.set_db_folder(None)
    assert app_config.get_db_folder() is None


def test_app_config_ignores_corrupt_file(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json", encoding="utf-8")
    monkeypatch.setattr(app_config, "CONFIG_FILE", config_file)
    assert app_config.load_config() == {}
