import logging
import os
import sys
import customtkinter as ctk

# Ensure project root is on sys.path when run directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from database.db_manager import DatabaseManager
from database.transaction_dao import TransactionDAO
from database.category_dao import CategoryDAO

from services.transaction_service import TransactionService
from services.category_service import CategoryService
from services.settings_service import SettingsService
from services.report_service import ReportService
from services.data_service import DataService

from ui.app_window import AppWindow
from utils.app_config import get_db_folder, get_log_level


def main():
    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # ── Database ─────────────────────────────────────────────────────────────
    db = DatabaseManager.open_default(db_folder=get_db_folder())

    # ── DAOs ─────────────────────────────────────────────────────────────────
    tx_dao = TransactionDAO(db)
    category_dao = CategoryDAO(db)

    # ── Services ─────────────────────────────────────────────────────────────
    tx_svc = TransactionService(tx_dao, category_dao)
    category_svc = CategoryService(category_dao, tx_dao)
    settings_svc = SettingsService(db, category_dao)
    report_svc = ReportService(tx_dao)
    data_svc = DataService(db, category_dao, tx_dao, settings_svc)

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(settings_svc.get().theme)
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        tx_service=tx_svc,
        category_service=category_svc,
        settings_service=settings_svc,
        report_service=report_svc,
        data_service=data_svc,
    )

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


if __name__ == "__main__":
    main()
