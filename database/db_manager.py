import logging
import os
import sqlite3
from utils.constants import (
    DB_FILE, DEFAULT_CURRENCY, DEFAULT_THEME,
    DEFAULT_EXPENSE_CATEGORIES, DEFAULT_INCOME_CATEGORIES,
)

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            if self.db_path != ":memory:":
                self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._seed_defaults(conn)
        conn.commit()

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS categories (
                id    INTEGER PRIMARY KEY AUTOINCREMENT,
                name  TEXT NOT NULL,
                type  TEXT NOT NULL CHECK(type IN ('income','expense')),
                UNIQUE(name, type)
            );

            CREATE TABLE IF NOT EXISTS transactions (
                id         TEXT PRIMARY KEY,
                type       TEXT NOT NULL CHECK(type IN ('income','expense')),
                date       TEXT NOT NULL DEFAULT '',
                amount     REAL NOT NULL,
                category   TEXT NOT NULL DEFAULT 'Other',
                account    TEXT NOT NULL DEFAULT '',
                notes      TEXT NOT NULL DEFAULT '',
                recurring  INTEGER NOT NULL DEFAULT 0,
                frequency  TEXT
            );

            CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date);
            CREATE INDEX IF NOT EXISTS idx_transactions_type ON transactions(type);

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        defaults = [
            ("currency", DEFAULT_CURRENCY),
            ("theme", DEFAULT_THEME),
            ("beginner_hints", "1"),
            ("categories_seeded", "0"),
        ]
        for key, value in defaults:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

        # Seed only once so user removals of default labels survive restarts
        seeded = conn.execute(
            "SELECT value FROM app_settings WHERE key = 'categories_seeded'"
        ).fetchone()
        if seeded["value"] == "1":
            return
        self.seed_default_categories(conn)
        conn.execute(
            "UPDATE app_settings SET value = '1' WHERE key = 'categories_seeded'"
        )

    def seed_default_categories(self, conn: sqlite3.Connection):
        for type_, names in (
            ("expense", DEFAULT_EXPENSE_CATEGORIES),
            ("income", DEFAULT_INCOME_CATEGORIES),
        ):
            for name in names:
                conn.execute(
                    "INSERT OR IGNORE INTO categories(name, type) VALUES (?, ?)",
                    (name, type_),
                )

    def reset(self):
        """Drop every record, category and setting, then re-seed defaults."""
        conn = self.get_connection()
        conn.executescript("""
            DELETE FROM transactions;
            DELETE FROM categories;
            DELETE FROM app_settings;
        """)
        self._seed_defaults(conn)
        conn.commit()
        logger.info("Store reset to defaults")

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
            (key, value),
        )
        conn.commit()

    @staticmethod
    def open_default(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens (creating if needed) the ledger DB.

        db_folder: if provided, the DB file is stored in that directory instead of CWD.
        """
        if db_folder:
            os.makedirs(db_folder, exist_ok=True)
            path = os.path.join(db_folder, DB_FILE)
        else:
            path = DB_FILE
        db = DatabaseManager(path)
        db.initialize()
        logger.info("Opened ledger store at %s", path)
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
