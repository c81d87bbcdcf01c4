from typing import Optional
from database.db_manager import DatabaseManager
from models.category import Category


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Category:
        return Category(
            id=row["id"],
            name=row["name"],
            type=row["type"],
        )

    def get_by_type(self, type_: str) -> list[Category]:
        """Categories for 'income' or 'expense', in the order they were added."""
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM categories WHERE type = ? ORDER BY id",
            (type_,),
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_names(self, type_: str) -> list[str]:
        return [c.name for c in self.get_by_type(type_)]

    def get_by_name(self, type_: str, name: str) -> Optional[Category]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM categories WHERE type = ? AND name = ?",
            (type_, name),
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(self, type_: str, name: str) -> Category:
        conn = self._db.get_connection()
        conn.execute(
            "INSERT OR IGNORE INTO categories(name, type) VALUES (?, ?)",
            (name, type_),
        )
        conn.commit()
        return self.get_by_name(type_, name)

    def delete(self, type_: str, name: str) -> int:
        conn = self._db.get_connection()
        cursor = conn.execute(
            "DELETE FROM categories WHERE type = ? AND name = ?", (type_, name)
        )
        conn.commit()
        return cursor.rowcount

    def replace_for_type(self, type_: str, names: list[str]):
        """Replace a kind's list, keeping the given order and dropping duplicates."""
        conn = self._db.get_connection()
        try:
            conn.execute("DELETE FROM categories WHERE type = ?", (type_,))
            for name in dict.fromkeys(names):
                conn.execute(
                    "INSERT INTO categories(name, type) VALUES (?, ?)", (name, type_)
                )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
