from typing import Iterable, Optional
from database.db_manager import DatabaseManager
from models.transaction import Transaction


class TransactionDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db

    def _row_to_model(self, row) -> Transaction:
        return Transaction(
            id=row["id"],
            type=row["type"],
            date=row["date"],
            amount=row["amount"],
            category=row["category"],
            account=row["account"],
            notes=row["notes"],
            recurring=bool(row["recurring"]),
            frequency=row["frequency"],
        )

    def _params(self, tx: Transaction) -> tuple:
        return (
            tx.id, tx.type, tx.date, tx.amount, tx.category,
            tx.account, tx.notes, int(tx.recurring), tx.frequency,
        )

    def get_all(self) -> list[Transaction]:
        """All records in insertion order."""
        conn = self._db.get_connection()
        rows = conn.execute(
            "SELECT * FROM transactions ORDER BY rowid ASC"
        ).fetchall()
        return [self._row_to_model(r) for r in rows]

    def get_by_id(self, tx_id: str) -> Optional[Transaction]:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT * FROM transactions WHERE id = ?", (tx_id,)
        ).fetchone()
        return self._row_to_model(row) if row else None

    def create(self, tx: Transaction) -> Transaction:
        conn = self._db.get_connection()
        conn.execute(
            """INSERT INTO transactions
               (id, type, date, amount, category, account, notes, recurring, frequency)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            self._params(tx),
        )
        conn.commit()
        return self.get_by_id(tx.id)

    def update(self, tx: Transaction) -> Transaction:
        """Update mutable fields in place. The type column is never rewritten."""
        conn = self._db.get_connection()
        conn.execute(
            """UPDATE transactions
               SET date=?, amount=?, category=?, account=?, notes=?,
                   recurring=?, frequency=?
               WHERE id=?""",
            (
                tx.date, tx.amount, tx.category, tx.account, tx.notes,
                int(tx.recurring), tx.frequency, tx.id,
            ),
        )
        conn.commit()
        return self.get_by_id(tx.id)

    def delete(self, tx_id: str) -> int:
        conn = self._db.get_connection()
        cursor = conn.execute("DELETE FROM transactions WHERE id = ?", (tx_id,))
        conn.commit()
        return cursor.rowcount

    def delete_bulk(self, type_: str, ids: Iterable[str]) -> int:
        """Delete records whose id is in `ids` AND whose type is `type_`."""
        id_list = list(dict.fromkeys(ids))
        if not id_list:
            return 0
        conn = self._db.get_connection()
        placeholders = ",".join("?" * len(id_list))
        cursor = conn.execute(
            f"DELETE FROM transactions WHERE type = ? AND id IN ({placeholders})",
            [type_, *id_list],
        )
        conn.commit()
        return cursor.rowcount

    def replace_all(self, transactions: list[Transaction]):
        """Wholesale replace the collection in one commit."""
        conn = self._db.get_connection()
        try:
            conn.execute("DELETE FROM transactions")
            conn.executemany(
                """INSERT INTO transactions
                   (id, type, date, amount, category, account, notes, recurring, frequency)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                [self._params(tx) for tx in transactions],
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def count_by_category(self, type_: str, category: str) -> int:
        conn = self._db.get_connection()
        row = conn.execute(
            "SELECT COUNT(*) AS n FROM transactions WHERE type = ? AND category = ?",
            (type_, category),
        ).fetchone()
        return row["n"]
