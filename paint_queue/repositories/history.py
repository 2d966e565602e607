# paint_queue/repositories/history.py
from typing import List

from .base import BaseRepository, fetch_all, fetch_one


class StatusHistoryRepository(BaseRepository):
    """Append-only record of each status an order entered."""

    def append(self, transaction_id: str, status: str):
        return fetch_one(self.conn, """
            INSERT INTO status_history (transaction_id, status, entered_at)
            VALUES (%s, %s, NOW())
            RETURNING *
        """, (transaction_id, status))

    def list_for_order(self, transaction_id: str) -> List[dict]:
        return fetch_all(self.conn, """
            SELECT * FROM status_history
            WHERE transaction_id = %s
            ORDER BY entered_at ASC, history_id ASC
        """, (transaction_id,))
