# paint_queue/repositories/deleted.py
from datetime import date
from typing import Dict, List, Optional

from .base import BaseRepository, date_range, fetch_all, fetch_one, where

ARCHIVED_COLUMNS = (
    "transaction_id",
    "customer_name",
    "client_contact",
    "paint_type",
    "colour_code",
    "category",
    "order_type",
    "po_type",
    "paint_quantity",
    "assigned_employee",
    "current_status",
    "start_time",
    "completed_at",
)


class DeletedOrderRepository(BaseRepository):
    def archive(self, order: dict, *, reason: str, deleted_by: Optional[str]):
        """Copy a live order row into deleted_orders, with the deletion reason as its note."""
        columns = ", ".join(ARCHIVED_COLUMNS)
        placeholders = ", ".join(["%s"] * len(ARCHIVED_COLUMNS))
        return fetch_one(self.conn, f"""
            INSERT INTO deleted_orders ({columns}, note, deleted_by, deleted_at)
            VALUES ({placeholders}, %s, %s, NOW())
            RETURNING *
        """, tuple(order[c] for c in ARCHIVED_COLUMNS) + (reason, deleted_by))

    def get(self, transaction_id: str):
        return fetch_one(self.conn,
            "SELECT * FROM deleted_orders WHERE transaction_id = %s",
            (transaction_id,)
        )

    def list(self, limit: int) -> List[dict]:
        return fetch_all(self.conn,
            "SELECT * FROM deleted_orders ORDER BY start_time DESC LIMIT %s",
            (limit,)
        )

    def count_by_status(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Dict[str, int]:
        conditions, params = date_range("start_time", start, end)
        if status:
            conditions.append("current_status = %s")
            params.append(status)
        if category:
            conditions.append("category = %s")
            params.append(category)
        rows = fetch_all(self.conn, f"""
            SELECT current_status, COUNT(*)::int AS count
            FROM deleted_orders
            {where(conditions)}
            GROUP BY current_status
        """, params)
        return {row["current_status"]: row["count"] for row in rows}
