# paint_queue/repositories/orders.py
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from psycopg import sql
from psycopg.errors import UniqueViolation

from ..constants import INACTIVE_STATUSES, IN_PROGRESS_STATUSES, OrderStatus
from ..errors import DuplicateOrder
from .base import BaseRepository, date_range, execute, fetch_all, fetch_one, like_pattern, where

INSERT_COLUMNS = (
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
    "note",
)

SORTABLE_COLUMNS = ("start_time", "customer_name", "current_status", "transaction_id", "category")
COUNTABLE_COLUMNS = ("current_status", "category")

LIVE = "deleted = FALSE"


class OrderRepository(BaseRepository):
    def get(self, transaction_id: str, *, include_deleted: bool = False, for_update: bool = False):
        query = "SELECT * FROM orders WHERE transaction_id = %s"
        if not include_deleted:
            query += f" AND {LIVE}"
        if for_update:
            query += " FOR UPDATE"
        return fetch_one(self.conn, query, (transaction_id,))

    def exists(self, transaction_id: str) -> bool:
        row = fetch_one(self.conn, "SELECT 1 AS found FROM orders WHERE transaction_id = %s", (transaction_id,))
        return row is not None

    def insert(self, order: Dict[str, Any]):
        columns = sql.SQL(", ").join(sql.Identifier(c) for c in INSERT_COLUMNS)
        values = sql.SQL(", ").join([sql.Placeholder()] * len(INSERT_COLUMNS))
        query = sql.SQL("INSERT INTO orders ({}) VALUES ({}) RETURNING *").format(columns, values)
        try:
            return fetch_one(self.conn, query, tuple(order.get(c) for c in INSERT_COLUMNS))
        except UniqueViolation as exc:
            raise DuplicateOrder() from exc

    def apply_transition(
        self,
        transaction_id: str,
        *,
        status: str,
        colour_code: str,
        assigned_employee: Optional[str],
        note: Optional[str],
        po_type: Optional[str],
    ):
        return fetch_one(self.conn, """
            UPDATE orders
            SET current_status = %s,
                colour_code = %s,
                assigned_employee = %s,
                note = %s,
                po_type = %s
            WHERE transaction_id = %s
            RETURNING *
        """, (status, colour_code, assigned_employee, note, po_type, transaction_id))

    def set_status(self, transaction_id: str, status: str, *, completed: bool = False):
        return fetch_one(self.conn, """
            UPDATE orders
            SET current_status = %s,
                completed_at = CASE WHEN %s THEN NOW() ELSE completed_at END
            WHERE transaction_id = %s
            RETURNING *
        """, (status, completed, transaction_id))

    def mark_deleted(self, transaction_id: str):
        return fetch_one(self.conn,
            "UPDATE orders SET deleted = TRUE WHERE transaction_id = %s RETURNING *",
            (transaction_id,)
        )

    def archive_stale(self, cutoff_days: int) -> int:
        return execute(self.conn, f"""
            UPDATE orders
            SET archived = TRUE
            WHERE current_status = %s
              AND archived = FALSE
              AND {LIVE}
              AND start_time < NOW() - make_interval(days => %s)
        """, (OrderStatus.WAITING, cutoff_days))

    # Listings

    def list_recent(self, limit: int) -> List[dict]:
        return fetch_all(self.conn, f"""
            SELECT * FROM orders
            WHERE {LIVE} AND archived = FALSE
            ORDER BY start_time DESC
            LIMIT %s
        """, (limit,))

    def list_active(self, limit: int) -> List[dict]:
        return fetch_all(self.conn, f"""
            SELECT * FROM orders
            WHERE {LIVE}
              AND archived = FALSE
              AND current_status <> ALL(%s)
            ORDER BY start_time DESC
            LIMIT %s
        """, (list(INACTIVE_STATUSES), limit))

    def list_by_status(self, statuses: Sequence[str], limit: int) -> List[dict]:
        return fetch_all(self.conn, f"""
            SELECT * FROM orders
            WHERE {LIVE} AND current_status = ANY(%s)
            ORDER BY start_time DESC
            LIMIT %s
        """, (list(statuses), limit))

    def list_archived(self, limit: int) -> List[dict]:
        return fetch_all(self.conn, f"""
            SELECT * FROM orders
            WHERE {LIVE} AND archived = TRUE
            ORDER BY start_time DESC
            LIMIT %s
        """, (limit,))

    def search(self, q: str, sort_by: str, sort_order: str, limit: int) -> List[dict]:
        if sort_by not in SORTABLE_COLUMNS:
            raise ValueError(f"unsortable column: {sort_by}")
        direction = sql.SQL("ASC" if sort_order.lower() == "asc" else "DESC")
        query = sql.SQL("""
            SELECT * FROM orders
            WHERE deleted = FALSE
              AND (customer_name ILIKE %(q)s ESCAPE '\\'
                OR client_contact ILIKE %(q)s ESCAPE '\\'
                OR transaction_id ILIKE %(q)s ESCAPE '\\')
            ORDER BY {} {}
            LIMIT %(limit)s
        """).format(sql.Identifier(sort_by), direction)
        return fetch_all(self.conn, query, {"q": like_pattern(q), "limit": limit})

    def count_active(self) -> int:
        row = fetch_one(self.conn, f"""
            SELECT COUNT(*)::int AS active_orders FROM orders
            WHERE {LIVE} AND archived = FALSE AND current_status = ANY(%s)
        """, (list(IN_PROGRESS_STATUSES),))
        return row["active_orders"]

    def has_duplicate(self, customer_name: str, client_contact: str, paint_type: str, category: str) -> bool:
        row = fetch_one(self.conn, f"""
            SELECT COUNT(*)::int AS count FROM orders
            WHERE {LIVE}
              AND customer_name = %s AND client_contact = %s AND paint_type = %s AND category = %s
        """, (customer_name, client_contact, paint_type, category))
        return row["count"] > 0

    def count_by(
        self,
        column: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Dict[str, int]:
        if column not in COUNTABLE_COLUMNS:
            raise ValueError(f"uncountable column: {column}")
        conditions, params = date_range("start_time", start, end)
        conditions.insert(0, LIVE)
        if status:
            conditions.append("current_status = %s")
            params.append(status)
        if category:
            conditions.append("category = %s")
            params.append(category)
        query = sql.SQL("SELECT {col} AS key, COUNT(*)::int AS count FROM orders {where} GROUP BY {col}").format(
            col=sql.Identifier(column),
            where=sql.SQL(where(conditions)),
        )
        return {row["key"]: row["count"] for row in fetch_all(self.conn, query, params)}
