# paint_queue/repositories/audit.py
from datetime import date
from typing import Dict, List, Optional

import psycopg

from ..errors import DatastoreError
from .base import BaseRepository, date_range, fetch_all, fetch_one, where


class AuditLogRepository(BaseRepository):
    def append(
        self,
        order_id: str,
        action: str,
        *,
        from_status: Optional[str] = None,
        to_status: Optional[str] = None,
        employee_name: Optional[str] = None,
        user_role: Optional[str] = None,
        colour_code: Optional[str] = None,
        remarks: Optional[str] = None,
    ):
        return fetch_one(self.conn, """
            INSERT INTO audit_logs
                (order_id, action, from_status, to_status, employee_name, user_role, colour_code, remarks)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING *
        """, (order_id, action, from_status, to_status, employee_name, user_role, colour_code, remarks))

    def _filters(self, start, end, status, order_id=None):
        conditions, params = date_range("timestamp", start, end)
        if status:
            conditions.append("to_status = %s")
            params.append(status)
        if order_id:
            conditions.append("order_id = %s")
            params.append(order_id)
        return conditions, params

    def list(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[str] = None,
        order_id: Optional[str] = None,
        limit: int = 100,
    ) -> List[dict]:
        conditions, params = self._filters(start, end, status, order_id)
        params.append(limit)
        return fetch_all(self.conn, f"""
            SELECT log_id, order_id, action, from_status, to_status, employee_name,
                   user_role, colour_code, timestamp, remarks
            FROM audit_logs
            {where(conditions)}
            ORDER BY timestamp DESC, log_id DESC
            LIMIT %s
        """, params)

    def count_by_action(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[str] = None,
    ) -> Dict[str, int]:
        conditions, params = self._filters(start, end, status)
        try:
            # savepoint: a failure here must not abort the surrounding report transaction
            with self.conn.transaction():
                rows = fetch_all(self.conn, f"""
                    SELECT action, COUNT(*)::int AS count
                    FROM audit_logs
                    {where(conditions)}
                    GROUP BY action
                """, params)
        except psycopg.Error as exc:
            raise DatastoreError(f"audit log aggregation failed: {exc}") from exc
        return {row["action"]: row["count"] for row in rows}


class AdminLogRepository(BaseRepository):
    def append(self, order_id: str, action: str, *, performed_by: Optional[str], user_role: Optional[str]):
        return fetch_one(self.conn, """
            INSERT INTO admin_logs (order_id, action, performed_by, user_role)
            VALUES (%s, %s, %s, %s)
            RETURNING *
        """, (order_id, action, performed_by, user_role))
