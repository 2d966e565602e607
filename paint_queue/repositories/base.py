# paint_queue/repositories/base.py
from datetime import date
from typing import Any, List, Optional, Sequence, Tuple

from psycopg.rows import dict_row


def fetch_all(conn, sql, params=None):
    with conn.cursor(row_factory=dict_row) as cur:
        cur.execute(sql, params or ())
        return cur.fetchall()


def fetch_one(conn, sql, params=None):
    with conn.cursor(row_factory=dict_row) as cur:
        cur.execute(sql, params or ())
        return cur.fetchone()


def execute(conn, sql, params=None) -> int:
    with conn.cursor() as cur:
        cur.execute(sql, params or ())
        return cur.rowcount


def date_range(column: str, start: Optional[date], end: Optional[date]) -> Tuple[List[str], List[Any]]:
    """WHERE fragments bounding ``column`` to [start, end] inclusive of the whole end day."""
    conditions: List[str] = []
    params: List[Any] = []
    if start:
        conditions.append(f"{column} >= %s::date")
        params.append(start)
    if end:
        conditions.append(f"{column} < %s::date + INTERVAL '1 day'")
        params.append(end)
    return conditions, params


def where(conditions: Sequence[str]) -> str:
    return f"WHERE {' AND '.join(conditions)}" if conditions else ""


def like_pattern(text: str) -> str:
    """Substring pattern for ILIKE ... ESCAPE '\\' that matches ``text`` literally."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class BaseRepository:
    def __init__(self, conn) -> None:
        self.conn = conn
