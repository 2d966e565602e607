# paint_queue/services/reporting.py
import re
from datetime import date
from typing import Dict, List, Optional, Tuple

from ..constants import VALID_STATUSES
from ..errors import DatastoreError, InvalidDate, InvalidDateRange, InvalidStatus
from ..logging import get_logger

logger = get_logger(__name__)

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
ALL = "All"
AUDIT_LOG_LIMIT = 100


def parse_date(value: Optional[str], name: str) -> Optional[date]:
    if not value:
        return None
    if not DATE_RE.match(value):
        raise InvalidDate(f"Invalid {name} format. Use YYYY-MM-DD.")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDate(f"Invalid {name}: {value}") from exc


def parse_range(start_date: Optional[str], end_date: Optional[str]) -> Tuple[Optional[date], Optional[date]]:
    start = parse_date(start_date, "start_date")
    end = parse_date(end_date, "end_date")
    if start and end and start > end:
        raise InvalidDateRange()
    return start, end


def parse_status(status: Optional[str]) -> Optional[str]:
    """None means no status filter ("All" or omitted)."""
    if not status or status == ALL:
        return None
    if status not in VALID_STATUSES:
        raise InvalidStatus()
    return status


class ReportingService:
    """Read-only summaries over orders, deleted orders and the audit log."""

    def __init__(self, db):
        self.db = db

    def report(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        include_deleted: bool = False,
    ) -> Dict[str, Dict[str, int]]:
        start, end = parse_range(start_date, end_date)
        status = parse_status(status)
        category = None if category in (None, "", ALL) else category

        with self.db.connection() as uow:
            status_summary = uow.orders.count_by(
                "current_status", start=start, end=end, status=status, category=category
            )
            category_summary = uow.orders.count_by(
                "category", start=start, end=end, status=status, category=category
            )
            deleted_summary = {}
            if include_deleted:
                deleted_summary = uow.deleted.count_by_status(
                    start=start, end=end, status=status, category=category
                )
            try:
                history_summary = uow.audit.count_by_action(start=start, end=end, status=status)
            except DatastoreError as exc:
                logger.warning("audit_summary_unavailable", error=exc.message)
                history_summary = {}

        return {
            "statusSummary": status_summary,
            "categorySummary": category_summary,
            "historySummary": history_summary,
            "deletedSummary": deleted_summary,
        }

    def audit_logs(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        status: Optional[str] = None,
        order_id: Optional[str] = None,
    ) -> List[dict]:
        start, end = parse_range(start_date, end_date)
        status = parse_status(status)
        with self.db.connection() as uow:
            return uow.audit.list(start=start, end=end, status=status, order_id=order_id, limit=AUDIT_LOG_LIMIT)
