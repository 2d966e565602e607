# paint_queue/services/orders.py
from typing import Any, Dict, List, Optional

from ..constants import (
    INITIAL_STATUS,
    NOT_APPLICABLE,
    PAID_ORDER_TYPE,
    PENDING_COLOUR,
    PO_TYPES,
    AuditAction,
    OrderStatus,
)
from ..errors import InvalidPoType, MissingField, OrderNotFound, ValidationError
from ..logging import get_logger
from ..repositories.orders import SORTABLE_COLUMNS

logger = get_logger(__name__)

REQUIRED_FIELDS = ("transaction_id", "customer_name", "client_contact", "paint_type", "category")
SEARCH_LIMIT_MAX = 100


class OrderService:
    """Order intake and the read-only order listings."""

    def __init__(self, db):
        self.db = db

    def create_order(self, data: Dict[str, Any]) -> dict:
        for name in REQUIRED_FIELDS:
            value = data.get(name)
            if value is None or not str(value).strip():
                raise MissingField(f"Missing required field: {name}")
        if data.get("order_type") == PAID_ORDER_TYPE and data.get("po_type") not in PO_TYPES:
            raise InvalidPoType()

        order = dict(data)
        order["transaction_id"] = str(order["transaction_id"]).strip()
        order["colour_code"] = order.get("colour_code") or PENDING_COLOUR
        order["order_type"] = order.get("order_type") or "Order"
        order["current_status"] = INITIAL_STATUS
        order["assigned_employee"] = None

        with self.db.transaction() as uow:
            row = uow.orders.insert(order)
            uow.history.append(row["transaction_id"], INITIAL_STATUS)
            uow.audit.append(
                row["transaction_id"],
                AuditAction.CREATED,
                from_status=NOT_APPLICABLE,
                to_status=INITIAL_STATUS,
                colour_code=row["colour_code"],
                remarks="Order created",
            )

        logger.info("order_created", transaction_id=row["transaction_id"], category=row["category"])
        return row

    def get(self, transaction_id: str) -> dict:
        with self.db.connection() as uow:
            row = uow.orders.get(transaction_id)
        if row is None:
            raise OrderNotFound()
        return row

    def id_exists(self, transaction_id: str) -> bool:
        """True for any id ever used, deleted orders included."""
        with self.db.connection() as uow:
            return uow.orders.exists(transaction_id.strip())

    def has_duplicate(self, customer_name: str, client_contact: str, paint_type: str, category: str) -> bool:
        with self.db.connection() as uow:
            return uow.orders.has_duplicate(customer_name, client_contact, paint_type, category)

    def track(self, transaction_id: str) -> dict:
        order = self.get(transaction_id)
        return {"status": order["current_status"], "start_time": order["start_time"]}

    def active_count(self) -> int:
        with self.db.connection() as uow:
            return uow.orders.count_active()

    def history(self, transaction_id: str) -> List[dict]:
        with self.db.connection() as uow:
            if uow.orders.get(transaction_id, include_deleted=True) is None:
                raise OrderNotFound()
            return uow.history.list_for_order(transaction_id)

    # Listings

    def list_recent(self, limit: int) -> List[dict]:
        with self.db.connection() as uow:
            return uow.orders.list_recent(limit)

    def list_active(self, limit: int) -> List[dict]:
        with self.db.connection() as uow:
            return uow.orders.list_active(limit)

    def list_complete(self, limit: int) -> List[dict]:
        with self.db.connection() as uow:
            return uow.orders.list_by_status([OrderStatus.COMPLETE], limit)

    def list_awaiting_admin(self, limit: int) -> List[dict]:
        with self.db.connection() as uow:
            return uow.orders.list_by_status([OrderStatus.READY], limit)

    def list_archived(self, limit: int) -> List[dict]:
        with self.db.connection() as uow:
            return uow.orders.list_archived(limit)

    def list_deleted(self, limit: int) -> List[dict]:
        with self.db.connection() as uow:
            return uow.deleted.list(limit)

    def search(
        self,
        q: Optional[str],
        sort_by: str = "start_time",
        sort_order: str = "desc",
        limit: int = 50,
    ) -> List[dict]:
        if sort_by not in SORTABLE_COLUMNS:
            raise ValidationError(f"Invalid sortBy column. Use one of: {', '.join(SORTABLE_COLUMNS)}")
        if sort_order.lower() not in ("asc", "desc"):
            raise ValidationError("Invalid sortOrder. Use asc or desc.")
        limit = max(1, min(limit, SEARCH_LIMIT_MAX))
        with self.db.connection() as uow:
            return uow.orders.search((q or "").strip(), sort_by, sort_order, limit)
