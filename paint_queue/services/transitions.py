# paint_queue/services/transitions.py
"""Order status transitions and their audit trail.

Every operation here runs inside one ``Database.transaction()``: the order
row, its status history and the audit log are written together or not at all.
Input checks run before the transaction is opened, so a rejected request
never touches the database.
"""
from typing import Optional

from ..constants import (
    ADMIN_ROLE,
    CANCELLABLE_STATUSES,
    NOT_APPLICABLE,
    PENDING_COLOUR,
    VALID_STATUSES,
    AuditAction,
    OrderStatus,
)
from ..errors import (
    Forbidden,
    InvalidStateForDeletion,
    InvalidStatus,
    InvalidTransition,
    MissingAssignee,
    MissingColourCode,
    MissingReason,
    OrderNotFound,
)
from ..logging import get_logger

logger = get_logger(__name__)


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _remarks(status_changed: bool, note: Optional[str], previous_note: Optional[str]) -> str:
    if not status_changed and note is not None and note != previous_note:
        return f"Note updated to: {note}"
    if status_changed:
        return f"Status updated with note: {note}" if note else "Status updated"
    return "Note updated via UI"


class OrderTransitionService:
    def __init__(self, db, *, admin_log_enabled: bool = False):
        self.db = db
        self.admin_log_enabled = admin_log_enabled

    def update_status(
        self,
        transaction_id: str,
        new_status: Optional[str],
        assigned_employee: Optional[str] = None,
        colour_code: Optional[str] = None,
        note: Optional[str] = None,
        user_role: Optional[str] = None,
        old_status: Optional[str] = None,
        po_type: Optional[str] = None,
    ) -> dict:
        if new_status not in VALID_STATUSES:
            raise InvalidStatus(f"Invalid status value: {new_status}")
        if new_status == OrderStatus.READY and _blank(colour_code):
            raise MissingColourCode()
        if new_status != OrderStatus.WAITING and _blank(assigned_employee):
            raise MissingAssignee()

        with self.db.transaction() as uow:
            order = uow.orders.get(transaction_id, for_update=True)
            if order is None:
                raise OrderNotFound()

            previous = order["current_status"]
            if new_status == OrderStatus.COMPLETE:
                if user_role != ADMIN_ROLE:
                    raise Forbidden("Only Admin users can complete orders.")
                if previous not in (OrderStatus.READY, OrderStatus.COMPLETE):
                    raise InvalidTransition("Only Ready orders can be completed.")
            elif previous == OrderStatus.COMPLETE:
                raise InvalidTransition("Completed orders cannot change status.")

            if old_status is not None and old_status != previous:
                logger.warning(
                    "stale_old_status",
                    transaction_id=transaction_id,
                    client_old_status=old_status,
                    stored_status=previous,
                )

            status_changed = new_status != previous
            updated = uow.orders.apply_transition(
                transaction_id,
                status=new_status,
                colour_code=colour_code if not _blank(colour_code) else PENDING_COLOUR,
                assigned_employee=assigned_employee,
                note=note if note is not None else order["note"],
                po_type=po_type if po_type is not None else order["po_type"],
            )

            if status_changed:
                uow.history.append(transaction_id, new_status)

            uow.audit.append(
                transaction_id,
                AuditAction.STATUS_CHANGED if status_changed else AuditAction.NOTE_UPDATED,
                from_status=previous if status_changed else NOT_APPLICABLE,
                to_status=new_status if status_changed else NOT_APPLICABLE,
                employee_name=assigned_employee,
                user_role=user_role,
                colour_code=updated["colour_code"],
                remarks=_remarks(status_changed, note, order["note"]),
            )

        logger.info(
            "order_status_updated",
            transaction_id=transaction_id,
            from_status=previous,
            to_status=new_status,
            assigned_employee=assigned_employee,
        )
        return updated

    def cancel(
        self,
        transaction_id: str,
        reason: Optional[str],
        actor_name: Optional[str] = None,
        actor_role: Optional[str] = None,
    ) -> dict:
        """Soft-delete an order: archive a copy, flag the live row, audit it."""
        if actor_role != ADMIN_ROLE:
            raise Forbidden("Only Admin users can delete orders.")
        if _blank(reason):
            raise MissingReason()

        with self.db.transaction() as uow:
            order = uow.orders.get(transaction_id, for_update=True)
            if order is None:
                raise OrderNotFound()
            if order["current_status"] not in CANCELLABLE_STATUSES:
                raise InvalidStateForDeletion(
                    f"Cannot delete an order with status {order['current_status']}."
                )

            uow.deleted.archive(order, reason=reason, deleted_by=actor_name)
            updated = uow.orders.mark_deleted(transaction_id)
            uow.audit.append(
                transaction_id,
                AuditAction.DELETED,
                from_status=order["current_status"],
                to_status=NOT_APPLICABLE,
                employee_name=actor_name,
                user_role=actor_role,
                colour_code=order["colour_code"],
                remarks=reason,
            )

        logger.info("order_deleted", transaction_id=transaction_id, deleted_by=actor_name)
        return updated

    def mark_complete(
        self,
        transaction_id: str,
        actor_role: Optional[str],
        actor_name: Optional[str] = None,
    ) -> dict:
        if actor_role != ADMIN_ROLE:
            raise Forbidden("Only Admin users can mark orders complete.")

        with self.db.transaction() as uow:
            order = uow.orders.get(transaction_id, for_update=True)
            if order is None:
                raise OrderNotFound()
            if order["current_status"] != OrderStatus.READY:
                raise InvalidTransition(
                    f"Only Ready orders can be marked complete (status is {order['current_status']})."
                )

            updated = uow.orders.set_status(transaction_id, OrderStatus.COMPLETE, completed=True)
            uow.history.append(transaction_id, OrderStatus.COMPLETE)
            uow.audit.append(
                transaction_id,
                AuditAction.STATUS_CHANGED,
                from_status=OrderStatus.READY,
                to_status=OrderStatus.COMPLETE,
                employee_name=actor_name,
                user_role=actor_role,
                colour_code=order["colour_code"],
                remarks="Marked complete by admin",
            )
            if self.admin_log_enabled:
                uow.admin_log.append(
                    transaction_id,
                    AuditAction.MARKED_COMPLETE,
                    performed_by=actor_name,
                    user_role=actor_role,
                )

        logger.info("order_completed", transaction_id=transaction_id, completed_by=actor_name)
        return updated

    def archive_stale(self, cutoff_days: int = 21) -> int:
        with self.db.transaction() as uow:
            count = uow.orders.archive_stale(cutoff_days)
        logger.info("stale_orders_archived", count=count, cutoff_days=cutoff_days)
        return count
