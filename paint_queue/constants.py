# paint_queue/constants.py


class OrderStatus:
    WAITING = "Waiting"
    MIXING = "Mixing"
    SPRAYING = "Spraying"
    RE_MIXING = "Re-Mixing"
    READY = "Ready"
    COMPLETE = "Complete"


VALID_STATUSES = (
    OrderStatus.WAITING,
    OrderStatus.MIXING,
    OrderStatus.SPRAYING,
    OrderStatus.RE_MIXING,
    OrderStatus.READY,
    OrderStatus.COMPLETE,
)

INITIAL_STATUS = OrderStatus.WAITING

# orders in these states can still be cancelled
CANCELLABLE_STATUSES = (
    OrderStatus.WAITING,
    OrderStatus.MIXING,
    OrderStatus.SPRAYING,
    OrderStatus.RE_MIXING,
)

# excluded from the active dashboard queue
INACTIVE_STATUSES = (OrderStatus.READY, OrderStatus.COMPLETE)

# counted by /api/active-orders-count
IN_PROGRESS_STATUSES = (OrderStatus.WAITING, OrderStatus.MIXING)


class AuditAction:
    CREATED = "Order Created"
    STATUS_CHANGED = "Status Changed"
    NOTE_UPDATED = "Note Updated"
    DELETED = "Order Deleted"
    MARKED_COMPLETE = "Marked Complete"


ADMIN_ROLE = "Admin"
NOT_APPLICABLE = "N/A"
PENDING_COLOUR = "Pending"

PAID_ORDER_TYPE = "Paid"
PO_TYPES = ("Nexa", "Carvello")
