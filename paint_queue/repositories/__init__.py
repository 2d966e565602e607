# paint_queue/repositories/__init__.py
from .audit import AdminLogRepository, AuditLogRepository
from .deleted import DeletedOrderRepository
from .employees import EmployeeRepository
from .history import StatusHistoryRepository
from .orders import OrderRepository


class UnitOfWork:
    """Repositories bound to one pooled connection, i.e. one database transaction."""

    def __init__(self, conn) -> None:
        self.conn = conn
        self.orders = OrderRepository(conn)
        self.history = StatusHistoryRepository(conn)
        self.audit = AuditLogRepository(conn)
        self.deleted = DeletedOrderRepository(conn)
        self.employees = EmployeeRepository(conn)
        self.admin_log = AdminLogRepository(conn)


__all__ = [
    "AdminLogRepository",
    "AuditLogRepository",
    "DeletedOrderRepository",
    "EmployeeRepository",
    "OrderRepository",
    "StatusHistoryRepository",
    "UnitOfWork",
]
