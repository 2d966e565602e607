# paint_queue/services/__init__.py
from .orders import OrderService
from .reporting import ReportingService
from .staff import StaffService
from .transitions import OrderTransitionService

__all__ = ["OrderService", "OrderTransitionService", "ReportingService", "StaffService"]
