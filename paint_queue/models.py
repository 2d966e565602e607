# paint_queue/models.py
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field


class OrderIn(BaseModel):
    transaction_id: Optional[str] = None
    customer_name: Optional[str] = None
    client_contact: Optional[str] = None
    paint_type: Optional[str] = None
    colour_code: Optional[str] = None  # "Pending" when omitted
    category: Optional[str] = None  # New Mix | Reorder Mix | Colour Code
    order_type: str = "Order"
    po_type: Optional[str] = None  # Nexa | Carvello, required for Paid orders
    paint_quantity: Optional[str] = None
    note: Optional[str] = None


class OrderOut(BaseModel):
    transaction_id: str
    customer_name: str
    client_contact: str
    paint_type: str
    colour_code: str
    category: str
    order_type: str
    po_type: Optional[str] = None
    paint_quantity: Optional[str] = None
    assigned_employee: Optional[str] = None
    current_status: str
    note: Optional[str] = None
    archived: bool = False
    deleted: bool = False
    start_time: datetime
    completed_at: Optional[datetime] = None


class DeletedOrderOut(BaseModel):
    transaction_id: str
    customer_name: Optional[str] = None
    client_contact: Optional[str] = None
    paint_type: Optional[str] = None
    colour_code: Optional[str] = None
    category: Optional[str] = None
    order_type: Optional[str] = None
    po_type: Optional[str] = None
    paint_quantity: Optional[str] = None
    assigned_employee: Optional[str] = None
    current_status: Optional[str] = None
    note: Optional[str] = None
    start_time: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    deleted_by: Optional[str] = None
    deleted_at: datetime


class StatusUpdate(BaseModel):
    # validated by OrderTransitionService, in rule order
    current_status: Optional[str] = None
    assigned_employee: Optional[str] = None
    colour_code: Optional[str] = None
    note: Optional[str] = None
    user_role: Optional[str] = None
    old_status: Optional[str] = None
    po_type: Optional[str] = None


class CancelRequest(BaseModel):
    reason: Optional[str] = None
    employee_name: Optional[str] = None
    user_role: Optional[str] = None


class AdminAction(BaseModel):
    user_role: Optional[str] = None
    employee_name: Optional[str] = None


class StaffIn(BaseModel):
    employee_code: str = Field(min_length=1)
    employee_name: str = Field(min_length=1)
    role: Optional[str] = None


class StaffOut(BaseModel):
    employee_id: int
    employee_code: str
    employee_name: str
    role: Optional[str] = None


class StatusHistoryOut(BaseModel):
    history_id: int
    transaction_id: str
    status: str
    entered_at: datetime


class AuditLogOut(BaseModel):
    log_id: int
    order_id: str
    action: str
    from_status: Optional[str] = None
    to_status: Optional[str] = None
    employee_name: Optional[str] = None
    user_role: Optional[str] = None
    colour_code: Optional[str] = None
    remarks: Optional[str] = None
    timestamp: datetime


class ReportOut(BaseModel):
    statusSummary: Dict[str, int]
    categorySummary: Dict[str, int]
    historySummary: Dict[str, int]
    deletedSummary: Dict[str, int]


class ArchiveResult(BaseModel):
    archived: int
    cutoff_days: int
