# paint_queue/app.py
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .db import Database
from .errors import AppError, DuplicateOrder
from .logging import configure_logging, get_logger
from .models import (
    AdminAction,
    ArchiveResult,
    AuditLogOut,
    CancelRequest,
    DeletedOrderOut,
    OrderIn,
    OrderOut,
    ReportOut,
    StaffIn,
    StaffOut,
    StatusHistoryOut,
    StatusUpdate,
)
from .services import OrderService, OrderTransitionService, ReportingService, StaffService

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, db=None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="Paint Queue API", version="1.0.0")
    app.state.settings = settings
    app.state.db = db if db is not None else Database(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
        allow_credentials=True,
    )

    @app.on_event("startup")
    def startup():
        app.state.db.open()

    @app.on_event("shutdown")
    def shutdown():
        app.state.db.close()

    register_error_handlers(app)
    app.include_router(router_for_orders())
    app.include_router(router_for_staff())
    app.include_router(router_for_reports())
    app.add_api_route("/health/db", health_db, methods=["GET"])
    return app


# Errors

def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    def handle_app_error(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    def handle_request_validation(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg', 'invalid request')}" if location else "Invalid request"
        return JSONResponse(status_code=400, content={"error": message})

    @app.exception_handler(Exception)
    def handle_unexpected(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Dependencies

def get_db(request: Request):
    return request.app.state.db


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_orders(db=Depends(get_db)) -> OrderService:
    return OrderService(db)


def get_transitions(db=Depends(get_db), settings: Settings = Depends(get_settings)) -> OrderTransitionService:
    return OrderTransitionService(db, admin_log_enabled=settings.admin_log_enabled)


def get_staff(db=Depends(get_db)) -> StaffService:
    return StaffService(db)


def get_reporting(db=Depends(get_db)) -> ReportingService:
    return ReportingService(db)


# Health

def health_db(db=Depends(get_db)):
    try:
        return {"db_ok": db.ping()}
    except Exception as e:
        logger.error("db_health_failed", error=str(e))
        return JSONResponse(status_code=500, content={"db_ok": False, "error": str(e)})


# Orders

def router_for_orders():
    router = APIRouter(prefix="/api")

    @router.get("/orders", response_model=List[OrderOut])
    def list_orders(limit: int = Query(100, ge=1, le=500), orders: OrderService = Depends(get_orders)):
        return orders.list_recent(limit)

    @router.get("/orders/active", response_model=List[OrderOut])
    def list_active_orders(limit: int = Query(100, ge=1, le=500), orders: OrderService = Depends(get_orders)):
        return orders.list_active(limit)

    @router.get("/orders/archived", response_model=List[OrderOut])
    def list_archived_orders(limit: int = Query(100, ge=1, le=500), orders: OrderService = Depends(get_orders)):
        return orders.list_archived(limit)

    @router.get("/orders/deleted", response_model=List[DeletedOrderOut])
    def list_deleted_orders(limit: int = Query(100, ge=1, le=500), orders: OrderService = Depends(get_orders)):
        return orders.list_deleted(limit)

    @router.get("/orders/complete", response_model=List[OrderOut])
    def list_complete_orders(limit: int = Query(100, ge=1, le=500), orders: OrderService = Depends(get_orders)):
        return orders.list_complete(limit)

    @router.get("/orders/admin", response_model=List[OrderOut])
    def list_admin_orders(limit: int = Query(100, ge=1, le=500), orders: OrderService = Depends(get_orders)):
        return orders.list_awaiting_admin(limit)

    @router.get("/orders/search", response_model=List[OrderOut])
    def search_orders(
        q: Optional[str] = None,
        sort_by: str = Query("start_time", alias="sortBy"),
        sort_order: str = Query("desc", alias="sortOrder"),
        limit: int = Query(50, ge=1, le=100),
        orders: OrderService = Depends(get_orders),
    ):
        return orders.search(q, sort_by, sort_order, limit)

    @router.get("/orders/report", response_model=ReportOut)
    def order_report(
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        include_deleted: bool = False,
        reporting: ReportingService = Depends(get_reporting),
    ):
        return reporting.report(start_date, end_date, status, category, include_deleted)

    @router.get("/orders/check-id/{transaction_id}")
    def check_order_id(transaction_id: str, orders: OrderService = Depends(get_orders)):
        if orders.id_exists(transaction_id):
            raise DuplicateOrder(status_code=409)
        return {"exists": False}

    @router.get("/orders/{transaction_id}", response_model=OrderOut)
    def get_order(transaction_id: str, orders: OrderService = Depends(get_orders)):
        return orders.get(transaction_id)

    @router.get("/orders/{transaction_id}/history", response_model=List[StatusHistoryOut])
    def order_history(transaction_id: str, orders: OrderService = Depends(get_orders)):
        return orders.history(transaction_id)

    @router.post("/orders", response_model=OrderOut, status_code=201)
    def create_order(body: OrderIn, orders: OrderService = Depends(get_orders)):
        return orders.create_order(body.model_dump())

    @router.put("/orders/archive-old", response_model=ArchiveResult)
    def archive_old_orders(
        cutoff_days: Optional[int] = Query(None, ge=1),
        transitions: OrderTransitionService = Depends(get_transitions),
        settings: Settings = Depends(get_settings),
    ):
        days = cutoff_days or settings.archive_cutoff_days
        return {"archived": transitions.archive_stale(days), "cutoff_days": days}

    @router.put("/orders/mark-paid/{transaction_id}", response_model=OrderOut)
    def mark_order_paid(
        transaction_id: str,
        body: AdminAction,
        transitions: OrderTransitionService = Depends(get_transitions),
    ):
        return transitions.mark_complete(transaction_id, body.user_role, body.employee_name)

    @router.put("/orders/{transaction_id}", response_model=OrderOut)
    def update_order(
        transaction_id: str,
        body: StatusUpdate,
        transitions: OrderTransitionService = Depends(get_transitions),
    ):
        return transitions.update_status(
            transaction_id,
            body.current_status,
            assigned_employee=body.assigned_employee,
            colour_code=body.colour_code,
            note=body.note,
            user_role=body.user_role,
            old_status=body.old_status,
            po_type=body.po_type,
        )

    @router.put("/orders/{transaction_id}/cancel", response_model=OrderOut)
    def cancel_order(
        transaction_id: str,
        body: Optional[CancelRequest] = None,
        transitions: OrderTransitionService = Depends(get_transitions),
    ):
        body = body or CancelRequest()
        return transitions.cancel(transaction_id, body.reason, body.employee_name, body.user_role)

    @router.delete("/orders/{transaction_id}", response_model=OrderOut)
    def delete_order(
        transaction_id: str,
        body: Optional[CancelRequest] = None,
        transitions: OrderTransitionService = Depends(get_transitions),
    ):
        body = body or CancelRequest()
        return transitions.cancel(transaction_id, body.reason, body.employee_name, body.user_role)

    # Tracking helpers used by the customer-facing page

    @router.get("/check-duplicate")
    def check_duplicate(
        customer_name: str,
        client_contact: str,
        paint_type: str,
        category: str,
        orders: OrderService = Depends(get_orders),
    ):
        return {"exists": orders.has_duplicate(customer_name, client_contact, paint_type, category)}

    @router.get("/order-status/{transaction_id}")
    def order_status(transaction_id: str, orders: OrderService = Depends(get_orders)):
        return orders.track(transaction_id)

    @router.get("/active-orders-count")
    def active_orders_count(orders: OrderService = Depends(get_orders)):
        return {"activeOrders": orders.active_count()}

    return router


# Staff

def router_for_staff():
    router = APIRouter(prefix="/api")

    @router.get("/staff", response_model=List[StaffOut])
    def list_staff(staff: StaffService = Depends(get_staff)):
        return staff.list()

    @router.post("/staff", response_model=StaffOut, status_code=201)
    def add_staff(body: StaffIn, staff: StaffService = Depends(get_staff)):
        return staff.create(body.employee_code, body.employee_name, body.role)

    @router.put("/staff/{code}", response_model=StaffOut)
    def update_staff(code: str, body: StaffIn, staff: StaffService = Depends(get_staff)):
        return staff.update(code, new_code=body.employee_code, name=body.employee_name, role=body.role)

    @router.delete("/staff/{code}", response_model=StaffOut)
    def delete_staff(code: str, staff: StaffService = Depends(get_staff)):
        return staff.delete(code)

    @router.get("/employees", response_model=StaffOut)
    def lookup_employee(code: Optional[str] = None, staff: StaffService = Depends(get_staff)):
        return staff.lookup(code)

    return router


# Reports

def router_for_reports():
    router = APIRouter(prefix="/api")

    @router.get("/audit_logs", response_model=List[AuditLogOut])
    def list_audit_logs(
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        status: Optional[str] = None,
        order_id: Optional[str] = None,
        reporting: ReportingService = Depends(get_reporting),
    ):
        return reporting.audit_logs(start_date, end_date, status, order_id)

    return router
