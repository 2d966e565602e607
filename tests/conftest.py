import pytest
from fastapi.testclient import TestClient

from paint_queue.app import create_app
from paint_queue.config import Settings
from paint_queue.services import OrderService, OrderTransitionService, ReportingService, StaffService

from .fakes import FakeDatabase


@pytest.fixture()
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def orders(db) -> OrderService:
    return OrderService(db)


@pytest.fixture()
def transitions(db) -> OrderTransitionService:
    return OrderTransitionService(db)


@pytest.fixture()
def reporting(db) -> ReportingService:
    return ReportingService(db)


@pytest.fixture()
def staff(db) -> StaffService:
    return StaffService(db)


@pytest.fixture()
def new_order(orders):
    def _create(transaction_id="TX-001", **overrides):
        data = {
            "transaction_id": transaction_id,
            "customer_name": "Jane Panel",
            "client_contact": "0821234567",
            "paint_type": "Base Coat",
            "category": "New Mix",
            "order_type": "Order",
            "paint_quantity": "1L",
        }
        data.update(overrides)
        return orders.create_order(data)

    return _create


@pytest.fixture()
def settings() -> Settings:
    return Settings(cors_origins=["http://localhost:3000"], admin_log_enabled=True)


@pytest.fixture()
def client(db, settings):
    app = create_app(settings, db=db)
    with TestClient(app) as test_client:
        yield test_client
