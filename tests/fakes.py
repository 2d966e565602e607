"""In-memory stand-in for ``paint_queue.db.Database``.

Each ``transaction()`` works on a deep copy of the tables and only publishes
it on a clean exit, so rollback behaves like the real database.
"""
import copy
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone

from paint_queue.errors import DatastoreError, DuplicateEmployee, DuplicateOrder
from paint_queue.repositories.deleted import ARCHIVED_COLUMNS
from paint_queue.repositories.orders import INSERT_COLUMNS


def now():
    return datetime.now(timezone.utc)


def _next_id(tables):
    tables["last_id"] += 1
    return tables["last_id"]


def _in_range(ts, start, end):
    if start and ts.date() < start:
        return False
    if end and ts.date() > end:
        return False
    return True


class FakeRepository:
    def __init__(self, tables, failures):
        self.tables = tables
        self.failures = failures

    def _maybe_fail(self, name):
        if name in self.failures:
            raise DatastoreError(f"injected failure in {name}")


class FakeOrders(FakeRepository):
    @property
    def rows(self):
        return self.tables["orders"]

    def _live(self):
        return [r for r in self.rows.values() if not r["deleted"]]

    @staticmethod
    def _newest_first(rows, limit):
        return [dict(r) for r in sorted(rows, key=lambda r: r["start_time"], reverse=True)[:limit]]

    def get(self, transaction_id, *, include_deleted=False, for_update=False):
        row = self.rows.get(transaction_id)
        if row is None or (row["deleted"] and not include_deleted):
            return None
        return dict(row)

    def exists(self, transaction_id):
        return transaction_id in self.rows

    def insert(self, order):
        self._maybe_fail("orders.insert")
        if order["transaction_id"] in self.rows:
            raise DuplicateOrder()
        row = {c: order.get(c) for c in INSERT_COLUMNS}
        row.update(archived=False, deleted=False, start_time=now(), completed_at=None)
        self.rows[row["transaction_id"]] = row
        return dict(row)

    def apply_transition(self, transaction_id, *, status, colour_code, assigned_employee, note, po_type):
        self._maybe_fail("orders.apply_transition")
        row = self.rows[transaction_id]
        row.update(
            current_status=status,
            colour_code=colour_code,
            assigned_employee=assigned_employee,
            note=note,
            po_type=po_type,
        )
        return dict(row)

    def set_status(self, transaction_id, status, *, completed=False):
        row = self.rows[transaction_id]
        row["current_status"] = status
        if completed:
            row["completed_at"] = now()
        return dict(row)

    def mark_deleted(self, transaction_id):
        self._maybe_fail("orders.mark_deleted")
        row = self.rows[transaction_id]
        row["deleted"] = True
        return dict(row)

    def archive_stale(self, cutoff_days):
        cutoff = now() - timedelta(days=cutoff_days)
        count = 0
        for row in self._live():
            if row["current_status"] == "Waiting" and not row["archived"] and row["start_time"] < cutoff:
                row["archived"] = True
                count += 1
        return count

    def list_recent(self, limit):
        return self._newest_first([r for r in self._live() if not r["archived"]], limit)

    def list_active(self, limit):
        rows = [r for r in self._live() if not r["archived"] and r["current_status"] not in ("Ready", "Complete")]
        return self._newest_first(rows, limit)

    def list_by_status(self, statuses, limit):
        return self._newest_first([r for r in self._live() if r["current_status"] in statuses], limit)

    def list_archived(self, limit):
        return self._newest_first([r for r in self._live() if r["archived"]], limit)

    def search(self, q, sort_by, sort_order, limit):
        needle = q.lower()
        rows = [
            r for r in self._live()
            if needle in r["customer_name"].lower()
            or needle in r["client_contact"].lower()
            or needle in r["transaction_id"].lower()
        ]
        rows.sort(key=lambda r: r[sort_by], reverse=sort_order.lower() != "asc")
        return [dict(r) for r in rows[:limit]]

    def count_active(self):
        return sum(
            1 for r in self._live()
            if not r["archived"] and r["current_status"] in ("Waiting", "Mixing")
        )

    def has_duplicate(self, customer_name, client_contact, paint_type, category):
        return any(
            (r["customer_name"], r["client_contact"], r["paint_type"], r["category"])
            == (customer_name, client_contact, paint_type, category)
            for r in self._live()
        )

    def count_by(self, column, *, start=None, end=None, status=None, category=None):
        counts = {}
        for r in self._live():
            if not _in_range(r["start_time"], start, end):
                continue
            if status and r["current_status"] != status:
                continue
            if category and r["category"] != category:
                continue
            counts[r[column]] = counts.get(r[column], 0) + 1
        return counts


class FakeHistory(FakeRepository):
    def append(self, transaction_id, status):
        self._maybe_fail("history.append")
        row = {
            "history_id": _next_id(self.tables),
            "transaction_id": transaction_id,
            "status": status,
            "entered_at": now(),
        }
        self.tables["status_history"].append(row)
        return dict(row)

    def list_for_order(self, transaction_id):
        return [dict(r) for r in self.tables["status_history"] if r["transaction_id"] == transaction_id]


class FakeAudit(FakeRepository):
    def append(self, order_id, action, *, from_status=None, to_status=None, employee_name=None,
               user_role=None, colour_code=None, remarks=None):
        self._maybe_fail("audit.append")
        row = {
            "log_id": _next_id(self.tables),
            "order_id": order_id,
            "action": action,
            "from_status": from_status,
            "to_status": to_status,
            "employee_name": employee_name,
            "user_role": user_role,
            "colour_code": colour_code,
            "remarks": remarks,
            "timestamp": now(),
        }
        self.tables["audit_logs"].append(row)
        return dict(row)

    def _matching(self, start, end, status, order_id=None):
        for r in self.tables["audit_logs"]:
            if not _in_range(r["timestamp"], start, end):
                continue
            if status and r["to_status"] != status:
                continue
            if order_id and r["order_id"] != order_id:
                continue
            yield r

    def list(self, *, start=None, end=None, status=None, order_id=None, limit=100):
        rows = sorted(self._matching(start, end, status, order_id), key=lambda r: r["log_id"], reverse=True)
        return [dict(r) for r in rows[:limit]]

    def count_by_action(self, *, start=None, end=None, status=None):
        self._maybe_fail("audit.count_by_action")
        counts = {}
        for r in self._matching(start, end, status):
            counts[r["action"]] = counts.get(r["action"], 0) + 1
        return counts


class FakeDeleted(FakeRepository):
    def archive(self, order, *, reason, deleted_by):
        row = {c: order[c] for c in ARCHIVED_COLUMNS}
        row.update(note=reason, deleted_by=deleted_by, deleted_at=now())
        self.tables["deleted_orders"][row["transaction_id"]] = row
        return dict(row)

    def get(self, transaction_id):
        row = self.tables["deleted_orders"].get(transaction_id)
        return dict(row) if row else None

    def list(self, limit):
        rows = sorted(self.tables["deleted_orders"].values(), key=lambda r: r["start_time"], reverse=True)
        return [dict(r) for r in rows[:limit]]

    def count_by_status(self, *, start=None, end=None, status=None, category=None):
        counts = {}
        for r in self.tables["deleted_orders"].values():
            if not _in_range(r["start_time"], start, end):
                continue
            if status and r["current_status"] != status:
                continue
            if category and r["category"] != category:
                continue
            counts[r["current_status"]] = counts.get(r["current_status"], 0) + 1
        return counts


class FakeEmployees(FakeRepository):
    @property
    def rows(self):
        return self.tables["employees"]

    def list(self):
        return [dict(r) for r in sorted(self.rows.values(), key=lambda r: r["employee_name"])]

    def get_by_code(self, code):
        row = self.rows.get(code)
        return dict(row) if row else None

    def insert(self, code, name, role):
        if code in self.rows:
            raise DuplicateEmployee()
        row = {"employee_id": _next_id(self.tables), "employee_code": code, "employee_name": name, "role": role}
        self.rows[code] = row
        return dict(row)

    def update(self, code, *, new_code, name, role):
        row = self.rows.get(code)
        if row is None:
            return None
        if new_code != code and new_code in self.rows:
            raise DuplicateEmployee()
        del self.rows[code]
        row.update(employee_code=new_code, employee_name=name, role=role)
        self.rows[new_code] = row
        return dict(row)

    def delete(self, code):
        row = self.rows.pop(code, None)
        return dict(row) if row else None


class FakeAdminLog(FakeRepository):
    def append(self, order_id, action, *, performed_by, user_role):
        row = {
            "log_id": _next_id(self.tables),
            "order_id": order_id,
            "action": action,
            "performed_by": performed_by,
            "user_role": user_role,
            "timestamp": now(),
        }
        self.tables["admin_logs"].append(row)
        return dict(row)


class FakeUnitOfWork:
    def __init__(self, tables, failures):
        self.conn = None
        self.orders = FakeOrders(tables, failures)
        self.history = FakeHistory(tables, failures)
        self.audit = FakeAudit(tables, failures)
        self.deleted = FakeDeleted(tables, failures)
        self.employees = FakeEmployees(tables, failures)
        self.admin_log = FakeAdminLog(tables, failures)


class FakeDatabase:
    def __init__(self):
        self.tables = {
            "orders": {},
            "status_history": [],
            "audit_logs": [],
            "deleted_orders": {},
            "employees": {},
            "admin_logs": [],
            "last_id": 0,
        }
        self.failures = set()
        self.is_open = False
        self.commits = 0
        self.rollbacks = 0

    def open(self):
        self.is_open = True

    def close(self):
        self.is_open = False

    def ping(self):
        return True

    def fail_on(self, *names):
        self.failures.update(names)

    @contextmanager
    def connection(self):
        yield FakeUnitOfWork(copy.deepcopy(self.tables), self.failures)

    @contextmanager
    def transaction(self):
        working = copy.deepcopy(self.tables)
        try:
            yield FakeUnitOfWork(working, self.failures)
        except Exception:
            self.rollbacks += 1
            raise
        self.tables = working
        self.commits += 1

    # helpers for assertions

    def order(self, transaction_id):
        return self.tables["orders"].get(transaction_id)

    def history(self, transaction_id):
        return [r for r in self.tables["status_history"] if r["transaction_id"] == transaction_id]

    def audit(self, transaction_id):
        return [r for r in self.tables["audit_logs"] if r["order_id"] == transaction_id]
