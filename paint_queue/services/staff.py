# paint_queue/services/staff.py
from typing import List, Optional

from ..errors import EmployeeNotFound, ValidationError
from ..logging import get_logger

logger = get_logger(__name__)


def _required(code: Optional[str], name: Optional[str]):
    code, name = (code or "").strip(), (name or "").strip()
    if not code:
        raise ValidationError("Employee code is required.")
    if not name:
        raise ValidationError("Employee name is required.")
    return code, name


class StaffService:
    def __init__(self, db):
        self.db = db

    def list(self) -> List[dict]:
        with self.db.connection() as uow:
            return uow.employees.list()

    def lookup(self, code: Optional[str]) -> dict:
        # codes are trimmed but compared case-sensitively
        code = (code or "").strip()
        if not code:
            raise ValidationError("Employee code is required.")
        with self.db.connection() as uow:
            row = uow.employees.get_by_code(code)
        if row is None:
            raise EmployeeNotFound()
        return row

    def create(self, code: str, name: str, role: Optional[str]) -> dict:
        code, name = _required(code, name)
        with self.db.transaction() as uow:
            row = uow.employees.insert(code, name, role)
        logger.info("employee_created", employee_code=row["employee_code"], role=role)
        return row

    def update(self, code: str, *, new_code: str, name: str, role: Optional[str]) -> dict:
        new_code, name = _required(new_code, name)
        with self.db.transaction() as uow:
            row = uow.employees.update(code, new_code=new_code, name=name, role=role)
            if row is None:
                raise EmployeeNotFound()
        logger.info("employee_updated", employee_code=code, new_code=row["employee_code"])
        return row

    def delete(self, code: str) -> dict:
        with self.db.transaction() as uow:
            row = uow.employees.delete(code)
            if row is None:
                raise EmployeeNotFound()
        logger.info("employee_deleted", employee_code=code)
        return row
