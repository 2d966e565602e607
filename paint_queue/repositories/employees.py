# paint_queue/repositories/employees.py
from typing import List, Optional

from psycopg.errors import UniqueViolation

from ..errors import DuplicateEmployee
from .base import BaseRepository, fetch_all, fetch_one


class EmployeeRepository(BaseRepository):
    def list(self) -> List[dict]:
        return fetch_all(self.conn, "SELECT * FROM employees ORDER BY employee_name")

    def get_by_code(self, code: str):
        return fetch_one(self.conn, "SELECT * FROM employees WHERE employee_code = %s", (code,))

    def insert(self, code: str, name: str, role: Optional[str]):
        try:
            return fetch_one(self.conn, """
                INSERT INTO employees (employee_code, employee_name, role)
                VALUES (%s, %s, %s)
                RETURNING *
            """, (code, name, role))
        except UniqueViolation as exc:
            raise DuplicateEmployee() from exc

    def update(self, code: str, *, new_code: str, name: str, role: Optional[str]):
        try:
            return fetch_one(self.conn, """
                UPDATE employees
                SET employee_code = %s, employee_name = %s, role = %s
                WHERE employee_code = %s
                RETURNING *
            """, (new_code, name, role, code))
        except UniqueViolation as exc:
            raise DuplicateEmployee() from exc

    def delete(self, code: str):
        return fetch_one(self.conn, "DELETE FROM employees WHERE employee_code = %s RETURNING *", (code,))
