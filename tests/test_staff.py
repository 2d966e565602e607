import pytest

from paint_queue.errors import DuplicateEmployee, EmployeeNotFound, ValidationError


def test_staff_crud(staff) -> None:
    staff.create("E01", "Zola", "Operator")
    staff.create("E02", "Adam", "Admin")

    assert [row["employee_name"] for row in staff.list()] == ["Adam", "Zola"]

    updated = staff.update("E01", new_code="E03", name="Zola M", role="Admin")
    assert updated["employee_code"] == "E03"
    assert staff.lookup("E03")["employee_name"] == "Zola M"

    staff.delete("E03")
    with pytest.raises(EmployeeNotFound):
        staff.lookup("E03")


def test_duplicate_employee_code(staff) -> None:
    staff.create("E01", "Zola", "Operator")
    with pytest.raises(DuplicateEmployee):
        staff.create("E01", "Other", None)


def test_lookup_trims_but_keeps_case(staff) -> None:
    staff.create("Ab12", "Zola", "Operator")

    assert staff.lookup("  Ab12 ")["employee_name"] == "Zola"
    with pytest.raises(EmployeeNotFound):
        staff.lookup("ab12")
    with pytest.raises(ValidationError):
        staff.lookup("   ")


def test_update_and_delete_missing(staff) -> None:
    with pytest.raises(EmployeeNotFound):
        staff.update("NOPE", new_code="NOPE", name="x", role=None)
    with pytest.raises(EmployeeNotFound):
        staff.delete("NOPE")


def test_blank_code_or_name_rejected_after_trimming(staff) -> None:
    with pytest.raises(ValidationError):
        staff.create("  ", "Zola", None)
    with pytest.raises(ValidationError):
        staff.create("E01", "   ", None)

    staff.create(" E01 ", " Zola ", None)
    with pytest.raises(ValidationError):
        staff.update("E01", new_code=" ", name="Zola", role=None)
    assert staff.lookup("E01")["employee_name"] == "Zola"


def test_whitespace_only_staff_body_is_400(client) -> None:
    response = client.post("/api/staff", json={"employee_code": "  ", "employee_name": "   "})

    assert response.status_code == 400
    assert response.json() == {"error": "Employee code is required."}
    assert client.get("/api/staff").json() == []
