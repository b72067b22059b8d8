"""Employee Routes — end-to-end through the FastAPI app with an in-memory database.

Invariants:
    - Success bodies: {success: true, data} (201 on create) or {success: true, message} on delete
    - Failure bodies: {success: false, error}; status from the error kind table
    - List endpoints never expose salary; detail responses include id and salary text
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

import employee_api.infrastructure.database as db_module
from employee_api.infrastructure.database import close_db, init_db
from employee_api.main import app
from employee_api.models.employee import Employee
from employee_api.api.routes.employees import get_employee_service


async def _create(client, payload) -> dict:
    res = await client.post("/employees", json=payload)
    assert res.status_code == 201, res.text
    return res.json()["data"]


# --- POST /employees ------------------------------------------------------------

async def test_create_returns_201_with_detail_projection(client, valid_payload):
    res = await client.post("/employees", json=valid_payload)

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    data = body["data"]
    assert data["email"] == "john@ex.com"
    assert data["salary"] == "75000.00"
    assert isinstance(data["id"], int) and data["id"] > 0
    assert data["hireDate"].startswith("2024-01-15")
    assert {"createdAt", "updatedAt"} <= set(data)
    assert "error" not in body


async def test_create_with_invalid_body_returns_400(client):
    res = await client.post("/employees", json={"name": "Only Name"})

    assert res.status_code == 400
    assert res.json() == {
        "success": False,
        "error": "Email is required, Position is required, Department is required, "
                 "Salary is required, Hire date is required",
    }


async def test_create_without_body_reports_all_required_fields(client):
    res = await client.post("/employees")

    assert res.status_code == 400
    assert res.json()["error"].startswith("Name is required, Email is required")


async def test_create_with_non_object_body_returns_400(client):
    res = await client.post("/employees", json=["not", "an", "object"])

    assert res.status_code == 400
    assert res.json()["success"] is False
    assert res.json()["error"].startswith("Invalid request data")


async def test_create_duplicate_email_returns_400_and_keeps_one_row(client, valid_payload, test_db):
    await _create(client, valid_payload)

    res = await client.post("/employees", json={**valid_payload, "email": "JOHN@ex.com"})

    assert res.status_code == 400
    assert res.json()["error"] == "Employee with this email already exists"
    rows = (await test_db.execute(select(Employee))).scalars().all()
    assert len(rows) == 1


async def test_create_with_sub_cent_salary_returns_400(client, valid_payload):
    res = await client.post("/employees", json={**valid_payload, "salary": "0.001"})

    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "Salary must be a positive number"}
    assert (await client.get("/employees")).json()["data"] == []


# --- GET ------------------------------------------------------------------------

async def test_list_returns_list_projection_without_salary(client, valid_payload):
    await _create(client, valid_payload)
    await _create(client, {**valid_payload, "email": "jane@ex.com", "name": "Jane"})

    res = await client.get("/employees")

    assert res.status_code == 200
    data = res.json()["data"]
    assert len(data) == 2
    for item in data:
        assert set(item) == {"id", "name", "email", "position", "department"}


async def test_list_is_empty_without_rows(client):
    res = await client.get("/employees")
    assert res.json() == {"success": True, "data": []}


async def test_get_by_id_returns_detail(client, valid_payload):
    created = await _create(client, valid_payload)

    res = await client.get(f"/employees/{created['id']}")

    assert res.status_code == 200
    assert res.json()["data"] == created


async def test_get_unknown_id_returns_404(client):
    res = await client.get("/employees/9999")

    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Employee not found"}


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
async def test_non_numeric_id_returns_400(client, method):
    body = {"name": "X"} if method == "PUT" else None

    res = await client.request(method, "/employees/abc", json=body)

    assert res.status_code == 400
    assert res.json()["success"] is False
    assert res.json()["error"].startswith("Invalid request data: path.employee_id")


async def test_department_listing(client, valid_payload):
    await _create(client, valid_payload)
    await _create(client, {**valid_payload, "email": "s@ex.com", "department": "Sales"})

    res = await client.get("/employees/department/Eng")

    assert res.status_code == 200
    data = res.json()["data"]
    assert [item["email"] for item in data] == ["john@ex.com"]
    assert "salary" not in data[0]


@pytest.mark.parametrize("path", ["/employees/department/", "/employees/department"])
async def test_empty_department_returns_400(client, path):
    res = await client.get(path)

    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "Department is required"}


# --- PUT ------------------------------------------------------------------------

async def test_update_with_empty_body_returns_400(client, valid_payload):
    created = await _create(client, valid_payload)

    res = await client.put(f"/employees/{created['id']}", json={})

    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "No fields to update"}


async def test_update_changes_present_fields(client, valid_payload):
    created = await _create(client, valid_payload)

    res = await client.put(
        f"/employees/{created['id']}", json={"position": "Staff Engineer", "salary": "80000.5"},
    )

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["position"] == "Staff Engineer"
    assert data["salary"] == "80000.50"
    assert data["name"] == "John Doe"


async def test_update_unknown_id_returns_404(client):
    res = await client.put("/employees/424242", json={"name": "Nobody"})
    assert res.status_code == 404


async def test_update_invalid_fields_return_400(client, valid_payload):
    created = await _create(client, valid_payload)

    res = await client.put(f"/employees/{created['id']}", json={"hireDate": "yesterday"})

    assert res.status_code == 400
    assert res.json()["error"] == "Invalid hire date format"


async def test_update_to_taken_email_returns_400(client, valid_payload):
    await _create(client, valid_payload)
    other = await _create(client, {**valid_payload, "email": "other@ex.com"})

    res = await client.put(f"/employees/{other['id']}", json={"email": "john@ex.com"})

    assert res.status_code == 400
    assert res.json()["error"] == "Employee with this email already exists"


async def test_update_with_sub_cent_salary_returns_400_and_keeps_value(client, valid_payload):
    created = await _create(client, valid_payload)

    res = await client.put(f"/employees/{created['id']}", json={"salary": 0.004})

    assert res.status_code == 400
    assert res.json()["error"] == "Salary must be a positive number"
    stored = (await client.get(f"/employees/{created['id']}")).json()["data"]
    assert stored["salary"] == "75000.00"


# --- DELETE ---------------------------------------------------------------------

async def test_delete_returns_message_and_removes_row(client, valid_payload):
    created = await _create(client, valid_payload)

    res = await client.delete(f"/employees/{created['id']}")

    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Employee deleted successfully"}
    assert (await client.get(f"/employees/{created['id']}")).status_code == 404


async def test_delete_unknown_id_returns_404(client):
    res = await client.delete("/employees/31337")

    assert res.status_code == 404
    assert res.json()["error"] == "Employee not found"


# --- unexpected failures --------------------------------------------------------

class _BrokenService:
    def __init__(self, exc: Exception):
        self._exc = exc

    async def get_all_employees(self):
        raise self._exc


async def test_persistence_failure_returns_500_with_message(client):
    app.dependency_overrides[get_employee_service] = lambda: _BrokenService(
        OperationalError("SELECT", {}, Exception("connection refused")),
    )

    res = await client.get("/employees")

    assert res.status_code == 500
    assert res.json()["success"] is False
    assert "connection refused" in res.json()["error"]


async def test_unexpected_exception_returns_500_with_message():
    app.dependency_overrides[get_employee_service] = lambda: _BrokenService(
        RuntimeError("boom"),
    )
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            res = await c.get("/employees")
    finally:
        app.dependency_overrides.clear()

    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "boom"}


async def test_store_failure_through_session_manager_keeps_driver_message():
    original = db_module.db_manager
    init_db("sqlite+aiosqlite:///:memory:")  # no tables
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test",
        ) as c:
            res = await c.get("/employees")
    finally:
        await close_db()
        db_module.db_manager = original

    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "no such table: employees"}
