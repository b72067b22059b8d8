"""Service test fixtures — async DB, FastAPI test client, in-memory fake repository.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so readiness probes hit the test engine
    - FakeEmployeeRepository satisfies the EmployeeRepository protocol without a DB
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from employee_api.db.base import Base
from employee_api.infrastructure.database import get_db, DatabaseSessionManager
from employee_api.models.employee import Employee
import employee_api.infrastructure.database as db_module
from employee_api.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def valid_payload():
    return {
        "name": "John Doe",
        "email": " John@Ex.com ",
        "position": "Engineer",
        "department": "Eng",
        "salary": 75000,
        "hireDate": "2024-01-15",
    }


# --- Fake repository -----------------------------------------------------------


class FakeEmployeeRepository:
    """In-memory EmployeeRepository. Records every call in .calls."""

    def __init__(self):
        self.rows: dict[int, Employee] = {}
        self.calls: list[tuple] = []
        self.create_error: Exception | None = None
        self.update_error: Exception | None = None
        self._next_id = 1
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def seed(self, **fields) -> Employee:
        now = self._tick()
        employee = Employee(
            id=self._next_id,
            name=fields.get("name", "Seed Person"),
            email=fields.get("email", f"seed{self._next_id}@example.com"),
            position=fields.get("position", "Analyst"),
            department=fields.get("department", "Finance"),
            salary=fields.get("salary", Decimal("50000.00")),
            hire_date=fields.get("hire_date", datetime(2023, 3, 1, tzinfo=timezone.utc)),
            created_at=now,
            updated_at=now,
        )
        self.rows[employee.id] = employee
        self._next_id += 1
        return employee

    async def find_all(self):
        self.calls.append(("find_all",))
        return sorted(self.rows.values(), key=lambda e: e.created_at, reverse=True)

    async def find_by_id(self, employee_id):
        self.calls.append(("find_by_id", employee_id))
        return self.rows.get(int(employee_id))

    async def create(self, request):
        self.calls.append(("create", request))
        if self.create_error:
            raise self.create_error
        return self.seed(
            name=request.name, email=request.email, position=request.position,
            department=request.department, salary=request.salary,
            hire_date=request.hire_date,
        )

    async def update(self, employee_id, request):
        self.calls.append(("update", employee_id, request))
        if self.update_error:
            raise self.update_error
        employee = self.rows[int(employee_id)]
        for attr, value in request.present_fields().items():
            if value is not None:
                setattr(employee, attr, value)
        employee.updated_at = self._tick()
        return employee

    async def delete(self, employee_id):
        self.calls.append(("delete", employee_id))
        return self.rows.pop(int(employee_id))

    async def find_by_email(self, email):
        self.calls.append(("find_by_email", email))
        return next((e for e in self.rows.values() if e.email == email), None)

    async def find_by_department(self, department):
        self.calls.append(("find_by_department", department))
        matches = [e for e in self.rows.values() if e.department == department]
        return sorted(matches, key=lambda e: e.created_at, reverse=True)

    def called(self, name: str) -> bool:
        return any(call[0] == name for call in self.calls)


@pytest.fixture
def fake_repository():
    return FakeEmployeeRepository()
