import pytest
import os
from datetime import date

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["PERSIST_STATE"] = "true"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["STRICT_APPROVAL_ORDER"] = "true"

from app.database import Base, engine
from app.main import app
from app.schemas.employee import EmployeeCreate, EmploymentStatus, Gender
from app.services.repository import HRRepository
from fastapi.testclient import TestClient

TODAY = date(2025, 1, 10)


@pytest.fixture(scope="function")
def reset_database():
    """Fresh snapshot tables for each test (the in-memory engine is shared)."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def repository():
    """Repository with a fixed clock and two employees (female confirmed, male on probation)."""
    repo = HRRepository(strict_approval_order=True, clock=lambda: TODAY)
    repo.add_employee(EmployeeCreate(
        code="EMP001",
        name="Alice Smith",
        email="alice.smith@university.edu",
        gender=Gender.FEMALE,
        department="CS",
        faculty="Computing",
        designation="Senior Lecturer",
        join_date=date(2015, 6, 1),
        employment_status=EmploymentStatus.CONFIRMED,
    ))
    repo.add_employee(EmployeeCreate(
        code="EMP002",
        name="Bob Ahmed",
        email="bob.ahmed@university.edu",
        gender=Gender.MALE,
        department="HR",
        faculty="Management Sciences",
        designation="Lecturer",
        join_date=date(2024, 7, 15),
        employment_status=EmploymentStatus.PROBATION,
    ))
    return repo


@pytest.fixture(scope="function")
def alice(repository):
    return repository.list_employees(search="Alice")[0]


@pytest.fixture(scope="function")
def bob(repository):
    return repository.list_employees(search="Bob")[0]


@pytest.fixture(scope="function")
def client(reset_database):
    """TestClient running the full lifespan against a clean snapshot store."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def create_employee(client):
    """Helper fixture registering an employee through the API."""
    def _create_employee(**overrides):
        payload = {
            "code": "EMP100",
            "name": "Sara Khan",
            "email": "sara.khan@university.edu",
            "gender": "female",
            "department": "CS",
            "faculty": "Computing",
            "designation": "Senior Lecturer",
            "join_date": "2015-06-01",
            "employment_status": "confirmed",
        }
        payload.update(overrides)
        response = client.post("/api/employees", json=payload)
        assert response.status_code == 200, response.text
        return response.json()
    return _create_employee
