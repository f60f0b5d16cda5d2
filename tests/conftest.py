"""
Pytest Configuration and Fixtures
==================================
Shared fixtures: in-memory database, seeded records, API client.
"""

import os
from datetime import date

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

import hrcontracts.models  # noqa: F401
from hrcontracts.core.database import SessionLocal, drop_all_tables, init_db
from hrcontracts.main import app
from hrcontracts.models import Company, Employee, Employment

from tests.helpers import make_docx


@pytest.fixture
def db():
    """Fresh schema per test"""
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_all_tables()


@pytest.fixture
def company(db):
    company = Company(
        name="Acme Ltd",
        address="1 High Street, London",
        phone="020 7946 0000",
        email="hr@acme.example",
        website="https://acme.example",
        industry="Manufacturing",
        size="50-100",
    )
    db.add(company)
    db.commit()
    return company


@pytest.fixture
def other_company(db):
    company = Company(name="Globex Corp")
    db.add(company)
    db.commit()
    return company


@pytest.fixture
def employee(db, company):
    employee = Employee(
        company_id=company.id,
        first_name="Jane",
        last_name="Doe",
        email="jane.doe@example.com",
        date_of_birth=date(1990, 3, 15),
    )
    db.add(employee)
    db.flush()
    db.add(Employment(
        employee_id=employee.id,
        company_id=company.id,
        job_title="Engineer",
        department="R&D",
        base_salary="45000",
        pay_frequency="monthly",
        start_date=date(2024, 6, 1),
        benefits=["Pension", "Health insurance"],
    ))
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def client(db):
    """FastAPI test client fixture."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers(company):
    return {"X-User-Id": "user-1", "X-Company-Id": company.id}


@pytest.fixture
def contract_docx():
    return make_docx(
        "EMPLOYMENT CONTRACT",
        "Dear {{firstName}} {{lastName}}, you start on {{startDate}} at {{companyName}}.",
        "Position: {{job_title}} in {{department}}.",
        "Reference: {{unknownField}}",
    )
