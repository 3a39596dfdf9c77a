import os

os.environ.setdefault("TESTING", "true")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.database import get_db
from app.dependencies import CallerAssertedIdentity, get_identity_resolver
from app.main import app

TEST_DATABASE_URL = "sqlite://"


@pytest.fixture()
def engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    TestingSessionLocal = sessionmaker(
        bind=engine, autocommit=False, autoflush=False, expire_on_commit=False
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(engine):
    TestingSessionLocal = sessionmaker(
        bind=engine, autocommit=False, autoflush=False, expire_on_commit=False
    )

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_resolver] = CallerAssertedIdentity
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def staff_payload():
    return {
        "email": "Ada.Obi@Example.com",
        "firstName": "Ada",
        "lastName": "Obi",
        "phone": "+2348012345678",
        "staffId": "fin-001",
        "jobRole": "Accountant",
        "department": "Finance",
    }


@pytest.fixture()
def registered_staff(client, staff_payload):
    response = client.post("/api/staff/register", json=staff_payload)
    assert response.status_code == 201, response.text
    return response.json()["staff"]


@pytest.fixture()
def approver(client):
    response = client.post("/api/staff/register", json={
        "email": "manager@example.com",
        "firstName": "Chidi",
        "lastName": "Eze",
        "phone": "08000000000",
        "staffId": "mgr-001",
        "jobRole": "Finance Manager",
    })
    assert response.status_code == 201, response.text
    return response.json()["staff"]


@pytest.fixture()
def advance_payload(registered_staff):
    return {
        "staffId": registered_staff["id"],
        "purpose": "Site visit to Abuja office",
        "amount": 150.50,
        "currency": "USD",
        "neededBy": "2026-11-01",
        "description": "Transport and accommodation for the quarterly audit",
        "projectCode": "AUD-2026",
        "paymentMethod": "bank_transfer",
    }


@pytest.fixture()
def cash_advance(client, advance_payload):
    response = client.post("/api/cash-advance", json=advance_payload)
    assert response.status_code == 201, response.text
    return response.json()["cashAdvance"]
