"""
Test configuration for the health portal backend.
"""
import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.database import Base, get_db
from src.main import app
from src.auth.models import User, UserRole
from src.auth.dependencies import SessionContext
from src.patients.models import Patient, Gender

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "Password123!"


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides = {}


@pytest.fixture
def health_form():
    """Form payload that triggers all three recommendations."""
    return {
        "age": 65,
        "gender": "male",
        "blood_sugar": 150.0,
        "cholesterol": 250.0,
        "bmi": 32.0,
        "blood_pressure_systolic": 145,
        "blood_pressure_diastolic": 95,
        "smoking": True,
        "alcohol": True,
        "exercise_hours": 1,
        "family_history": "Father had diabetes",
        "symptoms": "Frequent thirst",
    }


def _register_and_login(client, role, email, full_name):
    response = client.post(
        f"/api/v1/auth/register/{role}",
        json={"email": email, "full_name": full_name, "password": PASSWORD},
    )
    assert response.status_code == 201, response.text
    response = client.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def patient_headers(client):
    """Bearer headers for a freshly registered patient."""
    return _register_and_login(client, "patient", "patient@example.com", "Pat Patient")


@pytest.fixture
def other_patient_headers(client):
    """Bearer headers for a second patient."""
    return _register_and_login(client, "patient", "other@example.com", "Olive Other")


@pytest.fixture
def doctor_headers(client):
    """Bearer headers for a freshly registered doctor."""
    return _register_and_login(client, "doctor", "doctor@example.com", "Dr. Dana")


@pytest.fixture
def make_patient(db):
    """
    Factory that stores a user and a patient record directly, bypassing the API.
    """
    counter = {"n": 0}

    def _make_patient(**fields):
        counter["n"] += 1
        user = User(
            email=f"stored{counter['n']}@example.com",
            full_name=f"Stored Patient {counter['n']}",
            password_hash="not-a-real-hash",
            role=UserRole.PATIENT,
        )
        db.add(user)
        db.commit()
        values = {
            "age": 30,
            "gender": Gender.FEMALE,
            "blood_sugar": 90.0,
            "cholesterol": 180.0,
            "bmi": 22.0,
            "blood_pressure_systolic": 118,
            "blood_pressure_diastolic": 76,
            "smoking": False,
            "alcohol": False,
            "exercise_hours": 3,
            "family_history": "",
            "symptoms": "",
        }
        values.update(fields)
        patient = Patient(user_id=user.id, **values)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient

    return _make_patient


@pytest.fixture
def doctor_context():
    """Session context of a doctor, who can see every record."""
    return SessionContext(user_id=999, email="doc@example.com", role=UserRole.DOCTOR)
