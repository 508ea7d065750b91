"""
Tests for registration, login and the session context dependencies.
"""
from datetime import timedelta

from src.auth.models import User, UserRole
from src.core.audit_models import AuditLog
from src.core.permissions import Permission, has_permission
from src.core.security import create_access_token, hash_password, verify_password, decode_access_token

PASSWORD = "Password123!"


def test_register_patient(client, db):
    response = client.post(
        "/api/v1/auth/register/patient",
        json={"email": "New.Patient@Example.com", "full_name": "New Patient", "password": PASSWORD},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "PATIENT"
    assert data["email"] == "new.patient@example.com"
    assert "password_hash" not in data
    assert db.query(User).one().password_hash != PASSWORD


def test_register_doctor(client):
    response = client.post(
        "/api/v1/auth/register/doctor",
        json={"email": "doc@example.com", "full_name": "Dr. Who", "password": PASSWORD},
    )
    assert response.status_code == 201
    assert response.json()["role"] == "DOCTOR"


def test_duplicate_email_is_rejected(client):
    payload = {"email": "dup@example.com", "full_name": "Dup", "password": PASSWORD}
    assert client.post("/api/v1/auth/register/patient", json=payload).status_code == 201
    response = client.post("/api/v1/auth/register/doctor", json=payload)
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_short_password_is_rejected(client):
    response = client.post(
        "/api/v1/auth/register/patient",
        json={"email": "short@example.com", "full_name": "Short", "password": "abc"},
    )
    assert response.status_code == 422


def test_login_and_me(client, patient_headers, db):
    response = client.get("/api/v1/auth/me", headers=patient_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "patient@example.com"
    assert db.query(AuditLog).filter(AuditLog.action == "USER_LOGIN_SUCCESS").count() == 1


def test_login_with_wrong_password(client, db):
    client.post(
        "/api/v1/auth/register/patient",
        json={"email": "p@example.com", "full_name": "P", "password": PASSWORD},
    )
    response = client.post("/api/v1/auth/login", json={"email": "p@example.com", "password": "wrong-password"})
    assert response.status_code == 401
    assert db.query(AuditLog).filter(AuditLog.action == "USER_LOGIN_FAILED_INVALID_CREDENTIALS").count() == 1


def test_inactive_account_cannot_log_in(client, db):
    client.post(
        "/api/v1/auth/register/patient",
        json={"email": "gone@example.com", "full_name": "Gone", "password": PASSWORD},
    )
    user = db.query(User).one()
    user.is_active = False
    db.commit()

    response = client.post("/api/v1/auth/login", json={"email": "gone@example.com", "password": PASSWORD})
    assert response.status_code == 403


def test_invalid_and_expired_tokens_are_rejected(client, db):
    user = User(email="t@example.com", full_name="T", password_hash=hash_password(PASSWORD), role=UserRole.PATIENT)
    db.add(user)
    db.commit()

    expired = create_access_token(user.id, user.email, "PATIENT", expires_delta=timedelta(minutes=-1))
    assert client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {expired}"}).status_code == 401
    assert client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_token_round_trip_and_password_hashing():
    token = create_access_token(7, "x@example.com", "DOCTOR")
    claims = decode_access_token(token)
    assert claims["sub"] == "7"
    assert claims["user_id"] == 7
    assert claims["role"] == "DOCTOR"
    assert decode_access_token(token + "x") is None

    hashed = hash_password(PASSWORD)
    assert verify_password(PASSWORD, hashed)
    assert not verify_password("nope", hashed)


def test_role_permissions():
    assert has_permission(UserRole.PATIENT, Permission.SUBMIT_HEALTH_DATA)
    assert has_permission(UserRole.PATIENT, Permission.RUN_PREDICTIONS)
    assert not has_permission(UserRole.PATIENT, Permission.APPROVE_RECOMMENDATIONS)
    assert has_permission(UserRole.DOCTOR, Permission.APPROVE_RECOMMENDATIONS)
    assert not has_permission(UserRole.DOCTOR, Permission.SUBMIT_HEALTH_DATA)
