"""
Tests for the predict function endpoint.
"""
from src.predictions.models import RiskPrediction, Recommendation

PREDICT_URL = "/functions/v1/predict"


def _submit_form(client, headers, form):
    response = client.post("/api/v1/patients/me/record", json=form, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["patient"]["id"]


PREFLIGHT_HEADERS = {
    "Origin": "http://localhost:5173",
    "Access-Control-Request-Method": "POST",
    "Access-Control-Request-Headers": "authorization, content-type",
}


def test_browser_preflight_returns_fixed_cors_headers_and_empty_body(client):
    response = client.options(PREDICT_URL, headers=PREFLIGHT_HEADERS)
    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.headers["Access-Control-Allow-Headers"] == "authorization, x-client-info, apikey, content-type"


def test_bare_options_request_gets_the_same_answer(client):
    response = client.options(PREDICT_URL)
    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["Access-Control-Allow-Headers"] == "authorization, x-client-info, apikey, content-type"


def test_preflight_elsewhere_is_handled_by_cors_middleware(client):
    response = client.options("/api/v1/auth/login", headers=PREFLIGHT_HEADERS)
    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_predict_success(client, patient_headers, health_form, db):
    patient_id = _submit_form(client, patient_headers, health_form)

    response = client.post(PREDICT_URL, json={"patientId": str(patient_id)}, headers=patient_headers)

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Predictions and recommendations generated successfully"
    assert [p["disease"] for p in data["predictions"]] == ["Diabetes", "Heart Disease", "Hypertension"]
    assert [p["risk_score"] for p in data["predictions"]] == [95, 95, 95]
    assert all(p["risk_level"] == "high" for p in data["predictions"])
    assert all(r["stored"] for r in data["recommendations"])

    # One run from the form submission, one from this call
    assert db.query(RiskPrediction).filter(RiskPrediction.patient_id == patient_id).count() == 6
    assert db.query(Recommendation).filter(Recommendation.patient_id == patient_id).count() == 6


def test_predict_accepts_integer_patient_id(client, patient_headers, health_form):
    patient_id = _submit_form(client, patient_headers, health_form)
    response = client.post(PREDICT_URL, json={"patientId": patient_id}, headers=patient_headers)
    assert response.status_code == 200


def test_unknown_patient_is_a_400_error(client, doctor_headers):
    response = client.post(PREDICT_URL, json={"patientId": "9999"}, headers=doctor_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Patient 9999 not found"}
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_malformed_body_is_a_400_error(client, doctor_headers):
    response = client.post(
        PREDICT_URL,
        content=b"not json",
        headers={**doctor_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_missing_patient_id_is_a_400_error(client, doctor_headers):
    response = client.post(PREDICT_URL, json={"patient": "1"}, headers=doctor_headers)
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid patientId")


def test_non_numeric_patient_id_is_a_400_error(client, doctor_headers):
    response = client.post(PREDICT_URL, json={"patientId": "abc"}, headers=doctor_headers)
    assert response.status_code == 400


def test_patient_cannot_predict_for_someone_else(client, patient_headers, other_patient_headers, health_form):
    patient_id = _submit_form(client, patient_headers, health_form)

    response = client.post(PREDICT_URL, json={"patientId": patient_id}, headers=other_patient_headers)

    assert response.status_code == 400
    assert "not found" in response.json()["error"]


def test_doctor_can_predict_for_any_patient(client, patient_headers, doctor_headers, health_form):
    patient_id = _submit_form(client, patient_headers, health_form)
    response = client.post(PREDICT_URL, json={"patientId": patient_id}, headers=doctor_headers)
    assert response.status_code == 200


def test_predict_requires_authentication(client):
    response = client.post(PREDICT_URL, json={"patientId": "1"})
    assert response.status_code == 401


def test_boolean_or_float_patient_id_is_a_400_error(client, patient_headers, health_form):
    _submit_form(client, patient_headers, health_form)
    for bad_id in (True, 1.0, "1.5", "-1", ""):
        response = client.post(PREDICT_URL, json={"patientId": bad_id}, headers=patient_headers)
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid patientId"), bad_id
