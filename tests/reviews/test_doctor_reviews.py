"""
Tests for the doctor review endpoints.
"""
from src.core.audit_models import AuditLog
from src.predictions.models import Recommendation

PATIENTS_URL = "/api/v1/reviews/patients"
RECOMMENDATIONS_URL = "/api/v1/reviews/recommendations"


def _submit(client, headers, form):
    response = client.post("/api/v1/patients/me/record", json=form, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def _approve(client, headers, recommendation_id, comment=None):
    body = {"doctor_comment": comment} if comment is not None else None
    return client.post(f"{RECOMMENDATIONS_URL}/{recommendation_id}/approve", json=body, headers=headers)


def test_patients_cannot_use_review_endpoints(client, patient_headers):
    assert client.get(PATIENTS_URL, headers=patient_headers).status_code == 403
    assert client.get(RECOMMENDATIONS_URL, headers=patient_headers).status_code == 403
    assert _approve(client, patient_headers, 1).status_code == 403


def test_list_patients_with_profile_and_latest_predictions(client, patient_headers, doctor_headers, health_form):
    _submit(client, patient_headers, health_form)
    _submit(client, patient_headers, {**health_form, "smoking": False})

    response = client.get(PATIENTS_URL, headers=doctor_headers)

    assert response.status_code == 200
    page = response.json()
    assert page["total"] == 1
    assert page["page"] == 1
    entry = page["items"][0]
    assert entry["patient"]["full_name"] == "Pat Patient"
    assert entry["patient"]["email"] == "patient@example.com"
    # Only the latest run, in disease order: heart disease lost the smoking bonus
    assert [(p["disease"], p["risk_score"]) for p in entry["latest_predictions"]] == [
        ("Diabetes", 95), ("Heart Disease", 85), ("Hypertension", 95)
    ]
    assert len({p["run_id"] for p in entry["latest_predictions"]}) == 1
    assert len(entry["recommendations"]) == 6
    ids = [r["id"] for r in entry["recommendations"]]
    assert ids == sorted(ids, reverse=True)


def test_list_patients_is_paginated(client, patient_headers, other_patient_headers, doctor_headers, health_form):
    _submit(client, patient_headers, health_form)
    _submit(client, other_patient_headers, health_form)

    page = client.get(PATIENTS_URL, params={"page": 1, "size": 1}, headers=doctor_headers).json()

    assert page["total"] == 2
    assert page["pages"] == 2
    assert page["has_next"] is True
    assert len(page["items"]) == 1


def test_patient_without_predictions_has_empty_latest_set(client, doctor_headers, make_patient):
    make_patient()
    entry = client.get(PATIENTS_URL, headers=doctor_headers).json()["items"][0]
    assert entry["latest_predictions"] == []
    assert entry["recommendations"] == []


def test_list_recommendations_filters(client, patient_headers, other_patient_headers, doctor_headers, health_form):
    mine = _submit(client, patient_headers, health_form)
    _submit(client, other_patient_headers, health_form)
    patient_id = mine["patient"]["id"]

    all_reviews = client.get(RECOMMENDATIONS_URL, headers=doctor_headers).json()
    assert len(all_reviews) == 6
    ids = [review["recommendation"]["id"] for review in all_reviews]
    assert ids == sorted(ids, reverse=True)

    only_mine = client.get(RECOMMENDATIONS_URL, params={"patient_id": patient_id}, headers=doctor_headers).json()
    assert len(only_mine) == 3
    for review in only_mine:
        assert review["patient"]["id"] == patient_id
        latest = {p["disease"] for p in review["latest_predictions"]}
        assert review["recommendation"]["disease"] in latest

    _approve(client, doctor_headers, only_mine[0]["recommendation"]["id"])
    pending = client.get(RECOMMENDATIONS_URL, params={"approved": False}, headers=doctor_headers).json()
    assert len(pending) == 5


def test_list_recommendations_for_unknown_patient_is_404(client, doctor_headers):
    response = client.get(RECOMMENDATIONS_URL, params={"patient_id": 777}, headers=doctor_headers)
    assert response.status_code == 404


def test_approve_sets_flag_and_comment(client, patient_headers, doctor_headers, health_form, db):
    _submit(client, patient_headers, health_form)
    recommendation_id = db.query(Recommendation).first().id

    response = _approve(client, doctor_headers, recommendation_id, "Start with lifestyle changes")

    assert response.status_code == 200
    data = response.json()
    assert data["changed"] is True
    assert data["recommendation"]["approved"] is True
    assert data["recommendation"]["doctor_comment"] == "Start with lifestyle changes"

    audit = db.query(AuditLog).filter(AuditLog.action == "RECOMMENDATION_APPROVED").one()
    assert audit.details["recommendation_id"] == recommendation_id

    dashboard = client.get("/api/v1/patients/me/dashboard", headers=patient_headers).json()
    approved = [r for r in dashboard["recommendations"] if r["id"] == recommendation_id][0]
    assert approved["approved"] is True
    assert approved["doctor_comment"] == "Start with lifestyle changes"


def test_approve_without_comment_stores_null(client, patient_headers, doctor_headers, health_form, db):
    _submit(client, patient_headers, health_form)
    recommendation_id = db.query(Recommendation).first().id

    response = _approve(client, doctor_headers, recommendation_id, "")

    assert response.status_code == 200
    assert response.json()["recommendation"]["doctor_comment"] is None


def test_second_approval_is_a_no_op(client, patient_headers, doctor_headers, health_form, db):
    _submit(client, patient_headers, health_form)
    recommendation_id = db.query(Recommendation).first().id

    _approve(client, doctor_headers, recommendation_id, "First comment")
    response = _approve(client, doctor_headers, recommendation_id, "Second comment")

    assert response.status_code == 200
    data = response.json()
    assert data["changed"] is False
    assert data["recommendation"]["approved"] is True
    assert data["recommendation"]["doctor_comment"] == "First comment"
    assert db.query(AuditLog).filter(AuditLog.action == "RECOMMENDATION_APPROVED").count() == 1


def test_approve_unknown_recommendation_is_404(client, doctor_headers):
    response = _approve(client, doctor_headers, 12345, "ok")
    assert response.status_code == 404
    assert response.json()["detail"] == "Recommendation 12345 not found"
