"""
Patient Router - Health assessment form submission and the patient dashboard.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..auth.dependencies import SessionContext, require_permission
from ..core.permissions import Permission
from ..predictions.router import build_predict_response
from .schemas import PatientRecordSubmit, PatientRecordResponse, PatientSubmissionResponse, PatientDashboardResponse
from .service import submit_patient_record, get_patient_dashboard, require_own_record

router = APIRouter(prefix="/api/v1/patients", tags=["Patients"])


@router.post("/me/record", response_model=PatientSubmissionResponse, summary="Submit Health Data")
def submit_record_route(
    record_data: PatientRecordSubmit,
    ctx: SessionContext = Depends(require_permission(Permission.SUBMIT_HEALTH_DATA)),
    db: Session = Depends(get_db)
):
    """
    Save the caller's health data and generate predictions for it.

    Resubmitting overwrites the stored record and appends a new prediction run.
    """
    patient, run = submit_patient_record(db, ctx, record_data)
    return PatientSubmissionResponse(
        patient=PatientRecordResponse.model_validate(patient),
        prediction=build_predict_response(run)
    )


@router.get("/me/record", response_model=PatientRecordResponse, summary="Get Own Health Data")
def get_record_route(
    ctx: SessionContext = Depends(require_permission(Permission.VIEW_OWN_RESULTS)),
    db: Session = Depends(get_db)
):
    """Return the caller's stored health data."""
    return require_own_record(db, ctx)


@router.get("/me/dashboard", response_model=PatientDashboardResponse, summary="Patient Dashboard")
def dashboard_route(
    ctx: SessionContext = Depends(require_permission(Permission.VIEW_OWN_RESULTS)),
    db: Session = Depends(get_db)
):
    """Return the caller's recent predictions and all their recommendations, newest first."""
    return get_patient_dashboard(db, ctx)
