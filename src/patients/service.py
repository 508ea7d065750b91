"""
Patient Service - Intake of the health assessment form and the patient dashboard.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import NotFoundError, PersistenceError
from ..auth.dependencies import SessionContext
from ..predictions.engine import PredictionRun, run_prediction
from ..predictions.models import RiskPrediction, Recommendation
from ..predictions.store import PredictionStore
from .models import Patient
from .schemas import PatientRecordSubmit, PatientDashboardResponse

# Set up logging
logger = logging.getLogger(__name__)

# Number of predictions shown on the patient dashboard
DASHBOARD_PREDICTION_LIMIT = 5

def get_own_record(db: Session, ctx: SessionContext) -> Optional[Patient]:
    """Return the caller's patient record, or None if the form was never submitted."""
    return db.query(Patient).filter(Patient.user_id == ctx.user_id).first()

def upsert_patient_record(db: Session, ctx: SessionContext, record_data: PatientRecordSubmit) -> Patient:
    """
    Insert or overwrite the caller's patient record.

    Args:
        db: Database session
        ctx: Caller's session context
        record_data: Submitted form fields

    Returns:
        Patient: The stored record

    Raises:
        PersistenceError: If the record could not be written
    """
    patient = get_own_record(db, ctx)
    if patient is None:
        patient = Patient(user_id=ctx.user_id)
        db.add(patient)

    for field, value in record_data.model_dump().items():
        setattr(patient, field, value)
    patient.last_prediction_date = datetime.now(timezone.utc)

    try:
        db.commit()
        db.refresh(patient)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error saving patient record for user {ctx.user_id}: {str(e)}")
        raise PersistenceError("Failed to save health data")

    logger.info(f"Patient record {patient.id} saved for user {ctx.user_id}")
    return patient

def submit_patient_record(
    db: Session,
    ctx: SessionContext,
    record_data: PatientRecordSubmit
) -> Tuple[Patient, PredictionRun]:
    """
    Save the health form and run the prediction engine for the stored record.

    Returns:
        Tuple of the stored record and the engine run it triggered
    """
    patient = upsert_patient_record(db, ctx, record_data)
    run = run_prediction(PredictionStore(db, ctx), patient.id)
    return patient, run

def get_patient_dashboard(db: Session, ctx: SessionContext) -> PatientDashboardResponse:
    """
    Collect the caller's record, recent predictions and recommendations.

    A caller that has not submitted the form yet gets an empty dashboard.
    """
    patient = get_own_record(db, ctx)
    if patient is None:
        return PatientDashboardResponse()

    predictions = (
        db.query(RiskPrediction)
        .filter(RiskPrediction.patient_id == patient.id)
        .order_by(RiskPrediction.created_at.desc(), RiskPrediction.id.desc())
        .limit(DASHBOARD_PREDICTION_LIMIT)
        .all()
    )
    recommendations = (
        db.query(Recommendation)
        .filter(Recommendation.patient_id == patient.id)
        .order_by(Recommendation.created_at.desc(), Recommendation.id.desc())
        .all()
    )
    return PatientDashboardResponse.model_validate(
        {"patient": patient, "predictions": predictions, "recommendations": recommendations},
        from_attributes=True
    )

def require_own_record(db: Session, ctx: SessionContext) -> Patient:
    """
    Return the caller's record.

    Raises:
        NotFoundError: If the health form has not been submitted yet
    """
    patient = get_own_record(db, ctx)
    if patient is None:
        raise NotFoundError("No health data submitted yet")
    return patient
