"""
Review Service - Business logic behind the doctor dashboard.
"""
import logging
from typing import List, Optional, Tuple
from fastapi import Request
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import NotFoundError, PersistenceError
from ..auth.dependencies import SessionContext
from ..core.audit_service import record_audit_event
from ..core.pagination import PageParams, PageResponse, paginate
from ..patients.models import Patient
from ..predictions.models import RiskPrediction, Recommendation
from ..predictions.scoring import DISEASES
from .schemas import PatientProfile, PatientReview, RecommendationReview

# Set up logging
logger = logging.getLogger(__name__)

def get_latest_predictions(db: Session, patient_id: int) -> List[RiskPrediction]:
    """
    Return the patient's most recent prediction run in disease order.

    Args:
        db: Database session
        patient_id: ID of the patient record

    Returns:
        List[RiskPrediction]: Empty if the engine never ran for this patient
    """
    newest = (
        db.query(RiskPrediction)
        .filter(RiskPrediction.patient_id == patient_id)
        .order_by(RiskPrediction.created_at.desc(), RiskPrediction.id.desc())
        .first()
    )
    if newest is None:
        return []

    rows = db.query(RiskPrediction).filter(
        RiskPrediction.patient_id == patient_id,
        RiskPrediction.run_id == newest.run_id
    ).all()
    order = {disease: index for index, disease in enumerate(DISEASES)}
    return sorted(rows, key=lambda row: (order.get(row.disease, len(order)), row.id))

def _recommendations_query(db: Session):
    return db.query(Recommendation).order_by(Recommendation.created_at.desc(), Recommendation.id.desc())

def _profile(patient: Patient) -> PatientProfile:
    return PatientProfile.model_validate(patient)

def build_patient_review(db: Session, patient: Patient) -> PatientReview:
    """Assemble one patient's dashboard entry."""
    recommendations = _recommendations_query(db).filter(Recommendation.patient_id == patient.id).all()
    return PatientReview.model_validate(
        {
            "patient": _profile(patient),
            "latest_predictions": get_latest_predictions(db, patient.id),
            "recommendations": recommendations,
        },
        from_attributes=True
    )

def list_patient_reviews(db: Session, page_params: PageParams) -> PageResponse:
    """
    List every patient with latest predictions and recommendations, newest record first.
    """
    query = (
        db.query(Patient)
        .options(joinedload(Patient.user))
        .order_by(Patient.created_at.desc(), Patient.id.desc())
    )
    return paginate(query, page_params, transform=lambda patient: build_patient_review(db, patient))

def list_recommendation_reviews(
    db: Session,
    patient_id: Optional[int] = None,
    approved: Optional[bool] = None
) -> List[RecommendationReview]:
    """
    List recommendations newest first with their patient and latest predictions.

    Args:
        db: Database session
        patient_id: Restrict to one patient
        approved: Restrict to approved (True) or pending (False) recommendations

    Raises:
        NotFoundError: If ``patient_id`` does not exist
    """
    query = _recommendations_query(db).options(joinedload(Recommendation.patient).joinedload(Patient.user))
    if patient_id is not None:
        if db.query(Patient.id).filter(Patient.id == patient_id).first() is None:
            raise NotFoundError(f"Patient {patient_id} not found")
        query = query.filter(Recommendation.patient_id == patient_id)
    if approved is not None:
        query = query.filter(Recommendation.approved == approved)

    latest_by_patient = {}
    reviews = []
    for recommendation in query.all():
        if recommendation.patient_id not in latest_by_patient:
            latest_by_patient[recommendation.patient_id] = get_latest_predictions(db, recommendation.patient_id)
        reviews.append(RecommendationReview.model_validate(
            {
                "recommendation": recommendation,
                "patient": _profile(recommendation.patient),
                "latest_predictions": latest_by_patient[recommendation.patient_id],
            },
            from_attributes=True
        ))
    return reviews

def approve_recommendation(
    db: Session,
    ctx: SessionContext,
    recommendation_id: int,
    doctor_comment: Optional[str] = None,
    request: Optional[Request] = None
) -> Tuple[Recommendation, bool]:
    """
    Approve a recommendation, storing the doctor's comment.

    Approving an already approved recommendation changes nothing.

    Args:
        db: Database session
        ctx: Reviewing doctor's session context
        recommendation_id: ID of the recommendation
        doctor_comment: Optional comment stored with the approval
        request: FastAPI request object for audit logging

    Returns:
        Tuple of the recommendation and whether this call approved it

    Raises:
        NotFoundError: If the recommendation does not exist
        PersistenceError: If the approval could not be stored
    """
    recommendation = db.query(Recommendation).filter(Recommendation.id == recommendation_id).first()
    if recommendation is None:
        raise NotFoundError(f"Recommendation {recommendation_id} not found")

    if not recommendation.approve(doctor_comment or None):
        logger.info(f"Recommendation {recommendation_id} already approved; nothing to do")
        return recommendation, False

    record_audit_event(
        db,
        action="RECOMMENDATION_APPROVED",
        user_id=ctx.user_id,
        request=request,
        details={
            "recommendation_id": recommendation.id,
            "patient_id": recommendation.patient_id,
            "disease": recommendation.disease,
        }
    )
    try:
        db.commit()
        db.refresh(recommendation)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error approving recommendation {recommendation_id}: {str(e)}")
        raise PersistenceError("Failed to approve recommendation")

    logger.info(f"Recommendation {recommendation_id} approved by doctor {ctx.user_id}")
    return recommendation, True
