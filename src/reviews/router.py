"""
Review Router - Doctor dashboard endpoints.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ..database import get_db
from ..auth.dependencies import SessionContext, require_permission
from ..core.permissions import Permission
from ..core.pagination import PageParams, PageResponse
from .schemas import PatientReview, RecommendationReview, ApprovalRequest, ApprovalResponse
from .service import list_patient_reviews, list_recommendation_reviews, approve_recommendation

router = APIRouter(prefix="/api/v1/reviews", tags=["Reviews"])


@router.get("/patients", response_model=PageResponse[PatientReview], summary="List Patients For Review")
def list_patients_route(
    page_params: PageParams = Depends(),
    ctx: SessionContext = Depends(require_permission(Permission.VIEW_ALL_PATIENTS)),
    db: Session = Depends(get_db)
):
    """
    List every patient with profile, latest predictions and recommendations.
    """
    return list_patient_reviews(db, page_params)


@router.get("/recommendations", response_model=List[RecommendationReview], summary="List Recommendations")
def list_recommendations_route(
    patient_id: Optional[int] = Query(None, description="Only this patient's recommendations"),
    approved: Optional[bool] = Query(None, description="Filter by approval state"),
    ctx: SessionContext = Depends(require_permission(Permission.VIEW_ALL_PATIENTS)),
    db: Session = Depends(get_db)
):
    """
    List recommendations newest first, each with its patient and latest predictions.
    """
    return list_recommendation_reviews(db, patient_id=patient_id, approved=approved)


@router.post(
    "/recommendations/{recommendation_id}/approve",
    response_model=ApprovalResponse,
    summary="Approve Recommendation"
)
def approve_recommendation_route(
    recommendation_id: int,
    request: Request,
    approval: Optional[ApprovalRequest] = None,
    ctx: SessionContext = Depends(require_permission(Permission.APPROVE_RECOMMENDATIONS)),
    db: Session = Depends(get_db)
):
    """
    Approve a recommendation with an optional comment.

    Approving an already approved recommendation returns it unchanged.
    """
    comment = approval.doctor_comment if approval else None
    recommendation, changed = approve_recommendation(db, ctx, recommendation_id, comment, request=request)
    return ApprovalResponse.model_validate(
        {"recommendation": recommendation, "changed": changed},
        from_attributes=True
    )
