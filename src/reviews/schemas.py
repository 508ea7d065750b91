"""
Review Schemas - Doctor dashboard read models and the approval request.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from ..patients.schemas import PatientRecordResponse
from ..predictions.schemas import PredictionResponse, RecommendationResponse

class PatientProfile(PatientRecordResponse):
    """Patient record with the owning account's name and email."""
    full_name: Optional[str] = None
    email: Optional[str] = None

class PatientReview(BaseModel):
    """
    One patient as seen on the doctor dashboard.

    Fields:
    - patient: Record and profile
    - latest_predictions: The most recent prediction run, in disease order
    - recommendations: Every recommendation, newest first
    """
    patient: PatientProfile
    latest_predictions: List[PredictionResponse] = []
    recommendations: List[RecommendationResponse] = []

class RecommendationReview(BaseModel):
    """A recommendation with its patient and that patient's latest predictions."""
    recommendation: RecommendationResponse
    patient: PatientProfile
    latest_predictions: List[PredictionResponse] = []

class ApprovalRequest(BaseModel):
    """
    Approval payload.

    Fields:
    - doctor_comment: Optional note stored with the approval
    """
    doctor_comment: Optional[str] = Field(None, max_length=2000)

class ApprovalResponse(BaseModel):
    """
    Approval result.

    Fields:
    - recommendation: The recommendation after the call
    - changed: False when it had already been approved
    """
    recommendation: RecommendationResponse
    changed: bool
