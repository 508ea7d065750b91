"""
Prediction Schemas - Request/response contract of the predict function
and the read models shared by the dashboards.
"""
from typing import List, Optional
from pydantic import BaseModel, Field, computed_field, field_validator
from datetime import datetime

from .scoring import risk_level

class PredictRequest(BaseModel):
    """
    Body of a predict invocation.

    Fields:
    - patientId: Identifier of the stored patient record (string or integer)
    """
    patient_id: int = Field(..., alias="patientId", gt=0)

    @field_validator("patient_id", mode="before")
    @classmethod
    def require_integer_or_digits(cls, value):
        # Booleans and floats would otherwise be coerced to an id
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ValueError("must be an integer or a string of digits")
        if isinstance(value, str) and not value.isdecimal():
            raise ValueError("must be an integer or a string of digits")
        return value

class PredictionScore(BaseModel):
    """One computed risk score."""
    disease: str
    risk_score: int

    @computed_field
    @property
    def risk_level(self) -> str:
        return risk_level(self.risk_score)

    class Config:
        from_attributes = True

class RecommendationResult(BaseModel):
    """Per-disease outcome of storing a recommendation."""
    disease: str
    stored: bool
    recommendation_id: Optional[int] = None
    error: Optional[str] = None

    class Config:
        from_attributes = True

class PredictResponse(BaseModel):
    """Successful predict response."""
    success: bool = True
    predictions: List[PredictionScore]
    recommendations: List[RecommendationResult]
    message: str = "Predictions and recommendations generated successfully"

class PredictionResponse(PredictionScore):
    """A stored prediction row."""
    id: int
    patient_id: int
    run_id: str
    created_at: Optional[datetime] = None

class RecommendationResponse(BaseModel):
    """A stored recommendation row."""
    id: int
    patient_id: int
    disease: str
    drug_list: List[str]
    reason: str
    approved: bool
    doctor_comment: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
