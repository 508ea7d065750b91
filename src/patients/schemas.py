"""
Patient Schemas - Pydantic models for the health assessment form and patient dashboard.
"""
from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime

from .models import Gender
from ..predictions.schemas import PredictResponse, PredictionResponse, RecommendationResponse

class PatientRecordSubmit(BaseModel):
    """
    Health assessment form payload.

    Fields mirror the form: demographics, clinical measurements, lifestyle
    flags and two free-text fields.
    """
    age: int = Field(..., ge=1, le=120, description="Age in years")
    gender: Gender
    blood_sugar: float = Field(..., ge=0, description="Fasting blood sugar (mg/dL)")
    cholesterol: float = Field(..., ge=0, description="Total cholesterol (mg/dL)")
    bmi: float = Field(..., gt=0, description="Body mass index")
    blood_pressure_systolic: int = Field(..., gt=0, description="Systolic blood pressure (mmHg)")
    blood_pressure_diastolic: int = Field(..., gt=0, description="Diastolic blood pressure (mmHg)")
    smoking: bool = False
    alcohol: bool = False
    exercise_hours: int = Field(0, ge=0, description="Exercise hours per week")
    family_history: Optional[str] = Field(None, description="Family medical history")
    symptoms: Optional[str] = Field(None, description="Current symptoms")

class PatientRecordResponse(BaseModel):
    """A stored patient record."""
    id: int
    user_id: int
    age: Optional[int] = None
    gender: Optional[Gender] = None
    blood_sugar: Optional[float] = None
    cholesterol: Optional[float] = None
    bmi: Optional[float] = None
    blood_pressure_systolic: Optional[int] = None
    blood_pressure_diastolic: Optional[int] = None
    smoking: bool = False
    alcohol: bool = False
    exercise_hours: Optional[int] = None
    family_history: Optional[str] = None
    symptoms: Optional[str] = None
    last_prediction_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class PatientSubmissionResponse(BaseModel):
    """Stored record plus the prediction run the submission triggered."""
    patient: PatientRecordResponse
    prediction: PredictResponse

class PatientDashboardResponse(BaseModel):
    """
    Patient dashboard data.

    Fields:
    - patient: The caller's record, None until the form has been submitted
    - predictions: Most recent predictions, newest first
    - recommendations: All recommendations, newest first
    """
    patient: Optional[PatientRecordResponse] = None
    predictions: List[PredictionResponse] = []
    recommendations: List[RecommendationResponse] = []
