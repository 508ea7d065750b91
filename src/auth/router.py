"""
Authentication routes for the health portal.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
import logging

from ..database import get_db
from .models import User, UserRole
from .schemas import PatientRegistration, DoctorRegistration, UserLogin, UserResponse, LoginResponse
from .dependencies import get_current_user
from .service import register_user, login_user

# Set up logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post(
    "/register/patient",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Patient Self-Registration"
)
def register_patient_route(patient_data: PatientRegistration, db: Session = Depends(get_db)):
    """
    Patient self-registration endpoint.

    The account is active immediately and can submit health data after login.
    """
    return register_user(db, patient_data, UserRole.PATIENT)


@router.post(
    "/register/doctor",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Doctor Registration"
)
def register_doctor_route(doctor_data: DoctorRegistration, db: Session = Depends(get_db)):
    """
    Doctor registration endpoint.

    Doctors can review every patient's predictions and approve recommendations.
    """
    return register_user(db, doctor_data, UserRole.DOCTOR)


@router.post("/login", response_model=LoginResponse, summary="User Login")
def login_route(credentials: UserLogin, request: Request, db: Session = Depends(get_db)):
    """
    Authenticate with email and password and receive a bearer token.
    """
    return login_user(db, credentials.email, credentials.password, request=request)


@router.get("/me", response_model=UserResponse, summary="Current User")
def me_route(current_user: User = Depends(get_current_user)):
    """Return the authenticated user's profile."""
    return current_user
