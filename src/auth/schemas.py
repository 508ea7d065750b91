"""
User Schemas - Pydantic models for user data validation and serialization.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from .models import UserRole

class UserBase(BaseModel):
    """
    Base User Schema - Contains fields common to all user-related schemas

    Fields:
    - email: User's email address
    - full_name: User's full name
    """
    email: EmailStr
    full_name: str = Field(..., min_length=1)

class UserCreate(UserBase):
    """
    User Creation Schema - Used when registering a new user

    Extends UserBase with:
    - password: User's plain text password (will be hashed before storage)
    """
    password: str = Field(..., min_length=8, max_length=72)

class PatientRegistration(UserCreate):
    """Patient self-registration."""
    pass

class DoctorRegistration(UserCreate):
    """Doctor registration; doctors gain review and approval permissions."""
    pass

class UserLogin(BaseModel):
    """
    User Login Schema - Used for authentication

    Fields:
    - email: User's email address
    - password: User's plain text password
    """
    email: EmailStr
    password: str

class UserResponse(BaseModel):
    """
    User Response Schema - Used when returning user data

    Excludes the password hash.
    """
    id: int
    email: EmailStr
    full_name: str
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class LoginResponse(BaseModel):
    """
    Login Response Schema - Returned after successful authentication

    Fields:
    - access_token: JWT bearer token
    - token_type: Always "bearer"
    - user: Authenticated user's data
    """
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
