"""
User Model - Stores portal accounts for patients and doctors.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from ..database import Base

class UserRole(str, enum.Enum):
    """
    Enumeration for user roles in the health portal.

    Roles:
    - PATIENT: Submits vitals and reads their own predictions
    - DOCTOR: Reviews every patient and approves recommendations
    """
    PATIENT = "PATIENT"
    DOCTOR = "DOCTOR"

class User(Base):
    """
    User Model - Stores all user information in the system

    Fields:
    - id: Primary key for user identification
    - email: Unique email address for login
    - full_name: User's complete name
    - password_hash: Securely hashed password (never store raw passwords)
    - is_active: Whether the account may log in
    - role: User role (patient or doctor)
    - created_at: Timestamp when user was created
    - updated_at: Timestamp when user was last updated
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)
    role = Column(Enum(UserRole), default=UserRole.PATIENT, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    patient_record = relationship("Patient", back_populates="user", uselist=False)

    def __repr__(self):
        """String representation of the User model"""
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
