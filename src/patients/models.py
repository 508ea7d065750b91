"""
Patient Model - Stores the vitals and lifestyle snapshot used as scoring input.

One record exists per patient account; resubmitting the health form
overwrites it in place.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, Text, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
import enum
from ..database import Base

class Gender(str, enum.Enum):
    """Gender options offered by the health assessment form."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

class Patient(Base):
    """
    Patient Model - Stores patient-specific health information

    Fields:
    - id: Primary key, the identifier handed to the prediction engine
    - user_id: Foreign key to the owning User (unique)
    - age, gender: Demographics
    - blood_sugar, cholesterol, bmi: Clinical measurements
    - blood_pressure_systolic, blood_pressure_diastolic: Blood pressure
    - smoking, alcohol, exercise_hours: Lifestyle
    - family_history, symptoms: Free text
    - last_prediction_date: When the form last requested predictions
    - created_at, updated_at: Row timestamps
    """
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    age = Column(Integer, nullable=True)
    gender = Column(Enum(Gender, values_callable=lambda enum_cls: [member.value for member in enum_cls]), nullable=True)
    blood_sugar = Column(Float, nullable=True)
    cholesterol = Column(Float, nullable=True)
    bmi = Column(Float, nullable=True)
    blood_pressure_systolic = Column(Integer, nullable=True)
    blood_pressure_diastolic = Column(Integer, nullable=True)
    smoking = Column(Boolean, default=False)
    alcohol = Column(Boolean, default=False)
    exercise_hours = Column(Integer, nullable=True)
    family_history = Column(Text, nullable=True)
    symptoms = Column(Text, nullable=True)
    last_prediction_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="patient_record", uselist=False)
    predictions = relationship("RiskPrediction", back_populates="patient", cascade="all, delete-orphan")
    recommendations = relationship("Recommendation", back_populates="patient", cascade="all, delete-orphan")

    def __repr__(self):
        """String representation of the Patient model"""
        return f"<Patient(id={self.id}, user_id={self.user_id})>"

    @property
    def full_name(self) -> str:
        """Get patient's full name from associated user"""
        return self.user.full_name if self.user else None

    @property
    def email(self) -> str:
        """Get patient's email from associated user"""
        return self.user.email if self.user else None
