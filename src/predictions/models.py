"""
Prediction Models - Append-only risk scores and the drug recommendations they trigger.
"""
from typing import Optional
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from ..database import Base

class RiskPrediction(Base):
    """
    RiskPrediction Model - One disease risk score from one engine run

    Fields:
    - id: Primary key
    - patient_id: Foreign key to Patient
    - run_id: Groups the rows written by a single engine invocation
    - disease: Disease name
    - risk_score: Integer score between 0 and 100
    - created_at: When the row was appended

    Rows are never updated; the table is the patient's prediction history.
    """
    __tablename__ = "predictions"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    run_id = Column(String(36), nullable=False, index=True)
    disease = Column(String, nullable=False)
    risk_score = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    patient = relationship("Patient", back_populates="predictions")

    def __repr__(self):
        return f"<RiskPrediction(id={self.id}, patient_id={self.patient_id}, disease='{self.disease}', risk_score={self.risk_score})>"


class Recommendation(Base):
    """
    Recommendation Model - Drug suggestions for a disease scored at or above the threshold

    Fields:
    - id: Primary key
    - patient_id: Foreign key to Patient
    - run_id: Engine run that produced the recommendation
    - disease: Disease name, present in the same run's predictions
    - drug_list: Ordered list of drug names
    - reason: Rationale shown to the patient
    - approved: Set once by a doctor, never reverted
    - doctor_comment: Optional note stored with the approval
    - created_at: When the row was appended
    """
    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    run_id = Column(String(36), nullable=False, index=True)
    disease = Column(String, nullable=False)
    drug_list = Column(JSON, nullable=False)
    reason = Column(Text, nullable=False)
    approved = Column(Boolean, nullable=False, default=False)
    doctor_comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    patient = relationship("Patient", back_populates="recommendations")

    def __repr__(self):
        return f"<Recommendation(id={self.id}, patient_id={self.patient_id}, disease='{self.disease}', approved={self.approved})>"

    def approve(self, comment: Optional[str] = None) -> bool:
        """
        Mark the recommendation approved with an optional doctor comment.

        Returns:
            bool: False when it was already approved and nothing changed
        """
        if self.approved:
            return False
        self.approved = True
        self.doctor_comment = comment
        return True
