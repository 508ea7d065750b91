"""
Record store used by the prediction engine.

Wraps a SQLAlchemy session with the three operations the engine needs and
translates database failures into ``PersistenceError``. Reads are scoped by
the caller's session context: patients only see their own record.
"""
import logging
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import PersistenceError
from ..auth.dependencies import SessionContext
from ..patients.models import Patient
from .models import RiskPrediction, Recommendation
from .recommendations import DrugRecommendation
from .scoring import RiskScore

# Set up logging
logger = logging.getLogger(__name__)

class PredictionStore:
    """
    Persistence operations behind a prediction run.

    Args:
        db: Database session
        ctx: Caller's session context, or None for trusted in-process calls
    """
    def __init__(self, db: Session, ctx: Optional[SessionContext] = None):
        self.db = db
        self.ctx = ctx

    def get_patient(self, patient_id: int) -> Optional[Patient]:
        """Return the patient record visible to the caller, or None."""
        try:
            query = self.db.query(Patient).filter(Patient.id == patient_id)
            if self.ctx is not None and not self.ctx.is_doctor:
                query = query.filter(Patient.user_id == self.ctx.user_id)
            return query.first()
        except SQLAlchemyError as e:
            logger.error(f"Error reading patient {patient_id}: {str(e)}")
            raise PersistenceError(f"Failed to read patient {patient_id}")

    def append_predictions(self, patient_id: int, run_id: str, scores: Iterable[RiskScore]) -> List[RiskPrediction]:
        """
        Append a full prediction set in a single commit.

        Raises:
            PersistenceError: If the batch could not be written
        """
        rows = [
            RiskPrediction(
                patient_id=patient_id,
                run_id=run_id,
                disease=score.disease,
                risk_score=score.risk_score
            )
            for score in scores
        ]
        try:
            self.db.add_all(rows)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error storing predictions for patient {patient_id}: {str(e)}")
            raise PersistenceError(f"Failed to store predictions: {str(e)}")
        return rows

    def append_recommendation(
        self,
        patient_id: int,
        run_id: str,
        disease: str,
        recommendation: DrugRecommendation
    ) -> Recommendation:
        """
        Append one recommendation in its own commit.

        Raises:
            PersistenceError: If the row could not be written
        """
        row = Recommendation(
            patient_id=patient_id,
            run_id=run_id,
            disease=disease,
            drug_list=recommendation.drug_list,
            reason=recommendation.reason,
            approved=False
        )
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to store {disease} recommendation: {str(e)}")
        return row
