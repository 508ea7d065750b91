"""
Risk & Recommendation Engine.

Reads one patient record, appends one prediction per disease as a single
batch, then appends a recommendation for every disease whose score reaches
the recommendation threshold. Each recommendation is written independently:
a failed write is logged and reported in the run's per-item results while
the remaining diseases are still attempted.

Runs are append-only. Invoking the engine twice for the same patient stores
two full prediction sets; ``run_id`` only groups the rows of one invocation.
"""
import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from ..exceptions import NotFoundError, PersistenceError
from .recommendations import get_drug_recommendation
from .scoring import RiskScore, score_patient
from .store import PredictionStore

# Set up logging
logger = logging.getLogger(__name__)


@dataclass
class RecommendationOutcome:
    """Result of storing the recommendation for one qualifying disease."""
    disease: str
    stored: bool
    recommendation_id: Optional[int] = None
    error: Optional[str] = None


@dataclass
class PredictionRun:
    patient_id: int
    run_id: str
    predictions: List[RiskScore]
    recommendations: List[RecommendationOutcome] = field(default_factory=list)

    @property
    def failed_recommendations(self) -> List[RecommendationOutcome]:
        return [outcome for outcome in self.recommendations if not outcome.stored]


def run_prediction(store: PredictionStore, patient_id: int) -> PredictionRun:
    """
    Score a stored patient record and persist predictions and recommendations.

    Args:
        store: Record store scoped to the caller
        patient_id: Identifier of the patient record

    Returns:
        PredictionRun: Scores in disease order plus one outcome per qualifying disease

    Raises:
        NotFoundError: If the record does not exist or is not visible to the caller
        PersistenceError: If the record could not be read or the predictions not stored
    """
    logger.info(f"Generating predictions for patient: {patient_id}")

    patient = store.get_patient(patient_id)
    if patient is None:
        raise NotFoundError(f"Patient {patient_id} not found")

    run = PredictionRun(patient_id=patient_id, run_id=str(uuid.uuid4()), predictions=score_patient(patient))

    store.append_predictions(patient_id, run.run_id, run.predictions)
    logger.info(f"Predictions stored for patient {patient_id} (run {run.run_id})")

    for prediction in run.predictions:
        if not prediction.needs_recommendation:
            continue

        recommendation = get_drug_recommendation(prediction.disease, prediction.risk_score)
        try:
            row = store.append_recommendation(patient_id, run.run_id, prediction.disease, recommendation)
        except PersistenceError as e:
            logger.error(f"Error storing recommendation for {prediction.disease}: {e.detail}")
            run.recommendations.append(
                RecommendationOutcome(disease=prediction.disease, stored=False, error=e.detail)
            )
            continue

        logger.info(f"Recommendation stored for {prediction.disease}")
        run.recommendations.append(
            RecommendationOutcome(disease=prediction.disease, stored=True, recommendation_id=row.id)
        )

    return run
