"""
Rule-based disease risk scoring.

Every score starts from a fixed base, adds cumulative bonuses for each
threshold the record strictly exceeds, and is capped at ``MAX_RISK_SCORE``.
The functions are pure: they only read attributes from the record passed in,
so a ``Patient`` row, a schema object or a ``SimpleNamespace`` all work.
"""
from dataclasses import dataclass
from typing import Any, List, Optional

MAX_RISK_SCORE = 95
RECOMMENDATION_THRESHOLD = 40

DIABETES = "Diabetes"
HEART_DISEASE = "Heart Disease"
HYPERTENSION = "Hypertension"

# Scoring order is part of the engine's output contract
DISEASES = (DIABETES, HEART_DISEASE, HYPERTENSION)


@dataclass(frozen=True)
class RiskScore:
    disease: str
    risk_score: int

    @property
    def needs_recommendation(self) -> bool:
        return self.risk_score >= RECOMMENDATION_THRESHOLD


def _exceeds(value: Optional[float], threshold: float) -> bool:
    # A missing measurement never crosses a threshold
    return value is not None and value > threshold


def _mentions(text: Optional[str], term: str) -> bool:
    return bool(text) and term in text.lower()


def _capped(score: int) -> int:
    return min(MAX_RISK_SCORE, score)


def score_diabetes(record: Any) -> int:
    score = 20
    if _exceeds(record.blood_sugar, 126):
        score += 40
    elif _exceeds(record.blood_sugar, 100):
        score += 20
    if _exceeds(record.bmi, 30):
        score += 20
    elif _exceeds(record.bmi, 25):
        score += 10
    if _mentions(record.family_history, "diabetes"):
        score += 15
    return _capped(score)


def score_heart_disease(record: Any) -> int:
    score = 15
    if _exceeds(record.cholesterol, 240):
        score += 35
    elif _exceeds(record.cholesterol, 200):
        score += 20
    if _exceeds(record.blood_pressure_systolic, 140):
        score += 25
    elif _exceeds(record.blood_pressure_systolic, 130):
        score += 15
    if record.smoking:
        score += 20
    if _exceeds(record.age, 60):
        score += 10
    return _capped(score)


def score_hypertension(record: Any) -> int:
    score = 10
    if _exceeds(record.blood_pressure_systolic, 140):
        score += 40
    elif _exceeds(record.blood_pressure_systolic, 130):
        score += 25
    if _exceeds(record.blood_pressure_diastolic, 90):
        score += 20
    if _exceeds(record.bmi, 30):
        score += 15
    if record.alcohol:
        score += 10
    return _capped(score)


SCORERS = {
    DIABETES: score_diabetes,
    HEART_DISEASE: score_heart_disease,
    HYPERTENSION: score_hypertension,
}


def score_patient(record: Any) -> List[RiskScore]:
    """
    Score a patient record for every supported disease.

    Returns:
        List[RiskScore]: Exactly one score per disease, in ``DISEASES`` order
    """
    return [RiskScore(disease=disease, risk_score=SCORERS[disease](record)) for disease in DISEASES]


def risk_level(risk_score: float) -> str:
    """Bucket a score the way the dashboards color it."""
    if risk_score >= 70:
        return "high"
    if risk_score >= RECOMMENDATION_THRESHOLD:
        return "moderate"
    return "low"
