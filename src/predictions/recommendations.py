"""
Static drug recommendation table keyed by disease name.
"""
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .scoring import DIABETES, HEART_DISEASE, HYPERTENSION


@dataclass(frozen=True)
class DrugRecommendation:
    drug_list: List[str]
    reason: str


# disease -> (ordered drugs, reason template taking the rounded score)
RECOMMENDATION_TABLE: Dict[str, Tuple[Tuple[str, ...], str]] = {
    DIABETES: (
        ("Metformin", "Glimepiride", "Insulin (if needed)"),
        "Based on your risk score of {score}%, we recommend these medications to help control "
        "blood sugar levels. Metformin is typically the first-line treatment, while Glimepiride "
        "can be added if needed. Regular monitoring and lifestyle changes are also essential.",
    ),
    HEART_DISEASE: (
        ("Aspirin", "Statins (Atorvastatin)", "ACE Inhibitors"),
        "With a {score}% risk, these medications can help reduce cardiovascular risk. Aspirin "
        "prevents blood clots, statins lower cholesterol, and ACE inhibitors help manage blood "
        "pressure and protect the heart.",
    ),
    HYPERTENSION: (
        ("Lisinopril", "Amlodipine", "Hydrochlorothiazide"),
        "For your {score}% hypertension risk, these medications work to lower blood pressure "
        "through different mechanisms. ACE inhibitors like Lisinopril, calcium channel blockers "
        "like Amlodipine, and diuretics like Hydrochlorothiazide are commonly prescribed "
        "first-line treatments.",
    ),
}

FALLBACK_DRUGS = ("Consult your doctor",)
FALLBACK_REASON = "Please consult with your healthcare provider for personalized recommendations."


def get_drug_recommendation(disease: str, risk_score: float) -> DrugRecommendation:
    """
    Look up the drugs and rationale for a disease.

    Args:
        disease: Disease name
        risk_score: Score interpolated (rounded to an integer) into the reason

    Returns:
        DrugRecommendation: Table entry, or a generic "consult your doctor"
        entry for diseases the table does not know
    """
    entry = RECOMMENDATION_TABLE.get(disease)
    if entry is None:
        return DrugRecommendation(drug_list=list(FALLBACK_DRUGS), reason=FALLBACK_REASON)

    drugs, template = entry
    return DrugRecommendation(drug_list=list(drugs), reason=template.format(score=f"{risk_score:.0f}"))
