"""
Role-based access control.

Patients own exactly one health record and may only see their own results.
Doctors may review every record and approve recommendations. Both roles may
invoke the prediction engine; record visibility is enforced by the store.
"""
from enum import Enum
from typing import Dict, FrozenSet
from ..auth.models import UserRole


class Permission(str, Enum):
    SUBMIT_HEALTH_DATA = "submit_health_data"
    VIEW_OWN_RESULTS = "view_own_results"
    RUN_PREDICTIONS = "run_predictions"
    VIEW_ALL_PATIENTS = "view_all_patients"
    APPROVE_RECOMMENDATIONS = "approve_recommendations"


ROLE_PERMISSIONS: Dict[UserRole, FrozenSet[Permission]] = {
    UserRole.PATIENT: frozenset({
        Permission.SUBMIT_HEALTH_DATA,
        Permission.VIEW_OWN_RESULTS,
        Permission.RUN_PREDICTIONS,
    }),
    UserRole.DOCTOR: frozenset({
        Permission.RUN_PREDICTIONS,
        Permission.VIEW_ALL_PATIENTS,
        Permission.APPROVE_RECOMMENDATIONS,
    }),
}


def has_permission(role: UserRole, permission: Permission) -> bool:
    """Check whether a role grants a permission; unknown roles grant nothing."""
    return permission in ROLE_PERMISSIONS.get(role, frozenset())
