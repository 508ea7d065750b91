from sqlalchemy.orm import Session
from fastapi import Request
from typing import Optional, Dict, Any

from .audit_models import AuditLog

def record_audit_event(
    db: Session,
    action: str,
    user_id: Optional[int] = None,
    request: Optional[Request] = None,
    details: Optional[Dict[str, Any]] = None
) -> AuditLog:
    """
    Stage an audit log entry in the current session.

    The entry is committed together with the change it describes, so a
    rolled-back approval leaves no audit trail behind.

    Args:
        db: The database session.
        action: What happened (e.g. 'USER_LOGIN_SUCCESS', 'RECOMMENDATION_APPROVED').
        user_id: The ID of the user who performed the action (if applicable).
        request: The FastAPI request object to extract IP address (if available).
        details: Additional context related to the action.

    Returns:
        The pending AuditLog object.
    """
    ip_address = None
    if request and request.client:
        ip_address = request.client.host

    audit_entry = AuditLog(
        user_id=user_id,
        action=action,
        ip_address=ip_address,
        details=details
    )
    db.add(audit_entry)
    return audit_entry
