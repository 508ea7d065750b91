"""
FastAPI dependencies for authentication and authorization.

Every request resolves an explicit ``SessionContext`` from its bearer token.
Services receive that context as an argument instead of reading any global
auth state.
"""
from dataclasses import dataclass
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from ..database import get_db
from ..core.security import decode_access_token
from ..core.permissions import Permission, has_permission
from .models import User, UserRole
from .exceptions import InvalidTokenException, AccountInactiveException, PermissionDeniedException

# OAuth2 scheme for JWT token authentication
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


@dataclass(frozen=True)
class SessionContext:
    """The authenticated caller of a single request."""
    user_id: int
    email: str
    role: UserRole

    @property
    def is_doctor(self) -> bool:
        return self.role == UserRole.DOCTOR

    def can(self, permission: Permission) -> bool:
        return has_permission(self.role, permission)


def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """
    Get current authenticated user from JWT token with database verification.

    Args:
        token: JWT token from Authorization header
        db: Database session

    Returns:
        User: Current authenticated user

    Raises:
        InvalidTokenException: If token is invalid or user not found
        AccountInactiveException: If the account has been deactivated
    """
    claims = decode_access_token(token)
    if not claims:
        raise InvalidTokenException()

    user = db.query(User).filter(User.id == claims["user_id"]).first()
    if not user:
        raise InvalidTokenException("User not found")

    if not user.is_active:
        raise AccountInactiveException()

    return user


def get_session_context(current_user: User = Depends(get_current_user)) -> SessionContext:
    """Build the explicit session context handed to services."""
    return SessionContext(user_id=current_user.id, email=current_user.email, role=current_user.role)


def require_permission(permission: Permission):
    """
    Dependency factory to require a specific permission.

    Args:
        permission: Permission required for access

    Returns:
        Function that checks the caller's role and yields its session context
    """
    def permission_checker(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
        if not ctx.can(permission):
            raise PermissionDeniedException(
                f"Access denied. Missing permission '{permission.value}' for role {ctx.role.value}"
            )
        return ctx
    return permission_checker
