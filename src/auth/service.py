"""
Authentication service layer for business logic.
"""
import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from fastapi import Request
from typing import Optional

from ..core.security import hash_password, verify_password, create_access_token
from ..core.audit_service import record_audit_event
from ..exceptions import PersistenceError
from .models import User, UserRole
from .schemas import UserCreate, UserResponse, LoginResponse
from .exceptions import InvalidCredentialsException, EmailAlreadyExistsException, AccountInactiveException

# Set up logging
logger = logging.getLogger(__name__)

def register_user(db: Session, user_data: UserCreate, role: UserRole) -> User:
    """
    Register a new active user with the given role.

    Args:
        db: Database session
        user_data: Registration payload
        role: Role assigned to the new account

    Returns:
        User: The created user

    Raises:
        EmailAlreadyExistsException: If the email is already registered
        PersistenceError: If the user could not be stored
    """
    email = user_data.email.lower()
    if db.query(User).filter(User.email == email).first():
        logger.warning(f"Registration failed: {email} already registered")
        raise EmailAlreadyExistsException()

    user = User(
        email=email,
        full_name=user_data.full_name,
        password_hash=hash_password(user_data.password),
        role=role,
        is_active=True
    )
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error registering {role.value.lower()} {email}: {str(e)}")
        raise PersistenceError("An error occurred while creating the account")

    logger.info(f"Registered {role.value.lower()} account {user.id} ({email})")
    return user

def login_user(
    db: Session,
    email: str,
    password: str,
    request: Optional[Request] = None
) -> LoginResponse:
    """
    Authenticate a user and generate access token.

    Args:
        db: Database session
        email: User's email address
        password: User's password
        request: FastAPI request object for audit logging

    Returns:
        LoginResponse with access token and user information

    Raises:
        InvalidCredentialsException: If credentials are invalid
        AccountInactiveException: If the account has been deactivated
    """
    email = email.lower()
    user = db.query(User).filter(User.email == email).first()

    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"Login failed: Invalid credentials for {email}")
        record_audit_event(
            db,
            action="USER_LOGIN_FAILED_INVALID_CREDENTIALS",
            user_id=user.id if user else None,
            request=request,
            details={"email": email}
        )
        db.commit()
        raise InvalidCredentialsException()

    if not user.is_active:
        logger.warning(f"Login failed: Account {user.id} is deactivated")
        raise AccountInactiveException()

    access_token = create_access_token(user.id, user.email, user.role.value)

    record_audit_event(db, action="USER_LOGIN_SUCCESS", user_id=user.id, request=request)
    db.commit()

    logger.info(f"Login successful: User {user.id} ({email})")

    return LoginResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user)
    )
