"""
Password hashing and session tokens.

A session token is a signed JWT whose claims describe the caller: ``sub``
holds the user id as a string, ``email`` and ``role`` are copied from the
account at login time. Only ``sub`` is trusted when the session context is
rebuilt; the account is always re-read from the database.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import jwt, JWTError
from passlib.context import CryptContext
import logging

from ..config import settings

# Set up logging
logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    user_id: int,
    email: str,
    role: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Issue a session token for an account.

    Args:
        user_id: Account id, stored in the ``sub`` claim
        email: Account email
        role: Role name (``PATIENT`` or ``DOCTOR``)
        expires_delta: Lifetime override; defaults to the configured expiry

    Returns:
        str: Encoded JWT
    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode a session token.

    Returns:
        The claims, or None when the token is malformed, tampered with,
        expired or carries no usable subject
    """
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.warning(f"Token verification failed: {str(e)}")
        return None

    subject = claims.get("sub")
    if not subject or not str(subject).isdigit():
        logger.warning("Token verification failed: missing or non-numeric subject")
        return None

    claims["user_id"] = int(subject)
    return claims
