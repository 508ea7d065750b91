"""
Authentication-specific exceptions.
"""
from fastapi import HTTPException, status

class AuthException(HTTPException):
    """Base class for authentication exceptions."""
    def __init__(self, status_code: int, detail: str, headers: dict = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

class InvalidCredentialsException(AuthException):
    """Exception raised when credentials are invalid."""
    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class EmailAlreadyExistsException(AuthException):
    """Exception raised when email already exists."""
    def __init__(self, detail: str = "Email already registered"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class InvalidTokenException(AuthException):
    """Exception raised when token is invalid or expired."""
    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )

class AccountInactiveException(AuthException):
    """Exception raised when a deactivated account tries to act."""
    def __init__(self, detail: str = "Account has been deactivated"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

class PermissionDeniedException(AuthException):
    """Exception raised when user doesn't have required permissions."""
    def __init__(self, detail: str = "Permission denied"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
