"""Custom exception classes for the admin API."""

from fastapi import status


class AdminError(Exception):
    """Base exception for the admin API."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class AuthenticationError(AdminError):
    """Raised when authentication fails."""
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(AdminError):
    """Raised when user lacks permission."""
    status_code = status.HTTP_403_FORBIDDEN


class ResourceNotFoundError(AdminError):
    """Raised when a requested resource is not found."""
    status_code = status.HTTP_404_NOT_FOUND


class ResourceConflictError(AdminError):
    """Raised when a resource already exists."""
    status_code = status.HTTP_409_CONFLICT


class ValidationError(AdminError):
    """Raised when input validation fails."""
    status_code = status.HTTP_400_BAD_REQUEST
