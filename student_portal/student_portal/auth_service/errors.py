"""
Domain errors raised by the signup and login flows.

Each error carries the HTTP status it maps to; ``main`` renders any of them as
``{"error": message}``.
"""
from fastapi import status
from typing import Optional


class AuthServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateEmailError(AuthServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already in use"


class NotFoundError(AuthServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class InvalidCredentialsError(AuthServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid password"


class DatabaseError(AuthServiceError):
    default_message = "Database error"


class PasswordHashingError(AuthServiceError):
    default_message = "Password hashing error"
