# explorafit/shared/errors.py
from typing import Any, Optional


class AppError(Exception):
    """Base for every error that is surfaced to API callers.

    Each subclass carries a stable machine-readable ``code`` and the HTTP
    status the boundary should answer with.
    """
    code = "error"
    status = 400
    message = "request failed"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


# --- authentication ---
class AuthenticationError(AppError):
    code = "authentication_error"
    status = 401

class EmailTaken(AuthenticationError):
    code = "email_taken"
    status = 409
    message = "email already registered"

class InvalidCredentials(AuthenticationError):
    code = "invalid_credentials"
    status = 401
    message = "invalid password"

class UserNotFound(AuthenticationError):
    code = "user_not_found"
    status = 404
    message = "user not found"


# --- authorization ---
class AuthorizationError(AppError):
    code = "unauthorized"
    status = 401
    message = "authentication required"

class Unauthorized(AuthorizationError):
    pass


# verifier-level; the HTTP layer maps these to "anonymous"
class InvalidToken(AppError):
    code = "invalid_token"
    status = 401
    message = "invalid token"

class ExpiredToken(InvalidToken):
    code = "expired_token"
    message = "token expired"


# --- metering ---
class CreditError(AppError):
    code = "credit_error"
    status = 402

class InsufficientCredits(CreditError):
    code = "insufficient_credits"
    message = "insufficient credits to create a route"


# --- input / lookup ---
class ValidationError(AppError):
    code = "validation_error"
    status = 422
    message = "invalid input"

class RouteNotFound(AppError):
    code = "route_not_found"
    status = 404
    message = "route not found"


# --- infrastructure ---
class StorageError(AppError):
    code = "storage_error"
    status = 503
    message = "storage unavailable, please retry"
