"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from loguru import logger


class AcademyException(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFoundError(AcademyException):
    """A requested record does not exist."""


class ConcurrencyConflictError(AcademyException):
    """An optimistic write lost against a concurrent writer."""


class PersistenceError(AcademyException):
    """Underlying storage failure."""


class ValidationError(AcademyException):
    """Data validation errors."""


class AuthenticationError(AcademyException):
    """Authentication errors."""


class PermissionDeniedError(AcademyException):
    """The caller lacks the role required for an operation."""


class DuplicateCompletionError(AcademyException):
    """A once-only achievement was already recorded."""


def handle_not_found(error: NotFoundError) -> HTTPException:
    logger.info(f"Not found: {error.message}")
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)


def handle_concurrency_conflict(error: ConcurrencyConflictError) -> HTTPException:
    """Retries were exhausted; ask the client to try again."""
    logger.warning(f"Concurrency conflict: {error.message}", **error.details)
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="The record was modified concurrently. Please retry.",
    )


def handle_persistence_error(error: PersistenceError) -> HTTPException:
    """Handle database errors and return appropriate HTTP response."""
    logger.error(f"Persistence error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Database operation failed. Please try again later.",
    )


def handle_validation_error(error: ValidationError) -> HTTPException:
    """Handle validation errors."""
    logger.warning(f"Validation error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"message": error.message, "details": error.details},
    )


def handle_authentication_error(error: AuthenticationError) -> HTTPException:
    """Handle authentication errors."""
    logger.warning(f"Authentication error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=error.message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def handle_permission_denied(error: PermissionDeniedError) -> HTTPException:
    logger.warning(f"Permission denied: {error.message}")
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=error.message)


def handle_duplicate_completion(error: DuplicateCompletionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.message)


def to_http_exception(error: AcademyException) -> HTTPException:
    """Map any application exception to its HTTP counterpart."""

    if isinstance(error, NotFoundError):
        return handle_not_found(error)
    if isinstance(error, ConcurrencyConflictError):
        return handle_concurrency_conflict(error)
    if isinstance(error, PersistenceError):
        return handle_persistence_error(error)
    if isinstance(error, ValidationError):
        return handle_validation_error(error)
    if isinstance(error, AuthenticationError):
        return handle_authentication_error(error)
    if isinstance(error, PermissionDeniedError):
        return handle_permission_denied(error)
    if isinstance(error, DuplicateCompletionError):
        return handle_duplicate_completion(error)
    logger.error(f"Unhandled application error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.message
    )
