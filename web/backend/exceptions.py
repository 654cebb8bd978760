#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    status_code = 500


class ValidationException(ServiceException):
    """Raised when a request is well-formed but cannot be honoured."""
    status_code = 400


class AuthenticationException(ServiceException):
    """Raised when the caller could not be identified."""
    status_code = 401


class AuthorizationException(ServiceException):
    """Raised when the caller may not perform the operation."""
    status_code = 403


class NotFoundException(ServiceException):
    """Raised when a requested record does not exist."""
    status_code = 404


class JobNotFoundException(NotFoundException):
    """Raised when a job is not found."""
    pass


class ConflictException(ServiceException):
    """Raised when the operation would duplicate an existing record."""
    status_code = 409


def _error_response(status_code: int, error, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "type": error_type
        }
    )


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    if exc.status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    return _error_response(exc.status_code, str(exc), exc.__class__.__name__)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return _error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    The exception message is logged, never returned to the client.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return _error_response(500, "Internal server error", "InternalError")
