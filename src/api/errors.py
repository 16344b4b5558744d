"""JSON error responses shared by the route handlers.

Every error body has an ``error`` message; most also carry a machine-readable
``code`` taken from the domain error class.
"""

import logging
from fastapi import status
from fastapi.responses import JSONResponse

from domain.model.errors import DomainError

UNEXPECTED_ERROR_CODE = "UNEXPECTED_ERROR"


def error_response(status_code: int, error: str, code: str | None = None, **fields) -> JSONResponse:
    content = {"error": error}
    if code:
        content["code"] = code
    content.update(fields)
    return JSONResponse(status_code=status_code, content=content)


def validation_error_response(message: str) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR")


def domain_error_response(status_code: int, exc: DomainError, with_code: bool = True) -> JSONResponse:
    return error_response(status_code, exc.message, exc.code if with_code else None)


def unexpected_error_response(
    logger: logging.Logger,
    exc: Exception,
    operation: str,
    error: str = "Internal server error",
    with_code: bool = False,
    **log_extra,
) -> JSONResponse:
    """Log the failure with its traceback and answer 500 without leaking detail."""
    logger.error(f"Unexpected error during {operation}", exc_info=exc, extra={
        "error": str(exc)[:200],
        **log_extra,
    })
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error,
        UNEXPECTED_ERROR_CODE if with_code else None,
    )
