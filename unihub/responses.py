"""
UniHub API Response Utilities
Standardized response envelope and exception handlers
"""
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from .exceptions import UniHubError
from .logging_config import api_logger


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================
# SUCCESS RESPONSES
# ============================================================

def success(message: Optional[str] = None, **payload: Any) -> Dict:
    """Create a success envelope; keyword arguments become top-level keys"""
    response = {"success": True}
    response.update(payload)
    if message:
        response["message"] = message
    response["timestamp"] = _now()
    return response


def error_body(message: str, error_code: str, details: Optional[Dict] = None) -> Dict:
    body = {
        "success": False,
        "error": message,
        "error_code": error_code,
        "timestamp": _now(),
    }
    if details:
        body["details"] = details
    return body


# ============================================================
# EXCEPTION HANDLERS
# ============================================================

async def domain_exception_handler(request: Request, exc: UniHubError) -> JSONResponse:
    """Errors raised by the feed engine and campus stores"""
    if exc.status_code >= 500:
        api_logger.error(
            f"Storage failure: {exc.message}",
            status_code=exc.status_code,
            error_code=exc.error_code,
            path=request.url.path,
        )
    else:
        api_logger.warning(
            f"Request rejected: {exc.message}",
            status_code=exc.status_code,
            error_code=exc.error_code,
            path=request.url.path,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.error_code, exc.details),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    api_logger.warning(
        f"HTTP Error: {exc.detail}",
        status_code=exc.status_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), f"HTTP_{exc.status_code}"),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and query parameters"""
    return JSONResponse(
        status_code=422,
        content=error_body(
            "Invalid request",
            "VALIDATION_ERROR",
            {"errors": jsonable_encoder(exc.errors())},
        ),
    )


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    api_logger.error(
        f"Unexpected error: {exc}",
        error=exc,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content=error_body("An unexpected error occurred", "INTERNAL_ERROR"),
    )
