"""
Global exception handler middleware.

Knowledge base read/write failures surface as 503 so clients can retry;
anything else is a 500. Both responses carry the request id.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError


async def global_exception_handler(request: Request, call_next):
    try:
        return await call_next(request)
    except SQLAlchemyError as exc:
        logger.exception(f"Knowledge base error on {request.method} {request.url.path}")
        return _error_response(request, 503, "Knowledge base unavailable", exc)
    except Exception as exc:
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return _error_response(request, 500, "Internal server error", exc)


def _error_response(request: Request, status_code: int, detail: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "type": type(exc).__name__,
            "request_id": getattr(request.state, "request_id", None),
        },
    )
