"""
API Error Handlers

Map analytics errors to JSON responses.
"""

from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from order_analytics.analytics.exceptions import AnalyticsError

logger = structlog.get_logger(__name__)


async def analytics_error_handler(request: Request, exc: AnalyticsError) -> JSONResponse:
    """Render an AnalyticsError with its status code."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Analytics operation failed",
        path=request.url.path,
        error=exc.message,
        error_type=type(exc).__name__,
        details=exc.details,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": type(exc).__name__,
            "message": exc.message,
            "details": exc.details,
            "timestamp": datetime.now().isoformat(),
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AnalyticsError, analytics_error_handler)
