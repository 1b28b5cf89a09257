"""
Maps data-access errors onto HTTP responses.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lunchly.errors import LunchlyError

logger = logging.getLogger(__name__)


async def lunchly_exception_handler(request: Request, exc: LunchlyError) -> JSONResponse:
    """Render a LunchlyError as {"error": message}; server-side details stay in the log."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
        message = "Internal server error"
    else:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.message}")
        message = exc.message

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LunchlyError, lunchly_exception_handler)
