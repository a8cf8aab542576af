"""Exception handlers mapping lifecycle and store errors to ``{"error": ...}`` bodies."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from protocol_webhook.core.errors import InvalidStateError, ProtocolNotFoundError, StoreError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register the exception handlers on *app*."""

    @app.exception_handler(ProtocolNotFoundError)
    async def not_found_handler(request: Request, exc: ProtocolNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": "Protocol not found"})

    @app.exception_handler(InvalidStateError)
    async def invalid_state_handler(request: Request, exc: InvalidStateError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Protocol already completed", "currentStatus": exc.current_status},
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.exception("Store failure on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})
