"""
Error responses for game exceptions.

Routes translate the errors they expect into HTTPException. Anything from
the KelimeError family that gets past them is answered here with the
error's own status and body instead of a bare 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.exceptions import ExternalServiceError, KelimeError

logger = logging.getLogger(__name__)


def setup_error_handlers(app: FastAPI) -> None:
    """Register the KelimeError handler on the app."""

    @app.exception_handler(KelimeError)
    async def kelime_error_handler(request: Request, exc: KelimeError) -> JSONResponse:
        if isinstance(exc, ExternalServiceError):
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: {exc.code}")
        return JSONResponse(
            status_code=exc.http_status,
            content={"detail": exc.message, **exc.to_dict()},
        )
