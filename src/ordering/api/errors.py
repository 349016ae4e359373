"""Map ordering errors onto HTTP responses.

Protean's FastAPI integration handles its own exceptions:

- ``ValidationError`` (empty cart, short stock, bad status change) → 400
- ``ObjectNotFoundError`` (unknown order or book) → 404

Anything else is logged and answered with a bare 500.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

logger = structlog.get_logger(__name__)


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(Exception, _unexpected)
