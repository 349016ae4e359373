"""Bookstore Ordering FastAPI application.

Web server for checkout, order status changes and cart management.
Every request runs inside the ``ordering`` domain context.

Usage:
    uvicorn app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied.
# STORE_DATABASE_URI switches the catalogue and cart stores to SQLAlchemy.
# SEED_CATALOGUE=1 loads the starter books into an empty catalogue.
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.catalogue import get_catalogue
from ordering.catalogue.seed import seed_catalogue
from ordering.domain import ordering
from ordering.utils.logging import configure_logging

configure_logging()
ordering.init()

if os.getenv("SEED_CATALOGUE"):
    seed_catalogue(get_catalogue())


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Bookstore Ordering API",
    description="Checkout, orders and stock consistency for the online bookstore",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the ordering domain context for each request."""
    with ordering.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from ordering.api import (  # noqa: E402
    cart_router,
    checkout_router,
    order_router,
    register_error_handlers,
)

app.include_router(checkout_router)
app.include_router(order_router)
app.include_router(cart_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": ordering.name})
