"""Harvestlane FastAPI application.

Web server for the order-fulfillment core. Commands are processed
synchronously inside each request, wrapped in the ordering domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (handlers fire in UoW)
#   - "production" → event_processing = "async" (handlers fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ordering.domain import ordering  # noqa: E402
from ordering.utils.logging import add_context, clear_context  # noqa: E402

ordering.init()

_ORDERING_PREFIXES = ("/orders",)


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Harvestlane API",
    description="Multi-vendor marketplace: checkout, fulfilment and order views",
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
    """Push the ordering domain context for order routes.

    The caller and path are bound to the structlog context so every log
    line emitted while handling the request carries them.
    """
    if request.url.path.startswith(_ORDERING_PREFIXES):
        add_context(
            path=request.url.path,
            method=request.method,
            user_id=request.headers.get("x-user-id"),
        )
        try:
            with ordering.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers and error mapping
# ---------------------------------------------------------------------------
from ordering.api.errors import register_ordering_exception_handlers  # noqa: E402
from ordering.api.routes import order_router  # noqa: E402

app.include_router(order_router)
register_ordering_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {"ordering": {"name": ordering.name}},
        }
    )
