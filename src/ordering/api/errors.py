"""HTTP mapping of ordering errors.

| Error                                 | Status | Body                                   |
|---------------------------------------|--------|----------------------------------------|
| ValidationError / request validation  | 400    | {"error": {field: [messages]}}         |
| InsufficientStock                     | 400    | {"error": {message, available, ...}}   |
| Forbidden                             | 403    | {"error": "Forbidden"}                 |
| ObjectNotFoundError                   | 404    | {"error": "Not found"}                 |
| Conflict / ExpectedVersionError       | 409    | {"error": "...please retry"}           |
| Internal / anything else              | 500    | {"error": "Internal server error"}     |

Forbidden, not-found and internal errors never echo internal detail.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from ordering.errors import Conflict, Forbidden, InsufficientStock, Internal

logger = structlog.get_logger(__name__)


async def _validation_error(_request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.messages})


async def _request_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", []) if part != "body") or "body"
        errors.setdefault(field, []).append(err.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content={"error": errors})


async def _insufficient_stock(_request: Request, exc: InsufficientStock) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.to_dict()})


async def _forbidden(request: Request, exc: Forbidden) -> JSONResponse:
    logger.info("Forbidden", path=request.url.path, reason=exc.message)
    return JSONResponse(status_code=403, content={"error": "Forbidden"})


async def _not_found(request: Request, _exc: ObjectNotFoundError) -> JSONResponse:
    logger.info("Not found", path=request.url.path)
    return JSONResponse(status_code=404, content={"error": "Not found"})


async def _conflict(_request: Request, exc: Exception) -> JSONResponse:
    message = exc.message if isinstance(exc, Conflict) else "Order changed concurrently, please retry"
    return JSONResponse(status_code=409, content={"error": message})


async def _internal(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", path=request.url.path, method=request.method, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_ordering_exception_handlers(app: FastAPI) -> None:
    """Protean's default handlers, refined for the ordering error taxonomy."""
    register_exception_handlers(app)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(InsufficientStock, _insufficient_stock)
    app.add_exception_handler(Forbidden, _forbidden)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(Conflict, _conflict)
    app.add_exception_handler(ExpectedVersionError, _conflict)
    app.add_exception_handler(Internal, _internal)
    app.add_exception_handler(Exception, _internal)
