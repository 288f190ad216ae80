"""Translation of domain failures into HTTP responses.

Handlers are keyed by exception class, so Starlette picks the most specific
one through the exception's MRO. Anything unrecognised becomes an opaque 500;
the traceback stays in the server log.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from storefront.shared.errors import (
    IllegalCancellation,
    InsufficientStock,
    InvalidStatus,
    OrderFinalized,
    OrderNotFound,
    ProductNotFound,
    UserNotFound,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _message_of(exc) -> str:
    message = getattr(exc, "message", None)
    if message:
        return message

    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        return "; ".join(
            f"{field}: {', '.join(map(str, errors)) if isinstance(errors, list) else errors}"
            for field, errors in messages.items()
        )
    return str(messages or exc)


def _respond(status_code: int, exc: Exception, **details) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": type(exc).__name__,
            "message": _message_of(exc),
            "details": details,
        },
    )


async def _user_not_found(request: Request, exc: UserNotFound):
    return _respond(404, exc, user_id=exc.user_id)


async def _product_not_found(request: Request, exc: ProductNotFound):
    return _respond(404, exc, product_id=exc.product_id)


async def _order_not_found(request: Request, exc: OrderNotFound):
    return _respond(404, exc, order_id=exc.order_id)


async def _insufficient_stock(request: Request, exc: InsufficientStock):
    return _respond(
        400,
        exc,
        product_id=exc.product_id,
        product_name=exc.product_name,
        requested=exc.requested,
        available=exc.available,
    )


async def _invalid_status(request: Request, exc: InvalidStatus):
    return _respond(400, exc, value=exc.value, allowed=list(exc.allowed))


async def _status_rule_violated(request: Request, exc: OrderFinalized | IllegalCancellation):
    return _respond(400, exc, current_status=exc.current_status)


async def _not_found(request: Request, exc: ObjectNotFoundError):
    return _respond(404, exc)


async def _validation_failed(request: Request, exc: ValidationError):
    return _respond(400, exc, **exc.messages) if isinstance(exc.messages, dict) else _respond(400, exc)


async def _concurrent_modification(request: Request, exc: ExpectedVersionError):
    logger.warning("concurrent_modification", path=request.url.path, detail=str(exc))
    return JSONResponse(
        status_code=409,
        content={
            "error": "ConcurrentModification",
            "message": "The resource was modified concurrently, retry the request",
            "details": {},
        },
    )


async def _internal_error(request: Request, exc: Exception):
    logger.error("unhandled_exception", path=request.url.path, method=request.method, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "InternalError", "message": "Something went wrong"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the storefront's exception handlers on `app`."""
    # Protean's defaults cover the framework errors the storefront does not map itself
    register_exception_handlers(app)

    app.add_exception_handler(UserNotFound, _user_not_found)
    app.add_exception_handler(ProductNotFound, _product_not_found)
    app.add_exception_handler(OrderNotFound, _order_not_found)
    app.add_exception_handler(InsufficientStock, _insufficient_stock)
    app.add_exception_handler(InvalidStatus, _invalid_status)
    app.add_exception_handler(OrderFinalized, _status_rule_violated)
    app.add_exception_handler(IllegalCancellation, _status_rule_violated)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(ValidationError, _validation_failed)
    app.add_exception_handler(ExpectedVersionError, _concurrent_modification)
    app.add_exception_handler(Exception, _internal_error)
