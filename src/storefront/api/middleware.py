"""HTTP middleware binding request details to every log event of the request."""

from uuid import uuid4

from fastapi import Request

from storefront.utils.logging import add_context, clear_context

REQUEST_ID_HEADER = "X-Request-ID"


async def bind_request_context(request: Request, call_next):
    """Bind `request_id`, `method` and `path`, and echo the request id back."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    add_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        response = await call_next(request)
    finally:
        clear_context()

    response.headers[REQUEST_ID_HEADER] = request_id
    return response
