"""Storefront API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.middleware import bind_request_context
from storefront.api.routes import order_router, product_router, user_router

__all__ = ["order_router", "product_router", "user_router", "register_error_handlers", "bind_request_context"]
