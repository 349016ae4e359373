from ordering.api.errors import register_error_handlers
from ordering.api.routes import cart_router, checkout_router, order_router

__all__ = ["cart_router", "checkout_router", "order_router", "register_error_handlers"]
