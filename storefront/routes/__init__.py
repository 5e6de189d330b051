# API Routes

from .products import router as products_router
from .orders import router as orders_router
from .pages import router as pages_router
from .cart import router as cart_router

__all__ = ["products_router", "orders_router", "pages_router", "cart_router"]
