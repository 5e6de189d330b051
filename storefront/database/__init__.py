# In-memory storage

from .carts import SessionCart, CartDatabase, format_amount

__all__ = ["SessionCart", "CartDatabase", "format_amount"]
