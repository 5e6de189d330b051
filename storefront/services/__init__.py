# Services

from .woocommerce_client import WooCommerceClient
from .wordpress_client import WordPressClient
from .order_mapper import OrderMapper
from .order_service import OrderService

__all__ = ["WooCommerceClient", "WordPressClient", "OrderMapper", "OrderService"]
