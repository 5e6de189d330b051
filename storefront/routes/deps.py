"""Dependency providers for route handlers.

Services are created once in the app lifespan and kept on ``app.state``.
"""

from fastapi import Request

from ..database.carts import CartDatabase
from ..services.order_service import OrderService
from ..services.woocommerce_client import WooCommerceClient
from ..services.wordpress_client import WordPressClient


def get_woocommerce_client(request: Request) -> WooCommerceClient:
    return request.app.state.woocommerce


def get_wordpress_client(request: Request) -> WordPressClient:
    return request.app.state.wordpress


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


def get_cart_db(request: Request) -> CartDatabase:
    return request.app.state.cart_db
