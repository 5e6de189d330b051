# Storefront Models

from .product import Product, ProductImage, ProductCategoryRef, ProductTag, ProductPage, StockStatus
from .category import Category, CategoryImage, CategoryDisplay
from .order import (
    CustomerAddress,
    OrderCartItem,
    CreateOrderRequest,
    CreateOrderResponse,
    WooCommerceAddress,
    WooCommerceLineItem,
    WooCommerceOrderRequest,
    WooCommerceOrderResponse,
)
from .cart import CartLine, CartItemInput, AddToCartRequest, CheckoutCartRequest, CartResponse

__all__ = [
    "Product",
    "ProductImage",
    "ProductCategoryRef",
    "ProductTag",
    "ProductPage",
    "StockStatus",
    "Category",
    "CategoryImage",
    "CategoryDisplay",
    "CustomerAddress",
    "OrderCartItem",
    "CreateOrderRequest",
    "CreateOrderResponse",
    "WooCommerceAddress",
    "WooCommerceLineItem",
    "WooCommerceOrderRequest",
    "WooCommerceOrderResponse",
    "CartLine",
    "CartItemInput",
    "AddToCartRequest",
    "CheckoutCartRequest",
    "CartResponse",
]
