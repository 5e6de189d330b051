"""Order models for the storefront and the WooCommerce order API"""

from pydantic import BaseModel, Field
from typing import Optional


class CustomerAddress(BaseModel):
    """Address as submitted by the storefront client"""
    first_name: str
    last_name: str
    street_address: str
    city: str
    state: str = ""
    postal_code: str
    country: str = "SE"
    email: str
    phone: str = ""


class OrderCartItem(BaseModel):
    """Minimal cart entry needed to place an order"""
    id: int
    quantity: int = Field(gt=0)


class CreateOrderRequest(BaseModel):
    """Order submitted by the storefront client"""
    cart: list[OrderCartItem] = []
    billing: Optional[CustomerAddress] = None
    shipping: Optional[CustomerAddress] = None


class CreateOrderResponse(BaseModel):
    """Where to send the customer to pay"""
    order_id: int
    checkout_url: str


class WooCommerceAddress(BaseModel):
    first_name: str
    last_name: str
    address_1: str
    city: str
    state: str
    postcode: str
    country: str
    email: str
    phone: str


class WooCommerceLineItem(BaseModel):
    product_id: int
    quantity: int


class WooCommerceOrderRequest(BaseModel):
    """Payload for POST /orders on the WooCommerce REST API"""
    payment_method: str
    payment_method_title: str
    # Payment capture happens in WooCommerce, never here
    set_paid: bool = False
    billing: WooCommerceAddress
    shipping: WooCommerceAddress
    line_items: list[WooCommerceLineItem]


class WooCommerceOrderResponse(BaseModel):
    """Fields of the WooCommerce order response that the storefront reads"""
    id: int
    order_key: str
    status: str = ""
    total: str = ""
    currency: str = ""
