"""Cart models for the storefront"""

from pydantic import BaseModel, Field
from typing import Optional

from .order import CustomerAddress


class CartLine(BaseModel):
    """One product's entry in a session cart"""
    product_id: int
    name: str
    unit_price: str = ""
    quantity: int = Field(ge=1)
    image_url: str = ""
    description: str = ""


class CartItemInput(BaseModel):
    """Product details the client sends when adding to the cart"""
    id: int
    name: str
    price: str = ""
    image_url: str = ""
    description: str = ""


class AddToCartRequest(BaseModel):
    """Request to change a product's quantity in the cart"""
    item: CartItemInput
    # May be negative; the line is removed once it reaches zero
    quantity: int = 1


class CheckoutCartRequest(BaseModel):
    billing: Optional[CustomerAddress] = None
    shipping: Optional[CustomerAddress] = None


class CartResponse(BaseModel):
    """Cart API response"""
    cart_id: str
    items: list[CartLine] = []
    item_count: int = 0
    subtotal: str = "0"
    message: Optional[str] = None
