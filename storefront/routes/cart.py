"""Session cart API routes"""

from typing import Optional

from fastapi import APIRouter, Depends

from ..core.errors import NotFoundError
from ..database.carts import CartDatabase, SessionCart, format_amount
from ..models.cart import AddToCartRequest, CartResponse, CheckoutCartRequest
from ..models.order import CreateOrderResponse
from ..services.order_service import OrderService
from .deps import get_cart_db, get_order_service

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def _cart_response(cart: SessionCart, message: Optional[str] = None) -> CartResponse:
    return CartResponse(
        cart_id=cart.cart_id,
        items=cart.lines,
        item_count=cart.item_count,
        subtotal=format_amount(cart.subtotal),
        message=message,
    )


def _get_cart_or_404(cart_db: CartDatabase, cart_id: str) -> SessionCart:
    cart = cart_db.get_cart(cart_id)
    if not cart:
        raise NotFoundError("Cart not found", details={"cart_id": cart_id})
    return cart


@router.post("", response_model=CartResponse)
async def create_cart(cart_db: CartDatabase = Depends(get_cart_db)):
    """Create a new shopping cart"""
    cart = cart_db.create_cart()
    return _cart_response(cart, "Cart created")


@router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(cart_id: str, cart_db: CartDatabase = Depends(get_cart_db)):
    """Get cart by ID"""
    return _cart_response(_get_cart_or_404(cart_db, cart_id))


@router.post("/{cart_id}/items", response_model=CartResponse)
async def add_to_cart(
    cart_id: str,
    request: AddToCartRequest,
    cart_db: CartDatabase = Depends(get_cart_db),
):
    """Add to (or, with a negative quantity, take from) a product's line"""
    cart = _get_cart_or_404(cart_db, cart_id)
    cart.add_to_cart(request.item, request.quantity)
    return _cart_response(cart, f"Updated {request.item.name} by {request.quantity}")


@router.delete("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    cart_id: str,
    product_id: int,
    cart_db: CartDatabase = Depends(get_cart_db),
):
    """Remove an item from the cart"""
    cart = _get_cart_or_404(cart_db, cart_id)
    cart.remove_from_cart(product_id)
    return _cart_response(cart, "Item removed")


@router.delete("/{cart_id}", response_model=CartResponse)
async def clear_cart(cart_id: str, cart_db: CartDatabase = Depends(get_cart_db)):
    """Clear all items from cart"""
    cart = _get_cart_or_404(cart_db, cart_id)
    cart.clear_cart()
    return _cart_response(cart, "Cart cleared")


@router.post("/{cart_id}/checkout", response_model=CreateOrderResponse)
async def checkout(
    cart_id: str,
    request: Optional[CheckoutCartRequest] = None,
    cart_db: CartDatabase = Depends(get_cart_db),
    order_service: OrderService = Depends(get_order_service),
):
    """
    Place a WooCommerce order for the cart's contents.

    The cart is left as is; the client clears it once payment is done.
    """
    cart = _get_cart_or_404(cart_db, cart_id)
    request = request or CheckoutCartRequest()
    return await order_service.checkout_cart(cart, request.billing, request.shipping)
