"""Session cart storage"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..models.cart import CartLine, CartItemInput
from ..models.order import OrderCartItem


def format_amount(amount: Decimal) -> str:
    """Whole amounts without decimals, others with two"""
    if amount == amount.to_integral_value():
        return str(int(amount))
    return f"{amount:.2f}"


class SessionCart:
    """
    Cart of a single session.

    Holds at most one line per product id; a line whose quantity reaches
    zero or below is removed. All operations are synchronous and in memory.
    """

    def __init__(self, cart_id: Optional[str] = None):
        self.cart_id = cart_id or str(uuid.uuid4())
        self._lines: dict[int, CartLine] = {}
        self.created_at = datetime.now(timezone.utc)
        self.updated_at = self.created_at

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    def get_line(self, product_id: int) -> Optional[CartLine]:
        return self._lines.get(product_id)

    def add_to_cart(self, item: CartItemInput, quantity_delta: int = 1) -> None:
        """
        Add ``quantity_delta`` of a product, merging with an existing line.

        The delta may be negative. There is no stock check.
        """
        existing = self._lines.get(item.id)

        if existing:
            existing.quantity += quantity_delta
            if existing.quantity <= 0:
                del self._lines[item.id]
        elif quantity_delta > 0:
            self._lines[item.id] = CartLine(
                product_id=item.id,
                name=item.name,
                unit_price=item.price,
                quantity=quantity_delta,
                image_url=item.image_url,
                description=item.description,
            )

        self._touch()

    def remove_from_cart(self, product_id: int) -> None:
        """Remove a product's line; no-op when absent"""
        self._lines.pop(product_id, None)
        self._touch()

    def clear_cart(self) -> None:
        self._lines.clear()
        self._touch()

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    @property
    def subtotal(self) -> Decimal:
        """Sum of unit price times quantity; unpriced lines count as zero"""
        total = Decimal(0)
        for line in self._lines.values():
            try:
                total += Decimal(line.unit_price) * line.quantity
            except InvalidOperation:
                continue
        return total

    def to_order_items(self) -> list[OrderCartItem]:
        return [
            OrderCartItem(id=line.product_id, quantity=line.quantity)
            for line in self._lines.values()
        ]

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)


class CartDatabase:
    """In-memory cart storage, keyed by cart id; lost on restart"""

    def __init__(self):
        self.carts: dict[str, SessionCart] = {}

    def create_cart(self) -> SessionCart:
        """Create a new cart"""
        cart = SessionCart()
        self.carts[cart.cart_id] = cart
        return cart

    def get_cart(self, cart_id: str) -> Optional[SessionCart]:
        """Get a cart by ID"""
        return self.carts.get(cart_id)

    def get_or_create_cart(self, cart_id: Optional[str] = None) -> SessionCart:
        """Get existing cart or create new one"""
        if cart_id and cart_id in self.carts:
            return self.carts[cart_id]
        return self.create_cart()

    def delete_cart(self, cart_id: str) -> bool:
        """Delete a cart"""
        if cart_id in self.carts:
            del self.carts[cart_id]
            return True
        return False

    def cleanup_old_carts(self, max_age_hours: int = 24) -> int:
        """Remove carts untouched for more than max_age_hours"""
        now = datetime.now(timezone.utc)
        old_carts = [
            cid for cid, cart in self.carts.items()
            if (now - cart.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for cid in old_carts:
            del self.carts[cid]
        return len(old_carts)
