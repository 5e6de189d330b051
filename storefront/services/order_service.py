"""Order creation against WooCommerce"""

import logging
from typing import Optional

from pydantic import ValidationError

from ..core.errors import InvalidRequestError, NotFoundError, UpstreamError
from ..database.carts import SessionCart
from ..models.order import CreateOrderRequest, CreateOrderResponse, CustomerAddress
from .order_mapper import OrderMapper
from .woocommerce_client import WooCommerceClient

logger = logging.getLogger(__name__)


class OrderService:
    """
    Creates WooCommerce orders and returns where the customer pays.

    Order creation is one best-effort upstream call: nothing is retried and
    nothing is compensated if WooCommerce half-succeeds.
    """

    def __init__(self, client: WooCommerceClient, mapper: OrderMapper):
        self.client = client
        self.mapper = mapper

    async def create_order(self, order_request: CreateOrderRequest) -> CreateOrderResponse:
        """
        Create an order in WooCommerce and return checkout information.

        Raises:
            InvalidRequestError: the cart is empty (no upstream call is made)
            UpstreamError: WooCommerce rejected the order or could not be reached
        """
        if not order_request.cart:
            raise InvalidRequestError("Cart is empty or invalid")

        order_data = self.mapper.map_to_woocommerce_request(order_request)

        try:
            response = await self.client.create_order(order_data)
            result = self.mapper.map_from_order_response(response)
        except UpstreamError as e:
            logger.error(f"Error creating order: {e.message} (status={e.upstream_status})")
            raise
        except NotFoundError as e:
            logger.error(f"Error creating order: {e.message}")
            raise UpstreamError(e.message, upstream_status=404) from e
        except ValidationError as e:
            logger.error(f"Unexpected WooCommerce order response: {e}")
            raise UpstreamError("Failed to process order") from e

        logger.info(
            f"Order {result.order_id} created with {len(order_data.line_items)} line item(s)"
        )
        return result

    async def checkout_cart(
        self,
        cart: SessionCart,
        billing: Optional[CustomerAddress] = None,
        shipping: Optional[CustomerAddress] = None,
    ) -> CreateOrderResponse:
        """Place an order for everything in a session cart"""
        order_request = CreateOrderRequest(
            cart=cart.to_order_items(),
            billing=billing,
            shipping=shipping,
        )
        return await self.create_order(order_request)
