"""Translation between storefront orders and the WooCommerce order API"""

from ..models.order import (
    CreateOrderRequest,
    CreateOrderResponse,
    CustomerAddress,
    WooCommerceAddress,
    WooCommerceLineItem,
    WooCommerceOrderRequest,
    WooCommerceOrderResponse,
)

PAYMENT_METHOD = "woocommerce_payments"
PAYMENT_METHOD_TITLE = "Credit Card / Debit Card"

PLACEHOLDER_ADDRESS = CustomerAddress(
    first_name="Placeholder",
    last_name="Customer",
    street_address="123 Main St",
    city="Stockholm",
    state="Stockholm",
    postal_code="12345",
    country="SE",
    email="placeholder@example.com",
    phone="0701234567",
)


class OrderMapper:
    """Builds WooCommerce order payloads and checkout redirect URLs"""

    def __init__(self, store_url: str):
        """
        Args:
            store_url: Public store base URL, e.g. https://shop.example/
        """
        self.store_url = store_url if store_url.endswith("/") else f"{store_url}/"

    def map_to_woocommerce_request(self, order_request: CreateOrderRequest) -> WooCommerceOrderRequest:
        """
        Convert a storefront order into a WooCommerce order payload.

        Billing falls back to the placeholder address, shipping to billing.
        Quantities are passed through without a stock check.
        """
        billing = order_request.billing or PLACEHOLDER_ADDRESS
        shipping = order_request.shipping or billing

        return WooCommerceOrderRequest(
            payment_method=PAYMENT_METHOD,
            payment_method_title=PAYMENT_METHOD_TITLE,
            set_paid=False,
            billing=self.map_to_woocommerce_address(billing),
            shipping=self.map_to_woocommerce_address(shipping),
            line_items=[
                WooCommerceLineItem(product_id=item.id, quantity=item.quantity)
                for item in order_request.cart
            ],
        )

    def map_from_order_response(self, order_response: dict) -> CreateOrderResponse:
        """Build the order-pay URL the customer is redirected to"""
        order = WooCommerceOrderResponse.model_validate(order_response)
        return CreateOrderResponse(
            order_id=order.id,
            checkout_url=f"{self.store_url}checkout/order-pay/{order.id}/?key={order.order_key}",
        )

    @staticmethod
    def map_to_woocommerce_address(address: CustomerAddress) -> WooCommerceAddress:
        return WooCommerceAddress(
            first_name=address.first_name,
            last_name=address.last_name,
            address_1=address.street_address,
            city=address.city,
            state=address.state,
            postcode=address.postal_code,
            country=address.country,
            email=address.email,
            phone=address.phone,
        )
