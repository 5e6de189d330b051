"""
Pytest configuration and fixtures for tests.

Upstream WooCommerce and WordPress APIs are faked with httpx.MockTransport,
so no test touches the network.
"""

import json
import os

import httpx
import pytest
from fastapi.testclient import TestClient

# Required settings must exist before anything reads the environment
os.environ.setdefault("WOOCOMMERCE_API_URL", "https://shop.test/wp-json/wc/v3/")
os.environ.setdefault("WOOCOMMERCE_CONSUMER_KEY", "test-key")
os.environ.setdefault("WOOCOMMERCE_CONSUMER_SECRET", "test-secret")
os.environ.setdefault("WOOCOMMERCE_STORE_URL", "https://shop.test/")

from storefront.core.cache import TTLCache
from storefront.core.config import Settings
from storefront.main import create_app
from storefront.services.woocommerce_client import WooCommerceClient
from storefront.services.wordpress_client import WordPressClient

WOO_BASE = "https://shop.test/wp-json/wc/v3/"
WP_BASE = "https://cms.test/wp-json/wp/v2/"


def make_product(product_id, name="Mug", price="399", **extra):
    """Raw WooCommerce REST product"""
    product = {
        "id": product_id,
        "name": name,
        "description": "<p>Handmade stoneware.</p>",
        "short_description": "<p>Stoneware</p>",
        "images": [{"src": f"https://shop.test/img/{product_id}.jpg", "alt": name}],
        "price": price,
        "regular_price": price,
        "sale_price": "",
        "stock_status": "instock",
        "stock_quantity": 5,
        "categories": [{"id": 10, "name": "Mugs", "slug": "mugs"}],
        "tags": [],
    }
    product.update(extra)
    return product


def make_course(product_id, name="Wheel throwing"):
    return make_product(
        product_id,
        name=name,
        price="1200",
        tags=[{"id": 3, "name": "Course one", "slug": "courses-one"}],
    )


class FakeWooCommerce:
    """Minimal WooCommerce REST API"""

    def __init__(self):
        self.products = [make_product(1), make_product(2, name="Bowl", price="39900"), make_course(3)]
        self.categories = [
            {
                "id": 10,
                "name": "Mugs &amp; Cups",
                "slug": "mugs",
                "description": "<p>All mugs</p>",
                "display": "default",
                "image": None,
            }
        ]
        self.orders = []
        self.requests = []
        self.order_error = None
        self.failing_paths = set()
        # path -> canned httpx.Response, e.g. a maintenance page
        self.overrides = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/wp-json/wc/v3/")

        if path in self.failing_paths:
            return httpx.Response(500, json={"code": "internal_error", "message": "Upstream failure"})
        if path in self.overrides:
            return self.overrides[path]

        if request.method == "GET" and path == "products":
            return httpx.Response(
                200,
                json=self.products,
                headers={"X-WP-Total": str(len(self.products)), "X-WP-TotalPages": "1"},
            )
        if request.method == "GET" and path == "products/categories":
            return httpx.Response(200, json=self.categories)
        if request.method == "GET" and path.startswith("products/"):
            product_id = int(path.split("/")[1])
            for product in self.products:
                if product["id"] == product_id:
                    return httpx.Response(200, json=product)
            return httpx.Response(404, json={"code": "woocommerce_rest_product_invalid_id", "message": "Invalid ID."})
        if request.method == "POST" and path == "orders":
            if self.order_error:
                status, body = self.order_error
                return httpx.Response(status, json=body)
            payload = json.loads(request.content)
            self.orders.append(payload)
            order_id = 100 + len(self.orders)
            return httpx.Response(
                201,
                json={"id": order_id, "order_key": f"wc_order_{order_id}", "status": "pending", **payload},
            )
        return httpx.Response(404, json={"message": "No route"})


class FakeWordPress:
    def __init__(self):
        self.pages = {
            "startsida": [
                {
                    "id": 7,
                    "slug": "startsida",
                    "title": {"rendered": "Start"},
                    "content": {
                        "rendered": (
                            '<figure class="wp-block-video"><video controls src="/wp-content/uploads/clay.mp4">'
                            "</video></figure>"
                            '<img src="https://cms.test/hero.jpg" alt="Studio">'
                            '<div class="wp-block-button"><a href="https://shop.test/product/blue-vase/">Buy</a></div>'
                        )
                    },
                }
            ]
        }
        self.requests = []
        # httpx.Response to answer with, or an exception to raise
        self.override = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.override, Exception):
            raise self.override
        if self.override is not None:
            return self.override
        if request.url.path.endswith("/pages"):
            return httpx.Response(200, json=self.pages.get(request.url.params.get("slug"), []))
        return httpx.Response(404, json={"message": "No route"})


@pytest.fixture
def fake_woo():
    return FakeWooCommerce()


@pytest.fixture
def fake_wp():
    return FakeWordPress()


@pytest.fixture
def woo_client(fake_woo):
    return WooCommerceClient(
        base_url=WOO_BASE,
        consumer_key="test-key",
        consumer_secret="test-secret",
        cache=TTLCache(),
        transport=httpx.MockTransport(fake_woo.handler),
    )


@pytest.fixture
def wp_client(fake_wp):
    return WordPressClient(base_url=WP_BASE, cache=TTLCache(), transport=httpx.MockTransport(fake_wp.handler))


@pytest.fixture
def settings():
    return Settings(
        woocommerce_api_url=WOO_BASE,
        woocommerce_consumer_key="test-key",
        woocommerce_consumer_secret="test-secret",
        woocommerce_store_url="https://shop.test/",
        wordpress_api_url=WP_BASE,
        environment="development",
        preload_enabled=False,
    )


@pytest.fixture
def client(settings, fake_woo, fake_wp):
    """FastAPI test client wired to the fake upstreams"""
    app = create_app(
        settings,
        woocommerce_transport=httpx.MockTransport(fake_woo.handler),
        wordpress_transport=httpx.MockTransport(fake_wp.handler),
    )
    with TestClient(app) as test_client:
        yield test_client
