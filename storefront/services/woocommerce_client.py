"""
WooCommerce API Client

HTTP client for the upstream WooCommerce REST API.
Authenticates with consumer key/secret over basic auth and serves reads
from a short-lived in-memory cache.
"""

import logging
import time
from typing import Optional, Any, Callable, TypeVar

import httpx

from ..core.cache import TTLCache
from ..core.errors import NotFoundError, UpstreamError, upstream_message
from ..models.product import Product, ProductPage
from ..models.category import Category
from ..models.order import WooCommerceOrderRequest
from .normalizer import map_product, map_category, is_course_product

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRODUCT_FIELDS = (
    "id,name,description,short_description,images,categories,tags,variations,"
    "attributes,price,regular_price,sale_price,prices,stock_status,stock_quantity"
)


def _decode_json(response: httpx.Response, path: str) -> Any:
    """Response body as JSON; a non-JSON 2xx body (maintenance page) is an upstream failure"""
    try:
        return response.json()
    except ValueError as e:
        logger.error(f"Invalid JSON from WooCommerce {path}: {response.text[:200]!r}")
        raise UpstreamError(
            "Invalid response from WooCommerce",
            upstream_status=response.status_code,
            details={"path": path},
        ) from e


def _map_records(mapper: Callable[[dict], T], records: Any, path: str) -> list[T]:
    """Map a list of raw records, treating malformed ones as an upstream failure"""
    try:
        if not isinstance(records, list):
            raise TypeError(f"expected a list, got {type(records).__name__}")
        return [mapper(record) for record in records]
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        logger.error(f"Malformed WooCommerce record from {path}: {e!r}")
        raise UpstreamError(
            "Invalid response from WooCommerce",
            details={"path": path},
        ) from e


def _header_int(headers: httpx.Headers, name: str, default: int) -> int:
    try:
        return int(headers.get(name, default)) or default
    except (TypeError, ValueError):
        return default


class WooCommerceClient:
    """
    Client for the WooCommerce REST API (v3).

    No retries: a failed call raises UpstreamError to the caller.
    """

    def __init__(
        self,
        base_url: str,
        consumer_key: str,
        consumer_secret: str,
        cache: Optional[TTLCache] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize WooCommerce client.

        Args:
            base_url: REST base, e.g. https://shop.example/wp-json/wc/v3/
            consumer_key: WooCommerce consumer key
            consumer_secret: WooCommerce consumer secret
            cache: Shared response cache
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.cache = cache if cache is not None else TTLCache()
        self._auth = httpx.BasicAuth(consumer_key, consumer_secret)
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def get_cache(self, key: str) -> Optional[Any]:
        return self.cache.get(key)

    def set_cache(self, key: str, value: Any) -> None:
        self.cache.set(key, value)

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict] = None,
        body: Optional[dict] = None,
    ) -> httpx.Response:
        """Make an authenticated request, raising UpstreamError on failure"""
        url = f"{self.base_url}{path}"
        start = time.perf_counter()

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                params=params,
                json=body,
                auth=self._auth,
                headers={"Accept": "application/json"},
            )
        except httpx.RequestError as e:
            logger.error(f"WooCommerce request failed: {method} {path} - {e!r}")
            raise UpstreamError(
                "WooCommerce API unreachable",
                details={"path": path, "reason": str(e)},
            ) from e

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(f"WooCommerce API {method} {path} {response.status_code} {duration_ms:.0f}ms")

        if response.status_code >= 400:
            message = upstream_message(response)
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            if response.status_code == 404:
                raise NotFoundError(message or "Resource not found", details={"path": path})
            raise UpstreamError(
                message or "WooCommerce API error",
                upstream_status=response.status_code,
                details={"path": path},
            )

        return response

    # ==================== Product APIs ====================

    async def _fetch_product_page(
        self, page: int, per_page: int
    ) -> tuple[list[Product], httpx.Headers, list[bool]]:
        """Fetch and map one upstream page, flagging which products are courses"""
        response = await self._request(
            "GET",
            "products",
            params={"page": page, "per_page": per_page, "_fields": PRODUCT_FIELDS},
        )
        raw_products = _decode_json(response, "products") or []
        products = _map_records(map_product, raw_products, "products")
        return (
            products,
            response.headers,
            [is_course_product(p) for p in raw_products],
        )

    async def get_products(
        self,
        page: int = 1,
        per_page: int = 12,
        include_courses: bool = False,
        use_cache: bool = True,
    ) -> ProductPage:
        """
        Get a page of shop products.

        Course products are filtered out unless include_courses is set.
        """
        cache_key = f"products:{page}:{per_page}:{int(include_courses)}"
        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        products, headers, course_flags = await self._fetch_product_page(page, per_page)
        if include_courses:
            kept = products
            logger.info(f"[SHOP] fetched={len(products)} (courses included)")
        else:
            kept = [p for p, is_course in zip(products, course_flags) if not is_course]
            logger.info(f"[SHOP] fetched={len(products)} filteredOutCourses={len(products) - len(kept)}")

        result = ProductPage(
            products=kept,
            total_pages=_header_int(headers, "x-wp-totalpages", 1),
            total_products=_header_int(headers, "x-wp-total", 0),
            current_page=page,
        )
        self.cache.set(cache_key, result)
        return result

    async def get_courses(
        self,
        page: int = 1,
        per_page: int = 12,
        use_cache: bool = True,
    ) -> ProductPage:
        """Get a page of products, keeping only courses"""
        cache_key = f"courses:{page}:{per_page}"
        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        products, headers, course_flags = await self._fetch_product_page(page, per_page)
        courses = [p for p, is_course in zip(products, course_flags) if is_course]
        logger.info(f"[COURSES] fetched={len(products)} keptCourses={len(courses)}")

        result = ProductPage(
            products=courses,
            total_pages=_header_int(headers, "x-wp-totalpages", 1),
            total_products=_header_int(headers, "x-wp-total", 0),
            current_page=page,
        )
        self.cache.set(cache_key, result)
        return result

    async def get_product_by_id(self, product_id: int, use_cache: bool = True) -> Product:
        """Get product details"""
        cache_key = f"product:{product_id}"
        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        response = await self._request("GET", f"products/{product_id}")
        data = _decode_json(response, f"products/{product_id}")
        if not data:
            raise NotFoundError("Product not found", details={"product_id": product_id})

        product = _map_records(map_product, [data], f"products/{product_id}")[0]
        self.cache.set(cache_key, product)
        return product

    async def get_product_categories(self, use_cache: bool = True) -> list[Category]:
        """Get available product categories"""
        cache_key = "categories"
        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        response = await self._request("GET", "products/categories")
        raw_categories = _decode_json(response, "products/categories") or []
        categories = _map_records(map_category, raw_categories, "products/categories")
        self.cache.set(cache_key, categories)
        return categories

    # ==================== Order APIs ====================

    async def create_order(self, order_data: WooCommerceOrderRequest) -> dict:
        """Create an order; returns the raw WooCommerce order"""
        response = await self._request("POST", "orders", body=order_data.model_dump())
        return _decode_json(response, "orders")
