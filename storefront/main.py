"""
Storefront Gateway Application

Thin backend for the storefront: proxies and reshapes the WooCommerce
commerce API and the WordPress content API, and holds session carts in
memory.
"""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv

from .core.cache import TTLCache
from .core.config import Settings, get_settings
from .core.errors import StorefrontError, UpstreamError
from .database.carts import CartDatabase
from .routes import products_router, orders_router, pages_router, cart_router
from .security.rate_limit import RateLimitMiddleware
from .services.order_mapper import OrderMapper
from .services.order_service import OrderService
from .services.preload import run_preload_scheduler
from .services.woocommerce_client import WooCommerceClient
from .services.wordpress_client import WordPressClient

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _public_message(exc: StorefrontError, settings: Settings) -> str:
    """Production hides 5xx details; development shows the exception message"""
    if settings.debug or exc.status_code < 500:
        return exc.message
    if isinstance(exc, UpstreamError):
        return "Upstream service error"
    return "Internal server error"


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Render every error as {"error": message}"""

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message} {exc.details}")

        content = {"error": _public_message(exc, settings)}
        if settings.debug and exc.details:
            content["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        logger.warning(f"Validation failed on {request.method} {request.url.path}: {problems}")
        return JSONResponse(status_code=400, content={"error": f"Invalid request: {problems}"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Not Found",
                    "message": f"Route {request.url.path} does not exist",
                },
            )
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        message = str(exc) if settings.debug else "Internal server error"
        return JSONResponse(status_code=500, content={"error": message})


def create_app(
    settings: Optional[Settings] = None,
    woocommerce_transport: Optional[httpx.AsyncBaseTransport] = None,
    wordpress_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the application.

    Missing WooCommerce settings raise a validation error here, which aborts
    startup.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info("Storefront Gateway starting up...")
        logger.info(f"WooCommerce API: {settings.woocommerce_api_url}")
        logger.info(f"Environment: {settings.environment}")

        cache = TTLCache(ttl=settings.cache_ttl_seconds)
        app.state.cache = cache
        app.state.woocommerce = WooCommerceClient(
            base_url=settings.woocommerce_api_url,
            consumer_key=settings.woocommerce_consumer_key,
            consumer_secret=settings.woocommerce_consumer_secret,
            cache=cache,
            timeout=settings.http_timeout_seconds,
            transport=woocommerce_transport,
        )
        app.state.wordpress = WordPressClient(
            base_url=settings.wordpress_api_url,
            cache=cache,
            timeout=settings.http_timeout_seconds,
            transport=wordpress_transport,
        )
        app.state.order_service = OrderService(
            client=app.state.woocommerce,
            mapper=OrderMapper(settings.woocommerce_store_url),
        )
        app.state.cart_db = CartDatabase()

        preload_task = None
        if settings.preload_enabled:
            preload_task = asyncio.create_task(
                run_preload_scheduler(
                    app.state.woocommerce,
                    app.state.wordpress,
                    interval_seconds=settings.preload_interval_seconds,
                    page_slugs=settings.page_slugs,
                    carts=app.state.cart_db,
                )
            )

        yield

        logger.info("Storefront Gateway shutting down...")
        if preload_task:
            preload_task.cancel()
            with suppress(asyncio.CancelledError):
                await preload_task
        await app.state.woocommerce.close()
        await app.state.wordpress.close()

    app = FastAPI(
        title=settings.app_name,
        description="Storefront backend for WooCommerce and WordPress",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        RateLimitMiddleware,
        limit=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app, settings)

    app.include_router(products_router)
    app.include_router(orders_router)
    app.include_router(pages_router)
    app.include_router(cart_router)

    @app.get("/")
    async def home():
        return {
            "message": "Storefront Gateway API",
            "docs": "/docs",
            "endpoints": {
                "products": "/api/products",
                "courses": "/api/courses",
                "categories": "/api/category",
                "order": "/api/order",
                "pages": "/api/pages",
                "cart": "/api/cart",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
