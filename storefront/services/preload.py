"""Cache Preload Job

Warms the response cache with the data almost every visitor needs:
- the first page of shop products
- the category list
- frequently requested CMS pages

Runs at startup and then on a fixed interval until cancelled.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Sequence

from ..core.errors import is_abort
from ..database.carts import CartDatabase
from .woocommerce_client import WooCommerceClient
from .wordpress_client import WordPressClient

logger = logging.getLogger(__name__)


async def preload_cache(cache_key: str, fetch: Callable[[], Awaitable[object]]) -> bool:
    """Run one fetch; the client stores the result under its own cache key"""
    try:
        await fetch()
    except (Exception, asyncio.CancelledError) as e:
        if is_abort(e):
            raise
        logger.error(f"[PRELOAD ERROR] {cache_key}: {e}")
        return False

    logger.info(f"[PRELOADED] {cache_key}")
    return True


async def preload_all(
    client: WooCommerceClient,
    wordpress: WordPressClient,
    page_slugs: Sequence[str] = ("sidfot", "startsida"),
) -> int:
    """
    Preload products, categories and CMS pages concurrently.

    Returns:
        Number of entries successfully warmed
    """
    logger.info("[PRELOAD] Starting preload of WooCommerce data...")

    tasks = [
        preload_cache("products", lambda: client.get_products(1, 12, use_cache=False)),
        preload_cache("categories", lambda: client.get_product_categories(use_cache=False)),
    ]
    for slug in page_slugs:
        tasks.append(
            preload_cache(f"page-{slug}", lambda slug=slug: wordpress.get_page(slug, use_cache=False))
        )

    results = await asyncio.gather(*tasks)
    warmed = sum(1 for ok in results if ok)
    logger.info(f"[PRELOAD] {warmed}/{len(results)} entries preloaded.")
    return warmed


async def run_preload_scheduler(
    client: WooCommerceClient,
    wordpress: WordPressClient,
    interval_seconds: float,
    page_slugs: Sequence[str] = ("sidfot", "startsida"),
    carts: Optional[CartDatabase] = None,
) -> None:
    """Preload now, then every interval_seconds, until cancelled"""
    while True:
        try:
            await preload_all(client, wordpress, page_slugs)
            evicted = client.cache.evict_expired()
            if carts is not None:
                removed = carts.cleanup_old_carts()
                if removed:
                    logger.info(f"[PRELOAD] Removed {removed} stale cart(s)")
            logger.debug(f"[PRELOAD] Evicted {evicted} expired cache entries")
            await asyncio.sleep(interval_seconds)
        except asyncio.CancelledError:
            logger.info("[PRELOAD] Scheduler stopped")
            raise
        except Exception as e:
            logger.error(f"[PRELOAD] Scheduler error: {e}", exc_info=True)
            await asyncio.sleep(interval_seconds)
