"""WordPress content API client (public, slug-addressed pages)"""

import logging
from typing import Optional

import httpx

from ..core.cache import TTLCache
from ..core.errors import UpstreamError

logger = logging.getLogger(__name__)


class WordPressClient:
    """Client for the WordPress REST API"""

    def __init__(
        self,
        base_url: str,
        cache: Optional[TTLCache] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.cache = cache if cache is not None else TTLCache()
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self._http_client.aclose()

    async def get_page(self, slug: str, use_cache: bool = True) -> list[dict]:
        """
        Get the pages published under a slug.

        WordPress answers with a (usually one-element) list; an unknown slug
        gives an empty list rather than a 404.
        """
        cache_key = f"page-{slug}"
        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        try:
            response = await self._http_client.get(
                f"{self.base_url}pages",
                params={"slug": slug},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Error fetching WordPress page '{slug}': {e!r}")
            raise UpstreamError(
                "Error fetching WordPress data",
                upstream_status=getattr(getattr(e, "response", None), "status_code", None),
                details={"slug": slug},
            ) from e

        try:
            pages = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON for WordPress page '{slug}': {response.text[:200]!r}")
            raise UpstreamError(
                "Invalid response from WordPress",
                upstream_status=response.status_code,
                details={"slug": slug},
            ) from e
        if not isinstance(pages, list):
            raise UpstreamError("Invalid response from WordPress", details={"slug": slug})

        self.cache.set(cache_key, pages)
        return pages
