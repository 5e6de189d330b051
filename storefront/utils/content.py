"""
Best-effort extraction from WordPress HTML.

Each extractor is an ordered tuple of matcher functions; the first one that
finds something wins. These are regex heuristics over rendered post/page
content, not an HTML parser.
"""

import re
from typing import Callable, Optional, Sequence, TypeVar
from urllib.parse import urljoin

from pydantic import BaseModel

T = TypeVar("T")

DEFAULT_MEDIA_BASE = "https://www.grapeceramics.se"


class ImageData(BaseModel):
    url: str
    alt_text: str = ""


def first_match(strategies: Sequence[Callable[[str], Optional[T]]], content: str) -> Optional[T]:
    """Run strategies in order and return the first non-empty result"""
    for strategy in strategies:
        result = strategy(content)
        if result:
            return result
    return None


# ==================== Video ====================

_FIGURE_VIDEO = re.compile(r'<figure class="wp-block-video.*?>([\s\S]*?)</figure>', re.IGNORECASE)
_VIDEO_TAG = re.compile(r"<video.*?>[\s\S]*?</video>", re.IGNORECASE)
_VIDEO_SRC = re.compile(r"""<video[^>]*?\s(src|data-src)\s*=\s*["']([^"']+)["'][^>]*>""", re.IGNORECASE)
_SOURCE_SRC = re.compile(r"""<source[^>]*?\s(src|data-src)\s*=\s*["']([^"']+)["'][^>]*>""", re.IGNORECASE)


def _video_in_figure(content: str) -> Optional[str]:
    figure = _FIGURE_VIDEO.search(content)
    if figure and figure.group(1):
        video = _VIDEO_TAG.search(figure.group(1))
        if video:
            return video.group(0)
    return None


def _bare_video(content: str) -> Optional[str]:
    video = _VIDEO_TAG.search(content)
    return video.group(0) if video else None


VIDEO_BLOCK_STRATEGIES = (_video_in_figure, _bare_video)


def extract_video_block(content: str) -> Optional[str]:
    """The ``<video>...</video>`` markup of the first video block, or None"""
    if not content:
        return None
    return first_match(VIDEO_BLOCK_STRATEGIES, content)


def _video_tag_src(content: str) -> Optional[str]:
    match = _VIDEO_SRC.search(content)
    return match.group(2) if match else None


def _source_tag_src(content: str) -> Optional[str]:
    match = _SOURCE_SRC.search(content)
    return match.group(2) if match else None


VIDEO_SRC_STRATEGIES = (_video_tag_src, _source_tag_src)


def get_video_src(content: str, base: str = DEFAULT_MEDIA_BASE) -> str:
    """Absolute URL of the first video source, or "" """
    if not content:
        return ""
    src = first_match(VIDEO_SRC_STRATEGIES, content)
    return urljoin(base, src) if src else ""


# ==================== Links ====================

_ANCHOR_HREF = re.compile(r"""<a[^>]+href=["']([^"']+)["'][^>]*>""", re.IGNORECASE)
_BUTTON_HREF = re.compile(
    r"""<div class="wp-block-button.*?><a.*?href=["']([^"']+)["'][^>]*>""",
    re.IGNORECASE,
)
_PRODUCT_PATH = re.compile(r"/product/([^/]+)")


def _anchor_href(content: str) -> Optional[str]:
    match = _ANCHOR_HREF.search(content)
    return match.group(1) if match else None


def _button_href(content: str) -> Optional[str]:
    match = _BUTTON_HREF.search(content)
    return match.group(1) if match else None


LINK_STRATEGIES = (_anchor_href, _button_href)


def parse_product_link(url: str) -> str:
    """Storefront route for a WordPress product URL; /shop for anything else"""
    match = _PRODUCT_PATH.search(url)
    return f"/product/{match.group(1)}" if match else "/shop"


def extract_product_link(content: str, slug: str) -> str:
    """
    Where a post's "buy" call to action should point.

    /post/<slug> when the content has no link at all.
    """
    href = first_match(LINK_STRATEGIES, content or "")
    return parse_product_link(href) if href else f"/post/{slug}"


# ==================== Images ====================

_IMG_SRC_FIRST = re.compile(
    r"""<img(?![^>]*\balt=[^>]*\bsrc=)[^>]+src=["']([^"']+)["'](?:[^>]*?\balt=["']([^"']*)["'])?[^>]*>""",
    re.IGNORECASE,
)
_IMG_ALT_FIRST = re.compile(
    r"""<img[^>]+alt=["']([^"']*)["'][^>]*src=["']([^"']+)["'][^>]*>""",
    re.IGNORECASE,
)


def _img_src_first(content: str) -> Optional[ImageData]:
    match = _IMG_SRC_FIRST.search(content)
    if match:
        return ImageData(url=match.group(1), alt_text=match.group(2) or "")
    return None


def _img_alt_first(content: str) -> Optional[ImageData]:
    match = _IMG_ALT_FIRST.search(content)
    if match:
        return ImageData(url=match.group(2), alt_text=match.group(1) or "")
    return None


IMAGE_STRATEGIES = (_img_src_first, _img_alt_first)


def extract_first_image(content: str) -> Optional[ImageData]:
    """URL and alt text of the first ``<img>`` in the content"""
    if not content:
        return None
    return first_match(IMAGE_STRATEGIES, content)


def _featured_media(post: dict) -> Optional[dict]:
    media = (post.get("_embedded") or {}).get("wp:featuredmedia") or []
    return media[0] if media and isinstance(media[0], dict) else None


def _media_alt(media: dict) -> str:
    return media.get("alt_text") or (media.get("title") or {}).get("rendered") or ""


def _featured_source_url(post: dict) -> Optional[ImageData]:
    media = _featured_media(post)
    if media and media.get("source_url"):
        return ImageData(url=media["source_url"], alt_text=_media_alt(media))
    return None


def _featured_full_size(post: dict) -> Optional[ImageData]:
    media = _featured_media(post)
    if not media:
        return None
    full = ((media.get("media_details") or {}).get("sizes") or {}).get("full") or {}
    if full.get("source_url"):
        return ImageData(url=full["source_url"], alt_text=_media_alt(media))
    return None


def _content_image(post: dict) -> Optional[ImageData]:
    rendered = (post.get("content") or {}).get("rendered")
    return extract_first_image(rendered) if rendered else None


POST_IMAGE_STRATEGIES = (_featured_source_url, _featured_full_size, _content_image)


def get_image_from_post(post: dict) -> Optional[ImageData]:
    """Lead image of a WordPress post/page: featured media first, then content"""
    return first_match(POST_IMAGE_STRATEGIES, post)
