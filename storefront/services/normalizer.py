"""
Field Normalizer

Turns raw WooCommerce product and category records into the storefront's
canonical shape, whichever API variant answered. Two price shapes exist:

- Store API: nested ``prices.price`` / ``prices.sale_price``
- REST v3: flat ``price`` / ``sale_price`` / ``regular_price``, sometimes in
  minor units (cents/öre) and sometimes in whole currency

Everything here is pure; no I/O.
"""

import html
import math
import re
from typing import Any, Optional

from ..models.product import (
    Product,
    ProductImage,
    ProductCategoryRef,
    ProductTag,
    StockStatus,
)
from ..models.category import Category, CategoryImage, CategoryDisplay

# Above this a price is assumed to be in minor units. Heuristic: nothing in
# this store legitimately costs 10,000 or more in whole currency.
MINOR_UNIT_THRESHOLD = 10000

COURSE_TAG_SLUGS = frozenset({"courses-one", "courses-two", "courses-three", "courses-four"})
COURSE_CATEGORY_SLUGS = frozenset({"kurser", "kurs", "course", "courses"})


# ==================== Prices ====================

def normalize_price(value: Any) -> str:
    """
    Normalize a price to a major-unit decimal string.

    Whole amounts have no decimals, others exactly two ("399", "399.50"), so
    normalizing an already normalized price is a no-op. Returns "" for
    missing, zero or non-numeric input.
    """
    if value is None or value == "" or isinstance(value, bool):
        return ""

    try:
        num = float(value)
    except (TypeError, ValueError):
        return ""

    if not math.isfinite(num) or num == 0:
        return ""

    if num > MINOR_UNIT_THRESHOLD:
        num = num / 100

    formatted = f"{num:.2f}"
    return formatted[:-3] if formatted.endswith(".00") else formatted


def pick_numeric_price(product: dict) -> str:
    """Pick the most specific usable price the record carries, normalized"""
    prices = product.get("prices")
    if not isinstance(prices, dict):
        prices = {}

    candidates = (
        prices.get("sale_price"),
        prices.get("price"),
        product.get("sale_price"),
        product.get("price"),
        product.get("regular_price"),
    )
    for candidate in candidates:
        # A zero sale price means "no sale", not "free"
        normalized = normalize_price(candidate)
        if normalized:
            return normalized
    return ""


def normalize_product(product: dict) -> dict:
    """Copy of a raw product with its price fields normalized"""
    return {
        **product,
        "price": pick_numeric_price(product),
        "regular_price": normalize_price(product.get("regular_price")) or None,
        "sale_price": normalize_price(product.get("sale_price")) or None,
    }


# ==================== Text ====================

_P_OPEN = re.compile(r"<p\b[^>]*>", re.IGNORECASE)
_P_CLOSE = re.compile(r"</p\s*>", re.IGNORECASE)
_BR = re.compile(r"<br\s*/?>", re.IGNORECASE)
_ANY_TAG = re.compile(r"</?[^>]+(>|$)")
_EXTRA_NEWLINES = re.compile(r"\n{3,}")
_DOUBLE_ENCODED = re.compile(r"&amp;#(\d+);")


def strip_html(html_string: Optional[str]) -> str:
    """
    Best-effort plain-text extraction.

    ``<p>`` becomes a line break, ``</p>`` disappears, ``<br>`` becomes a
    line break and every other tag is dropped. Not an HTML parser: nested or
    malformed markup can come out wrong.
    """
    if not html_string:
        return ""

    text = _P_OPEN.sub("\n", html_string)
    text = _P_CLOSE.sub("", text)
    text = _BR.sub("\n", text)
    text = _ANY_TAG.sub("", text)
    text = text.replace("\r\n", "\n")
    text = _EXTRA_NEWLINES.sub("\n\n", text)
    return text.strip()


def decode_html_entities(text: Optional[str]) -> str:
    """Decode entities, including WordPress' double-encoded ``&amp;#8211;``"""
    if not text:
        return ""
    return html.unescape(_DOUBLE_ENCODED.sub(r"&#\1;", text))


# ==================== Classification ====================

def _matches(value: Any, allowed: frozenset) -> bool:
    return isinstance(value, str) and value.strip().lower() in allowed


def has_course_tag(product: dict) -> bool:
    tags = product.get("tags")
    if not isinstance(tags, list):
        return False
    return any(isinstance(t, dict) and _matches(t.get("slug"), COURSE_TAG_SLUGS) for t in tags)


def has_course_category(product: dict) -> bool:
    categories = product.get("categories")
    if not isinstance(categories, list):
        return False
    return any(
        isinstance(c, dict)
        and (_matches(c.get("slug"), COURSE_CATEGORY_SLUGS) or _matches(c.get("name"), COURSE_CATEGORY_SLUGS))
        for c in categories
    )


def is_course_product(product: dict) -> bool:
    """True for classes/workshops, which are listed apart from the shop"""
    return has_course_tag(product) or has_course_category(product)


# ==================== Mapping ====================

def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _stock_status(value: Any) -> StockStatus:
    try:
        return StockStatus(value)
    except ValueError:
        return StockStatus.IN_STOCK


def _display(value: Any) -> CategoryDisplay:
    try:
        return CategoryDisplay(value)
    except ValueError:
        return CategoryDisplay.DEFAULT


def map_product(raw: dict) -> Product:
    """Map a raw WooCommerce product (or a dumped Product) to a Product"""
    normalized = normalize_product(raw)

    images = [
        ProductImage(src=img["src"], alt=img.get("alt") or "")
        for img in raw.get("images") or []
        if isinstance(img, dict) and img.get("src")
    ]
    categories = [
        ProductCategoryRef(
            id=c["id"],
            name=decode_html_entities(c.get("name")),
            slug=c.get("slug") or "",
        )
        for c in raw.get("categories") or []
        if isinstance(c, dict) and "id" in c
    ]
    tags = [
        ProductTag(id=t["id"], name=t.get("name") or "", slug=t.get("slug") or "")
        for t in raw.get("tags") or []
        if isinstance(t, dict) and "id" in t
    ]

    return Product(
        id=int(raw["id"]),
        name=decode_html_entities(raw.get("name")),
        images=images,
        description=strip_html(raw.get("description")),
        short_description=strip_html(raw.get("short_description")),
        price=normalized["price"],
        regular_price=normalized["regular_price"],
        sale_price=normalized["sale_price"],
        stock_status=_stock_status(raw.get("stock_status")),
        stock_quantity=_optional_int(raw.get("stock_quantity")),
        categories=categories,
        tags=tags,
    )


def map_category(raw: dict) -> Category:
    image = raw.get("image")
    return Category(
        id=int(raw["id"]),
        name=decode_html_entities(raw.get("name")),
        slug=raw.get("slug") or "",
        description=strip_html(raw.get("description")),
        display=_display(raw.get("display")),
        image=CategoryImage(
            id=image.get("id") or 0,
            src=image.get("src") or "",
            name=image.get("name") or "",
            alt=image.get("alt") or "",
        ) if isinstance(image, dict) else None,
    )
