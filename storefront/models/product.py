"""Product models for the storefront"""

from pydantic import BaseModel
from typing import Optional
from enum import Enum


class StockStatus(str, Enum):
    IN_STOCK = "instock"
    OUT_OF_STOCK = "outofstock"
    ON_BACKORDER = "onbackorder"


class ProductImage(BaseModel):
    src: str
    alt: str = ""


class ProductCategoryRef(BaseModel):
    """Category reference embedded in a product"""
    id: int
    name: str
    slug: str = ""


class ProductTag(BaseModel):
    id: int
    name: str = ""
    slug: str = ""


class Product(BaseModel):
    """Product in the catalog, normalized from the WooCommerce shape"""
    id: int
    name: str
    images: list[ProductImage] = []
    description: str = ""
    short_description: str = ""
    # Prices are major currency units as decimal strings
    price: str = ""
    regular_price: Optional[str] = None
    sale_price: Optional[str] = None
    stock_status: StockStatus = StockStatus.IN_STOCK
    stock_quantity: Optional[int] = None
    categories: list[ProductCategoryRef] = []
    tags: list[ProductTag] = []


class ProductPage(BaseModel):
    """One page of products with upstream pagination totals"""
    products: list[Product]
    total_pages: int = 1
    total_products: int = 0
    current_page: int = 1
