"""Category models for the storefront"""

from pydantic import BaseModel
from typing import Optional
from enum import Enum


class CategoryDisplay(str, Enum):
    DEFAULT = "default"
    PRODUCTS = "products"
    SUBCATEGORIES = "subcategories"
    BOTH = "both"


class CategoryImage(BaseModel):
    id: int = 0
    src: str = ""
    name: str = ""
    alt: str = ""


class Category(BaseModel):
    """Product category"""
    id: int
    name: str
    slug: str
    description: str = ""
    display: CategoryDisplay = CategoryDisplay.DEFAULT
    image: Optional[CategoryImage] = None
