"""Product, course and category API routes"""

import re

from fastapi import APIRouter, Depends, Query

from ..core.errors import InvalidRequestError
from ..models.product import Product, ProductPage
from ..models.category import Category
from ..services.woocommerce_client import WooCommerceClient
from .deps import get_woocommerce_client

router = APIRouter(prefix="/api", tags=["Products"])

_PRODUCT_ID = re.compile(r"\d+", re.ASCII)


@router.get("/products", response_model=ProductPage)
async def list_products(
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(12, ge=1, le=100, description="Products per page"),
    include_courses: bool = Query(False, description="Also list course products"),
    client: WooCommerceClient = Depends(get_woocommerce_client),
):
    """
    List shop products.

    Courses are left out unless include_courses is set; see /api/courses.
    """
    return await client.get_products(page, per_page, include_courses=include_courses)


@router.get("/products/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    client: WooCommerceClient = Depends(get_woocommerce_client),
):
    """Get a product by ID"""
    if not _PRODUCT_ID.fullmatch(product_id):
        raise InvalidRequestError("Invalid ID parameter", details={"id": product_id})
    return await client.get_product_by_id(int(product_id))


@router.get("/courses", response_model=ProductPage)
async def list_courses(
    page: int = Query(1, ge=1),
    per_page: int = Query(12, ge=1, le=100),
    client: WooCommerceClient = Depends(get_woocommerce_client),
):
    """List course products only"""
    return await client.get_courses(page, per_page)


@router.get("/category", response_model=list[Category])
async def list_categories(client: WooCommerceClient = Depends(get_woocommerce_client)):
    """List all product categories"""
    return await client.get_product_categories()
