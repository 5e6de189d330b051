"""WordPress page API routes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ..core.errors import InvalidRequestError
from ..services.wordpress_client import WordPressClient
from ..utils.content import (
    ImageData,
    extract_video_block,
    get_video_src,
    extract_product_link,
    get_image_from_post,
)
from .deps import get_wordpress_client

router = APIRouter(prefix="/api/pages", tags=["Pages"])


class PageMedia(BaseModel):
    """Media and call-to-action pulled out of a page's rendered content"""
    id: int
    slug: str
    title: str = ""
    video_src: str = ""
    video_html: Optional[str] = None
    image: Optional[ImageData] = None
    product_link: str


def _require_slug(slug: Optional[str]) -> str:
    if not slug:
        raise InvalidRequestError('Missing required parameter "slug"')
    return slug


@router.get("")
async def get_page(
    slug: Optional[str] = Query(None, description="Page slug, e.g. startsida"),
    wordpress: WordPressClient = Depends(get_wordpress_client),
):
    """Get WordPress pages by slug, as WordPress returns them"""
    return await wordpress.get_page(_require_slug(slug))


@router.get("/media", response_model=list[PageMedia])
async def get_page_media(
    slug: Optional[str] = Query(None),
    wordpress: WordPressClient = Depends(get_wordpress_client),
):
    """Video, lead image and product link for each page under a slug"""
    pages = await wordpress.get_page(_require_slug(slug))

    media = []
    for page in pages:
        if not isinstance(page, dict):
            continue
        content = (page.get("content") or {}).get("rendered") or ""
        media.append(
            PageMedia(
                id=page.get("id") or 0,
                slug=page.get("slug") or slug,
                title=(page.get("title") or {}).get("rendered") or "",
                video_src=get_video_src(content),
                video_html=extract_video_block(content),
                image=get_image_from_post(page),
                product_link=extract_product_link(content, page.get("slug") or slug),
            )
        )
    return media
