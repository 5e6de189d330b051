# Content helpers

from .content import (
    ImageData,
    extract_video_block,
    get_video_src,
    extract_product_link,
    extract_first_image,
    get_image_from_post,
)

__all__ = [
    "ImageData",
    "extract_video_block",
    "get_video_src",
    "extract_product_link",
    "extract_first_image",
    "get_image_from_post",
]
