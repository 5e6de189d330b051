# Core modules

from .config import Settings, get_settings
from .cache import TTLCache
from .errors import (
    StorefrontError,
    InvalidRequestError,
    NotFoundError,
    UpstreamError,
    is_abort,
)

__all__ = [
    "Settings",
    "get_settings",
    "TTLCache",
    "StorefrontError",
    "InvalidRequestError",
    "NotFoundError",
    "UpstreamError",
    "is_abort",
]
