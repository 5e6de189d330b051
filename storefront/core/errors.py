"""
Exception classes for the storefront gateway.

Every error raised on purpose inherits from StorefrontError and carries the
HTTP status it should be rendered with.
"""

import asyncio
from typing import Optional

import httpx


class StorefrontError(Exception):
    """
    Base exception for all storefront errors.

    Attributes:
        message: Human-readable error message
        details: Optional dict with additional context
    """

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class InvalidRequestError(StorefrontError):
    """Bad input from the caller; rejected before any upstream call"""
    status_code = 400


class NotFoundError(StorefrontError):
    """Requested resource does not exist"""
    status_code = 404


class UpstreamError(StorefrontError):
    """The commerce or content API failed or answered with a non-2xx status"""

    status_code = 502

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details)
        self.upstream_status = upstream_status


def is_abort(exc: BaseException) -> bool:
    """True when the exception means the caller went away, not that the call failed"""
    return isinstance(exc, asyncio.CancelledError)


def upstream_message(response: httpx.Response) -> Optional[str]:
    """Pull the ``message`` field out of a WordPress/WooCommerce error body"""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"] or None
    return None
