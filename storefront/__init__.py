"""Storefront gateway for WooCommerce and WordPress."""

__version__ = "1.0.0"
