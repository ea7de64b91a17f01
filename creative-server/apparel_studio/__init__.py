"""Apparel creative studio server: orders, brands and asset bundles."""

__version__ = "0.1.0"
