"""Domain modules: each exposes models, exceptions, a repository protocol and a service."""

from . import accounts, brands, bundles, notifications, orders

__all__ = [
    "accounts",
    "brands",
    "bundles",
    "notifications",
    "orders",
]
