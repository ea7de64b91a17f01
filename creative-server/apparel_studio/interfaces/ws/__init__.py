"""WebSocket change feed."""

from .manager import ConnectionManager, manager

__all__ = ["ConnectionManager", "manager"]
