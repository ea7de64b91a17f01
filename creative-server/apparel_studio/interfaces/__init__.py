"""Delivery interfaces: HTTP API and WebSocket change feed."""
