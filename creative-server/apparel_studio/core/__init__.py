"""Core configuration, password hashing and token security."""
