"""Shared helpers: filesystem writes, YAML loading, logging setup."""
