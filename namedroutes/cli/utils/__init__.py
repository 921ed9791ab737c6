"""CLI utilities."""

from .colors import success, error, info, kv, table, CHECK, CROSS

__all__ = ["success", "error", "info", "kv", "table", "CHECK", "CROSS"]
