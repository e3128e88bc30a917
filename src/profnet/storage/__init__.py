"""Profnet storage layer."""

from profnet.storage.base import EdgeStore
from profnet.storage.sqlite_store import SQLiteStore

__all__ = ["EdgeStore", "SQLiteStore"]
