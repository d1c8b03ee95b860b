"""
Storage module for Sociogram.

This module provides SQLite-based persistence for the working
relationship data across sessions.
"""

from sociogram.storage.store import STORAGE_KEY, DataStore

__all__ = [
    "STORAGE_KEY",
    "DataStore",
]
