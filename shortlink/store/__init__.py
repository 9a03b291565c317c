"""
Storage module with abstraction layer.

This module provides:
- LinkStore interface: Abstract base class for store implementations
- InMemoryLinkStore: Dictionary-backed implementation (default)
- Record types shared by the services

To add a new backend:
1. Create a new class inheriting from LinkStore
2. Implement all abstract methods
3. Update get_link_store() in memory.py to return the new store
"""

from shortlink.store.interface import LinkStore
from shortlink.store.memory import InMemoryLinkStore, get_link_store

__all__ = [
    "LinkStore",
    "InMemoryLinkStore",
    "get_link_store",
]
