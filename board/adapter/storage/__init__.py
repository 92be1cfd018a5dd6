"""Object storage adapters."""

from .client import HttpObjectStorage, InMemoryObjectStorage

__all__ = [
    "HttpObjectStorage",
    "InMemoryObjectStorage",
]
