"""Search backend adapters."""

from .client import ElasticsearchBackend, InMemorySearchBackend

__all__ = [
    "ElasticsearchBackend",
    "InMemorySearchBackend",
]
