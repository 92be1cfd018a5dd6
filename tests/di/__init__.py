"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .search import MockSearchProvider
from .storage import MockStorageProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockSearchProvider",
    "MockStorageProvider",
    "build_test_container",
]
