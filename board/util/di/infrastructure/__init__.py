"""Infrastructure providers."""

# Import bases
from .persistence import PersistenceProvider
from .search import SearchProvider
from .storage import StorageProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdPersistenceProvider  # noqa: F401
from .search import ProdSearchProvider  # noqa: F401
from .storage import ProdStorageProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdSearchProvider",
    "ProdStorageProvider",
    "SearchProvider",
    "StorageProvider",
]
