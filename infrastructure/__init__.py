"""
Infrastructure Package - Lazy Loading Implementation.

Provides the document store implementations with lazy loading so that
importing the package never reads environment variables, builds an Azure
credential, or imports the Cosmos SDK before a repository is requested.

Exports:
    RepositoryFactory: Central creation point
    CosmosRepository: Azure Cosmos DB document store
    IDocumentStore, IProvisionableStore: Store interfaces
"""

from typing import TYPE_CHECKING

# For type checking only - doesn't actually import at runtime
if TYPE_CHECKING:
    from .factory import RepositoryFactory as _RepositoryFactory
    from .cosmos import CosmosRepository as _CosmosRepository
    from .interface_repository import (
        IDocumentStore as _IDocumentStore,
        IProvisionableStore as _IProvisionableStore,
    )


def __getattr__(name: str):
    """
    Lazy import mechanism - only imports when actually accessed.
    """
    if name == "RepositoryFactory":
        from .factory import RepositoryFactory
        return RepositoryFactory

    elif name == "CosmosRepository":
        from .cosmos import CosmosRepository
        return CosmosRepository

    elif name == "IDocumentStore":
        from .interface_repository import IDocumentStore
        return IDocumentStore
    elif name == "IProvisionableStore":
        from .interface_repository import IProvisionableStore
        return IProvisionableStore

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "RepositoryFactory",
    "CosmosRepository",
    "IDocumentStore",
    "IProvisionableStore",
]
