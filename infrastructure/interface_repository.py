"""
Repository Abstract Base Classes - Single Point of Truth.

Enforces exact method signatures across document store implementations.
The bulk upsert pipeline, provisioning and query services depend only on
IDocumentStore, never on a concrete SDK client.

Exports:
    IDocumentStore: Document store interface
    IProvisionableStore: Store that also manages database and throughput
    ParamNames: Canonical document field names
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Final

from core.models import Document


# ============================================================================
# CANONICAL FIELD NAMES
# ============================================================================

class ParamNames:
    """Document field names shared across the system."""

    ID: Final[str] = "id"
    PARTITION_KEY: Final[str] = "year"
    GEOLOCATION: Final[str] = "geolocation"


# ============================================================================
# ABSTRACT BASE CLASSES - Enforce exact signatures
# ============================================================================

class IDocumentStore(ABC):
    """
    Handle to an already-provisioned document collection.

    Implementations own their client and its retry policy. Every method may
    be called concurrently from worker threads.
    """

    @abstractmethod
    def verify(self) -> None:
        """
        Confirm the collection is reachable.

        Raises:
            SubmissionError: Handle invalid, collection missing or unreachable
        """
        pass

    @abstractmethod
    def upsert_document(self, document: Document, partition_key: Any) -> Document:
        """
        Insert or replace one document.

        Returns:
            Stored document as echoed by the store

        Raises:
            ItemWriteError: Write rejected or failed
        """
        pass

    @abstractmethod
    def create_container(
        self,
        name: str,
        partition_key_path: str,
        indexing_policy: Dict[str, Any],
        throughput: Optional[int] = None
    ) -> str:
        """
        Create the collection if it does not exist.

        Returns:
            Container id
        """
        pass

    @abstractmethod
    def query(
        self,
        query_text: str,
        parameters: Optional[List[Dict[str, Any]]] = None,
        max_item_count: Optional[int] = None
    ) -> Iterator[Dict[str, Any]]:
        """
        Run a query and yield result pages.

        Yields:
            Dict with 'items' (list) and 'request_charge' (float) per page
        """
        pass


class IProvisionableStore(IDocumentStore):
    """
    Document store that can also manage its database and throughput.

    Used by the provisioning service; the bulk pipeline never needs it.
    """

    @abstractmethod
    def create_database(self, name: str) -> str:
        """
        Create the database if it does not exist.

        Returns:
            Database id
        """
        pass

    @abstractmethod
    def replace_throughput(self, throughput: int) -> int:
        """
        Change the container's provisioned RU/s.

        Returns:
            Throughput now in effect
        """
        pass


__all__ = ['IDocumentStore', 'IProvisionableStore', 'ParamNames']
