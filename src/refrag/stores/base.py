# src/refrag/stores/base.py
"""Abstract base class for vector storage."""

from abc import ABC, abstractmethod

from refrag.models import Chunk, CollectionStatus, ScoredChunk


class VectorStore(ABC):
    """Named collections of embedded chunks.

    Implementations embed chunk text themselves on write and embed the
    query text on search, so callers only ever deal in Chunks. Collections
    are append-only: there is no update or delete.
    """

    @abstractmethod
    def list_collections(self) -> set[str]:
        """Names of all collections in the store."""
        ...

    def ensure_collection(self, name: str) -> CollectionStatus:
        """Report whether the named collection already exists."""
        return CollectionStatus(name=name, exists=name in self.list_collections())

    @abstractmethod
    def create_with_first_batch(self, name: str, chunks: list[Chunk]) -> None:
        """Create the collection and write its first batch of chunks."""
        ...

    @abstractmethod
    def append_batch(self, name: str, chunks: list[Chunk]) -> None:
        """Embed and append chunks to an existing collection."""
        ...

    @abstractmethod
    def similarity_search(self, name: str, query: str, k: int) -> list[ScoredChunk]:
        """Return up to k chunks closest to the query, highest score first."""
        ...

    @abstractmethod
    def find_containing(self, name: str, text: str) -> list[Chunk]:
        """Return every chunk whose text contains ``text`` literally, by chunk_id."""
        ...

    @abstractmethod
    def count(self, name: str) -> int:
        """Number of vectors in the collection."""
        ...

    def close(self) -> None:
        """Release any resources held by the store."""
