# src/refrag/configuration/base.py
"""Protocol definitions for configuration objects.

Implementations can use @dataclass(frozen=True) for immutability. Any
object with the right methods satisfies the protocol without inheritance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from refrag.embedder import Embedder
    from refrag.providers import LLMClient
    from refrag.settings import Settings
    from refrag.stores import VectorStore


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the AI/ML components:
    - Embedder: Creates vector embeddings for chunks and queries
    - LLMClient: Reference extraction and answer generation
    """

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build an embedder for creating vector embeddings."""
        ...

    def build_llm_client(self, settings: Settings) -> LLMClient:
        """Build an LLM client for reference extraction and answers."""
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations."""

    def build_store(self, embedder: Embedder) -> VectorStore:
        """Build the vector store, wired to the given embedder."""
        ...
