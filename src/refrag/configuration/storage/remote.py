# src/refrag/configuration/storage/remote.py
"""Remote ChromaDB server storage configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from refrag.embedder import Embedder
    from refrag.stores import VectorStore


@dataclass(frozen=True)
class RemoteStorage:
    """ChromaDB server reached over HTTP(S).

    Args:
        url: Server base URL, e.g. "https://chroma.example.com"
        api_key: Optional token sent as a bearer Authorization header

    Example:
        storage = RemoteStorage(url="https://chroma.example.com", api_key="...")
    """

    url: str
    api_key: str | None = field(default=None, repr=False)

    def build_store(self, embedder: Embedder) -> VectorStore:
        """Build a ChromaVectorStore backed by an HTTP client."""
        from refrag.stores import ChromaVectorStore

        return ChromaVectorStore(embedder, url=self.url, api_key=self.api_key)
