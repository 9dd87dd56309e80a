# src/refrag/embedder/base.py
"""Embedder abstract base class."""

from abc import ABC, abstractmethod

from refrag.models import Chunk


class Embedder(ABC):
    """Abstract base class for embedding generation.

    Subclasses must implement embed_text and embed_texts.
    """

    @abstractmethod
    def embed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        ...

    @abstractmethod
    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        ...

    def embed_chunks(self, chunks: list[Chunk]) -> list[list[float]]:
        """Embed the text of each chunk, preserving order."""
        if not chunks:
            return []
        embeddings = self.embed_texts([chunk.text for chunk in chunks])
        if len(embeddings) != len(chunks):
            raise RuntimeError(
                f"Embedding count mismatch: {len(chunks)} chunks, {len(embeddings)} embeddings"
            )
        return embeddings
