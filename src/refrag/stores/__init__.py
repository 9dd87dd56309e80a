# src/refrag/stores/__init__.py
"""Vector storage for refrag."""

from refrag.stores.base import VectorStore
from refrag.stores.chroma import ChromaVectorStore

__all__ = ["VectorStore", "ChromaVectorStore"]
