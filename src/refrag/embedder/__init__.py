# src/refrag/embedder/__init__.py
"""Embedding functionality for refrag."""

from refrag.embedder.base import Embedder
from refrag.embedder.client import ClientEmbedder

__all__ = ["Embedder", "ClientEmbedder"]
