# src/refrag/chunker/__init__.py
"""Chunking functionality for refrag.

This module exports:
- Chunker: Abstract base class for chunkers
- RecursiveChunker: Boundary-aware character chunker with overlap

Example:
    from refrag.chunker import RecursiveChunker

    chunker = RecursiveChunker(chunk_size=1500, chunk_overlap=500)
    chunks = chunker.split(pages)
"""

from refrag.chunker.base import Chunker
from refrag.chunker.recursive import DEFAULT_SEPARATORS, RecursiveChunker

__all__ = ["Chunker", "RecursiveChunker", "DEFAULT_SEPARATORS"]
