# src/refrag/models/__init__.py
"""Data models for refrag."""

from refrag.models.chunk import Chunk, ScoredChunk
from refrag.models.page import Page
from refrag.models.results import (
    Answer,
    CollectionStatus,
    IndexReport,
    QueryResponse,
    RetrievalMode,
    RetrievalResult,
)

__all__ = [
    "Page",
    "Chunk",
    "ScoredChunk",
    "CollectionStatus",
    "IndexReport",
    "RetrievalMode",
    "RetrievalResult",
    "Answer",
    "QueryResponse",
]
