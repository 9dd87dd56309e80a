# src/refrag/models/results.py
"""Result data models for indexing and queries."""

from typing import Literal

from pydantic import BaseModel, Field

from refrag.models.chunk import Chunk

RetrievalMode = Literal["reference", "similarity"]


class CollectionStatus(BaseModel):
    """Outcome of checking whether a collection already exists."""

    name: str
    exists: bool


class IndexReport(BaseModel):
    """Summary of one indexing run."""

    collection: str
    created: bool
    chunks_written: int = 0
    batches: int = 0


class RetrievalResult(BaseModel):
    """Chunks retrieved for one query, in retrieval order."""

    query: str
    mode: RetrievalMode
    reference: str | None = None
    chunks: list[Chunk] = Field(default_factory=list)
    scores: list[float] | None = None  # Only populated in similarity mode


class Answer(BaseModel):
    """The generated natural-language answer."""

    text: str


class QueryResponse(BaseModel):
    """Full response to a user query."""

    query: str
    answer: Answer | None
    retrieval: RetrievalResult
