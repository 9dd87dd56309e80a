# src/refrag/models/chunk.py
"""Chunk data models."""

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """A contiguous piece of a single page, sized for embedding."""

    model_config = ConfigDict(frozen=True)

    text: str
    page_number: int = Field(ge=1)
    chunk_id: int = Field(ge=1)  # Sequential across the whole document
    source: str

    def metadata(self) -> dict[str, str | int]:
        """Metadata stored alongside the chunk's embedding."""
        return {
            "source": self.source,
            "page_number": self.page_number,
            "chunk_id": self.chunk_id,
        }


class ScoredChunk(BaseModel):
    """A chunk returned by similarity search, with its similarity score."""

    chunk: Chunk
    score: float
