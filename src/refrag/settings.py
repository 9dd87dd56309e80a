# src/refrag/settings.py
"""Behavioral settings for refrag.

Settings are an immutable structure passed programmatically into each
component. The library itself does not read environment variables; the
CLI layer (see refrag.config) reads files and env vars and builds a
Settings instance from them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_COLLECTION_NAME = "refrag-document-v1"


class Settings(BaseModel):
    """Behavioral settings for the indexing and query pipeline.

    Example:
        settings = Settings(collection_name="product-pdf-v2", default_k=10)

        # Require a [Source: ..., Page: ...] citation on every bullet
        settings = Settings(strict_citations=True)
    """

    model_config = ConfigDict(frozen=True)

    # Indexing
    collection_name: str = Field(default=DEFAULT_COLLECTION_NAME, min_length=1)
    batch_size: int = Field(default=20, ge=1)

    # Chunking
    chunk_size: int = Field(default=1500, ge=1)
    chunk_overlap: int = Field(default=500, ge=0)

    # Retrieval
    default_k: int = Field(default=15, ge=1)
    reference_lookup: bool = True  # Ask the LLM for a reference number before retrieval
    fallback_to_similarity: bool = False  # Use similarity search when a reference matches nothing

    # Answer generation
    strict_citations: bool = False
    synthesis_prompt: str | None = None
    synthesis_temperature: float | None = None

    # Passed through to litellm; the pipeline itself never retries
    num_retries: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_overlap(self) -> Settings:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )
        return self
