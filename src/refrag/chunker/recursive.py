# src/refrag/chunker/recursive.py
"""Recursive character chunker."""

from langchain_text_splitters import RecursiveCharacterTextSplitter
from loguru import logger

from refrag.chunker.base import Chunker
from refrag.models import Chunk, Page

# Highest priority first; "" means an arbitrary character cut
DEFAULT_SEPARATORS = ["\n\n", "\n", ". ", " ", ""]


class RecursiveChunker(Chunker):
    """Split page text at the best available boundary.

    Prefers paragraph breaks, then line breaks, then sentence ends, then
    whitespace, and only cuts mid-word when nothing else fits in the window.
    Consecutive chunks from the same page share up to ``chunk_overlap``
    characters.
    """

    def __init__(
        self,
        chunk_size: int = 1500,
        chunk_overlap: int = 500,
        separators: list[str] | None = None,
    ) -> None:
        """Initialize the chunker.

        Args:
            chunk_size: Target maximum characters per chunk
            chunk_overlap: Maximum characters repeated between adjacent chunks

        Raises:
            ValueError: If chunk_overlap >= chunk_size
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ValueError(f"chunk_overlap must not be negative, got {chunk_overlap}")
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be less than chunk_size ({chunk_size})"
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.separators = separators or list(DEFAULT_SEPARATORS)
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
            separators=self.separators,
        )

    def split_page(self, page: Page) -> list[str]:
        """Split a single page; a page that fits in one chunk is returned whole."""
        text = page.text.strip()
        if not text:
            return []
        if len(text) <= self.chunk_size:
            return [text]
        return [piece for piece in self._splitter.split_text(text) if piece.strip()]

    def split(self, pages: list[Page]) -> list[Chunk]:
        chunks = super().split(pages)
        logger.info(f"Created {len(chunks)} chunks from {len(pages)} pages")
        return chunks
