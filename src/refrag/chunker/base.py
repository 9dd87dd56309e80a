# src/refrag/chunker/base.py
"""Chunker abstract base class."""

from abc import ABC, abstractmethod

from refrag.models import Chunk, Page


class Chunker(ABC):
    """Abstract base class for splitting pages into chunks."""

    @abstractmethod
    def split_page(self, page: Page) -> list[str]:
        """Split one page's text into chunk texts, in page order."""
        ...

    def split(self, pages: list[Page]) -> list[Chunk]:
        """Split pages into chunks, numbering chunk_id across the whole document.

        Each page is split on its own, so a chunk never spans two pages.
        """
        chunks: list[Chunk] = []
        for page in pages:
            for text in self.split_page(page):
                chunks.append(
                    Chunk(
                        text=text,
                        page_number=page.page_number,
                        chunk_id=len(chunks) + 1,
                        source=page.source,
                    )
                )
        return chunks
