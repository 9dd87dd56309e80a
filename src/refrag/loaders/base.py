# src/refrag/loaders/base.py
"""Loader abstract base class."""

from abc import ABC, abstractmethod

from refrag.models import Page


class Loader(ABC):
    """Abstract base class for document loading."""

    @abstractmethod
    def load(self, path: str, source_id: str | None = None) -> list[Page]:
        """Load a document and return its pages in order.

        Args:
            path: Path to the file to load
            source_id: Optional custom source identifier. If not provided,
                      the file name will be used as the source.

        Returns:
            List of Page objects numbered from 1

        Raises:
            LoadError: If the file is missing, unreadable, or not supported
        """
        ...

    @abstractmethod
    def supports(self, path: str) -> bool:
        """Check if this loader supports the given path."""
        ...
