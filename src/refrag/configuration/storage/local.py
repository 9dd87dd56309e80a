# src/refrag/configuration/storage/local.py
"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from refrag.embedder import Embedder
    from refrag.stores import VectorStore


@dataclass(frozen=True)
class LocalStorage:
    """Local ChromaDB storage persisted under ``data_dir/chroma``.

    Args:
        data_dir: Base directory for storage files. Created if it doesn't exist.

    Example:
        storage = LocalStorage("./refrag_data")
    """

    data_dir: str

    def build_store(self, embedder: Embedder) -> VectorStore:
        """Build a persistent ChromaVectorStore."""
        from refrag.stores import ChromaVectorStore

        return ChromaVectorStore(embedder, persist_dir=os.path.join(self.data_dir, "chroma"))
