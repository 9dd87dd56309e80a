# src/refrag/loaders/__init__.py
"""Document loaders for refrag."""

from refrag.loaders.base import Loader
from refrag.loaders.pypdf_loader import PyPDFLoader

__all__ = ["Loader", "PyPDFLoader"]
