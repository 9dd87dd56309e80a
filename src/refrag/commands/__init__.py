# src/refrag/commands/__init__.py
"""UI-agnostic command layer for refrag.

This module provides command functions that the CLI calls.
Commands return data structures, allowing UIs to render results appropriately.

Usage:
    from refrag.commands import index, query, status

    # Build the collection for a PDF
    result = index.index("Product.pdf", on_progress=my_callback)

    # Ask a question
    result = query.query("What does 6.7 say?")

    # List collections
    result = status.status()
"""

from refrag.commands import index, query, status
from refrag.commands.base import (
    CollectionInfo,
    CommandResult,
    CommandStage,
    IndexResult,
    ProgressCallback,
    ProgressUpdate,
    QueryResult,
    SourceChunk,
    StatusResult,
    format_error,
)

__all__ = [
    # Base types
    "CommandStage",
    "ProgressUpdate",
    "ProgressCallback",
    "CommandResult",
    "format_error",
    # Result types
    "IndexResult",
    "QueryResult",
    "SourceChunk",
    "StatusResult",
    "CollectionInfo",
    # Command modules
    "index",
    "query",
    "status",
]
