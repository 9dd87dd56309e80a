# src/refrag/commands/base.py
"""Base types for the commands layer.

This module defines the data structures used by all commands:
- Progress callbacks for long-running operations
- Result types for each command
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from refrag.exceptions import ConfigError, RefragError


class CommandStage(Enum):
    """Stages of command execution for progress reporting."""

    LOADING = "Loading"
    CHUNKING = "Chunking"
    INDEXING = "Indexing"
    RETRIEVING = "Retrieving"
    GENERATING = "Generating"
    COMPLETE = "Complete"


@dataclass
class ProgressUpdate:
    """Progress update for long-running operations.

    Attributes:
        stage: Current stage of the operation
        current: Current item number
        total: Total number of items (0 for indeterminate)
        message: Optional status message
    """

    stage: CommandStage
    current: int
    total: int
    message: str | None = None

    @property
    def is_indeterminate(self) -> bool:
        """True if progress is indeterminate (total unknown)."""
        return self.total == 0

    @property
    def percentage(self) -> int:
        """Progress as percentage (0-100). Returns 0 if indeterminate."""
        if self.total == 0:
            return 0
        return int(100 * self.current / self.total)


# Callback type for progress updates
ProgressCallback = Callable[[ProgressUpdate], None]


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None


@dataclass
class IndexResult(CommandResult):
    """Result of the index command.

    Attributes:
        collection: Collection that was built or reused
        created: False when the collection already existed
        chunks_written: Chunks embedded and written in this run
        batches: Batches written in this run
    """

    collection: str = ""
    created: bool = False
    chunks_written: int = 0
    batches: int = 0


@dataclass
class SourceChunk:
    """A retrieved chunk as shown to the user."""

    source: str
    page_number: int
    chunk_id: int
    content: str
    score: float | None = None  # Only set in similarity mode


@dataclass
class QueryResult(CommandResult):
    """Result of the query command.

    Attributes:
        query: The original question
        answer: Generated answer (None in raw mode)
        mode: "reference" or "similarity"
        reference: Reference identifier found in the question, if any
        sources: Retrieved chunks in retrieval order
    """

    query: str = ""
    answer: str | None = None
    mode: str | None = None
    reference: str | None = None
    sources: list[SourceChunk] = field(default_factory=list)


@dataclass
class CollectionInfo:
    """Information about one collection in the vector store."""

    name: str
    vectors: int


@dataclass
class StatusResult(CommandResult):
    """Result of the status command.

    Attributes:
        location: Data directory or remote URL of the vector store
        collections: Collections with their vector counts
    """

    location: str = ""
    collections: list[CollectionInfo] = field(default_factory=list)


def format_error(error: RefragError) -> str:
    """Render an error with its suggestion, if it has one."""
    if isinstance(error, ConfigError) and error.suggestion:
        return f"{error.message} {error.suggestion}"
    return str(error)
