# src/refrag/exceptions.py
"""Error hierarchy for refrag.

Every pipeline stage raises a subclass of RefragError. The ``retryable``
flag separates transient service failures (network, embedding service,
vector store, LLM) from permanent input failures (bad configuration,
unreadable PDF). Nothing in refrag retries on its own; the flag is for
callers.
"""


class RefragError(Exception):
    """Base class for all refrag errors."""

    retryable: bool = False


class ConfigError(RefragError):
    """A required setting or secret is missing or invalid.

    Attributes:
        suggestion: Optional hint shown to the user.
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion


class LoadError(RefragError):
    """The source PDF is missing, unreadable, or not a valid PDF."""


class IndexingError(RefragError):
    """Embedding or vector-store write failed while building a collection.

    Batches written before the failure stay in the collection.

    Attributes:
        collection: Name of the collection being built.
        batches_written: Number of batches that were written successfully.
    """

    retryable = True

    def __init__(self, message: str, collection: str, batches_written: int = 0) -> None:
        super().__init__(message)
        self.collection = collection
        self.batches_written = batches_written


class RetrievalError(RefragError):
    """The vector store failed to answer a query."""

    retryable = True


class GenerationError(RefragError):
    """The LLM call for the final answer failed."""

    retryable = True
