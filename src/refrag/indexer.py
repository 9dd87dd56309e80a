# src/refrag/indexer.py
"""Indexing pipeline for refrag."""

from collections.abc import Callable

from loguru import logger

from refrag.exceptions import IndexingError
from refrag.models import Chunk, IndexReport
from refrag.stores import VectorStore

ProgressCallback = Callable[[int, int, str], None]
"""Callback for indexing progress updates.

Args:
    current: Batches written so far (0 to total)
    total: Total number of batches
    message: Human-readable status message
"""


def make_batches(chunks: list[Chunk], batch_size: int) -> list[list[Chunk]]:
    """Partition chunks into consecutive batches of at most batch_size."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [chunks[i : i + batch_size] for i in range(0, len(chunks), batch_size)]


class Indexer:
    """Builds a collection once and reuses it afterwards.

    Pipeline:
    1. Ask the store whether the collection exists; if it does, stop
    2. Create the collection with the first batch of chunks
    3. Append the remaining batches

    An existing collection is never re-embedded, even if it was left
    incomplete by an earlier failed run. Changed document content needs a
    new collection name.
    """

    def __init__(self, store: VectorStore, batch_size: int = 20) -> None:
        """Initialize the indexer.

        Args:
            store: Vector store that embeds and holds the chunks
            batch_size: Chunks per write call
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.store = store
        self.batch_size = batch_size

    def collection_exists(self, collection_name: str) -> bool:
        """Check whether the collection is already present in the store."""
        try:
            status = self.store.ensure_collection(collection_name)
        except Exception as e:
            raise IndexingError(
                f"Could not list collections: {e}", collection=collection_name
            ) from e
        return status.exists

    def index(
        self,
        collection_name: str,
        chunks: list[Chunk],
        on_progress: ProgressCallback | None = None,
    ) -> IndexReport:
        """Ensure the named collection exists and holds every chunk exactly once.

        Args:
            collection_name: Name of the collection to build or reuse
            chunks: Chunks to write if the collection does not exist yet
            on_progress: Optional callback(current, total, message)

        Returns:
            IndexReport describing what was written

        Raises:
            IndexingError: If any batch fails; earlier batches stay written
        """

        def progress(current: int, total: int, message: str) -> None:
            if on_progress:
                on_progress(current, total, message)

        if self.collection_exists(collection_name):
            logger.info(f"Collection {collection_name!r} exists; reusing it without re-indexing")
            return IndexReport(collection=collection_name, created=False)

        if not chunks:
            logger.warning(f"No chunks to index; collection {collection_name!r} not created")
            return IndexReport(collection=collection_name, created=False)

        batches = make_batches(chunks, self.batch_size)
        written = 0
        chunks_written = 0
        progress(0, len(batches), f"Indexing {len(chunks)} chunks...")

        for batch in batches:
            first_id, last_id = batch[0].chunk_id, batch[-1].chunk_id
            logger.info(
                f"Processing batch {written + 1}/{len(batches)} "
                f"(chunks {first_id}-{last_id}, size={len(batch)})"
            )
            try:
                if written == 0:
                    self.store.create_with_first_batch(collection_name, batch)
                else:
                    self.store.append_batch(collection_name, batch)
            except Exception as e:
                logger.error(f"Batch {written + 1}/{len(batches)} failed: {e}")
                raise IndexingError(
                    f"Indexing {collection_name!r} failed at batch "
                    f"{written + 1}/{len(batches)}: {e}",
                    collection=collection_name,
                    batches_written=written,
                ) from e
            written += 1
            chunks_written += len(batch)
            progress(written, len(batches), f"Indexed {chunks_written}/{len(chunks)} chunks")

        return IndexReport(
            collection=collection_name,
            created=True,
            chunks_written=chunks_written,
            batches=written,
        )
