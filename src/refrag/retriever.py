# src/refrag/retriever.py
"""Retrieval for refrag."""

from loguru import logger

from refrag.exceptions import RetrievalError
from refrag.models import Chunk, RetrievalResult, ScoredChunk
from refrag.reference import ReferenceExtractor
from refrag.stores import VectorStore


class Retriever:
    """Selects the chunks used to answer a question.

    Two modes, chosen per query:
    - reference: the question names a reference identifier (e.g. "6.7");
      return every chunk that contains it literally, in document order
    - similarity: embed the question and return the top-k nearest chunks
    """

    def __init__(
        self,
        store: VectorStore,
        collection_name: str,
        default_k: int = 15,
        reference_extractor: ReferenceExtractor | None = None,
        fallback_to_similarity: bool = False,
    ) -> None:
        """Initialize the retriever.

        Args:
            store: Vector store holding the indexed chunks
            collection_name: Collection to search
            default_k: Default number of results in similarity mode
            reference_extractor: Optional extractor enabling reference mode
            fallback_to_similarity: When reference mode finds no chunk, run
                similarity search instead of returning an empty result
        """
        self.store = store
        self.collection_name = collection_name
        self.default_k = default_k
        self.reference_extractor = reference_extractor
        self.fallback_to_similarity = fallback_to_similarity

    def by_reference(self, reference: str) -> list[Chunk]:
        """Return every chunk whose text contains the reference, in chunk order."""
        try:
            chunks = self.store.find_containing(self.collection_name, reference)
        except Exception as e:
            raise RetrievalError(f"Reference search for {reference!r} failed: {e}") from e
        logger.info(f"Reference {reference!r} matched {len(chunks)} chunks")
        return chunks

    def by_similarity(self, query: str, k: int | None = None) -> list[ScoredChunk]:
        """Return at most k chunks ordered by descending similarity.

        Raises:
            RetrievalError: If k is less than 1 or the store query fails
        """
        k = self.default_k if k is None else k
        if k < 1:
            raise RetrievalError(f"k must be at least 1, got {k}")
        try:
            results = self.store.similarity_search(self.collection_name, query, k)
        except Exception as e:
            raise RetrievalError(f"Similarity search failed: {e}") from e
        logger.info(f"Similarity search returned {len(results)} chunks (k={k})")
        return results[:k]

    def retrieve(self, query: str, k: int | None = None) -> RetrievalResult:
        """Retrieve chunks for a query using the appropriate mode.

        Args:
            query: User's question
            k: Number of results in similarity mode (default: self.default_k)

        Returns:
            RetrievalResult with chunks in retrieval order
        """
        logger.debug(f"[Retriever] Query: {query[:80]!r}")

        reference = None
        if self.reference_extractor is not None:
            reference = self.reference_extractor.extract(query)

        if reference is not None:
            chunks = self.by_reference(reference)
            if chunks or not self.fallback_to_similarity:
                return RetrievalResult(
                    query=query,
                    mode="reference",
                    reference=reference,
                    chunks=chunks,
                )
            logger.info(f"No chunk contains {reference!r}; falling back to similarity search")

        scored = self.by_similarity(query, k)
        return RetrievalResult(
            query=query,
            mode="similarity",
            reference=reference,
            chunks=[item.chunk for item in scored],
            scores=[item.score for item in scored],
        )
