# src/refrag/refrag.py
"""Central configuration class for refrag."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from refrag.settings import Settings

if TYPE_CHECKING:
    from refrag.chunker import Chunker
    from refrag.configuration import ProviderConfig, StorageConfig
    from refrag.generator import AnswerGenerator
    from refrag.indexer import Indexer, ProgressCallback
    from refrag.loaders import Loader
    from refrag.models import Chunk, IndexReport, QueryResponse
    from refrag.retriever import Retriever
    from refrag.stores import VectorStore


class RefRAG:
    """Bundles the store and AI components so the pipeline is configured once.

    There are two ways to create a RefRAG instance:

    1. With a storage configuration:

        from refrag import RefRAG, LiteLLMProvider, LocalStorage

        rag = RefRAG(
            provider=LiteLLMProvider(
                llm="gemini/gemini-2.5-flash",
                embedding="huggingface/BAAI/bge-large-en-v1.5",
            ),
            storage=LocalStorage("./refrag_data"),
        )

    2. With an explicit store:

        rag = RefRAG(provider=provider, store=my_vector_store)

    Then:

        rag.build_index("Product.pdf")
        response = rag.ask("What does 6.7 say?")
        print(response.answer.text)
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig,
        storage: StorageConfig | None = None,
        store: VectorStore | None = None,
        settings: Settings | None = None,
        loader: Loader | None = None,
        chunker: Chunker | None = None,
    ) -> None:
        """Create a RefRAG instance.

        Args:
            provider: Provider configuration (builds embedder and LLM client)
            storage: Storage configuration. Mutually exclusive with store.
            store: Explicit vector store.
            settings: Behavioral settings (collection name, chunking, k, ...)
            loader: Document loader. Defaults to PyPDFLoader.
            chunker: Chunker. Defaults to RecursiveChunker built from settings.

        Raises:
            ValueError: If neither or both of storage and store are given
        """
        self._settings = settings if settings is not None else Settings()

        self.embedder = provider.build_embedder(self._settings)
        self.llm_client = provider.build_llm_client(self._settings)

        if storage is not None and store is not None:
            raise ValueError("Cannot mix 'storage' configuration with an explicit 'store'")
        if storage is not None:
            self.store = storage.build_store(self.embedder)
        elif store is not None:
            self.store = store
        else:
            raise ValueError("Must provide either 'storage' or 'store'")

        if loader is None:
            from refrag.loaders import PyPDFLoader

            loader = PyPDFLoader()
        self.loader = loader

        if chunker is None:
            from refrag.chunker import RecursiveChunker

            chunker = RecursiveChunker(
                chunk_size=self._settings.chunk_size,
                chunk_overlap=self._settings.chunk_overlap,
            )
        self.chunker = chunker

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def collection_name(self) -> str:
        return self._settings.collection_name

    def indexer(self) -> Indexer:
        """Create an Indexer over this instance's store."""
        from refrag.indexer import Indexer

        return Indexer(store=self.store, batch_size=self._settings.batch_size)

    def retriever(
        self,
        *,
        default_k: int | None = None,
        reference_lookup: bool | None = None,
        fallback_to_similarity: bool | None = None,
    ) -> Retriever:
        """Create a Retriever over this instance's collection.

        Args:
            default_k: Results in similarity mode. If None, uses settings.
            reference_lookup: Enable reference extraction. If None, uses settings.
            fallback_to_similarity: If None, uses settings.
        """
        from refrag.reference import ReferenceExtractor
        from refrag.retriever import Retriever

        if reference_lookup is None:
            reference_lookup = self._settings.reference_lookup
        extractor = ReferenceExtractor(llm_client=self.llm_client) if reference_lookup else None

        return Retriever(
            store=self.store,
            collection_name=self.collection_name,
            default_k=default_k if default_k is not None else self._settings.default_k,
            reference_extractor=extractor,
            fallback_to_similarity=(
                fallback_to_similarity
                if fallback_to_similarity is not None
                else self._settings.fallback_to_similarity
            ),
        )

    def generator(self, *, strict_citations: bool | None = None) -> AnswerGenerator:
        """Create an AnswerGenerator using this instance's LLM client."""
        from refrag.generator import AnswerGenerator

        return AnswerGenerator(
            llm_client=self.llm_client,
            strict_citations=(
                strict_citations
                if strict_citations is not None
                else self._settings.strict_citations
            ),
            temperature=self._settings.synthesis_temperature,
            prompt_template=self._settings.synthesis_prompt,
        )

    def load_chunks(self, pdf_path: str, source_id: str | None = None) -> list[Chunk]:
        """Load a PDF and split it into chunks."""
        pages = self.loader.load(pdf_path, source_id)
        return self.chunker.split(pages)

    def build_index(
        self,
        pdf_path: str,
        source_id: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> IndexReport:
        """Index a PDF into the configured collection unless it already exists.

        The PDF is only read when the collection is missing.

        Raises:
            LoadError: If the PDF cannot be read
            IndexingError: If embedding or writing a batch fails
        """
        from refrag.models import IndexReport

        indexer = self.indexer()
        if indexer.collection_exists(self.collection_name):
            logger.info(f"Collection {self.collection_name!r} already exists; skipping indexing")
            return IndexReport(collection=self.collection_name, created=False)

        chunks = self.load_chunks(pdf_path, source_id)
        return indexer.index(self.collection_name, chunks, on_progress=on_progress)

    def ask(
        self,
        question: str,
        k: int | None = None,
        *,
        synthesize: bool = True,
        strict_citations: bool | None = None,
    ) -> QueryResponse:
        """Retrieve context for a question and answer it.

        Args:
            question: User's question
            k: Results in similarity mode. If None, uses settings.
            synthesize: If False, skip the LLM answer and return only retrieval
            strict_citations: Override settings for this question

        Raises:
            RetrievalError: If the vector store query fails
            GenerationError: If the answer LLM call fails
        """
        from refrag.models import QueryResponse

        retrieval = self.retriever().retrieve(question, k=k)

        answer = None
        if synthesize:
            answer = self.generator(strict_citations=strict_citations).generate(
                question, retrieval.chunks
            )

        return QueryResponse(query=question, answer=answer, retrieval=retrieval)

    def close(self) -> None:
        """Release the vector store's resources."""
        self.store.close()
