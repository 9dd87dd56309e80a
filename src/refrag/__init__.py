"""refrag - question answering over a single PDF.

Questions that name a reference identifier (a section or clause number such
as "6.7") are answered from every chunk that contains it literally; all other
questions use top-k similarity search.

Quick Start (LiteLLM + Local Storage):
    from refrag import RefRAG, LiteLLMProvider, LocalStorage

    rag = RefRAG(
        provider=LiteLLMProvider(
            llm="gemini/gemini-2.5-flash",
            embedding="huggingface/BAAI/bge-large-en-v1.5",
        ),
        storage=LocalStorage("./refrag_data"),
    )

    # Build the collection once
    rag.build_index("Product.pdf")

    # Query
    response = rag.ask("What are the guidelines for 6.7?")
    print(response.answer.text)

Remote vector store:
    from refrag import RemoteStorage

    rag = RefRAG(provider=provider, storage=RemoteStorage("http://localhost:8000"))
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("refrag")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    try:
        import tomllib
        from pathlib import Path

        def _read_version_from_pyproject() -> str | None:
            for parent in Path(__file__).resolve().parents:
                pyproject = parent / "pyproject.toml"
                if pyproject.exists():
                    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                    version = data.get("project", {}).get("version")
                    return str(version) if version is not None else None
            return None

        __version__ = _read_version_from_pyproject() or "unknown"
    except (OSError, ValueError):
        __version__ = "unknown"

# Chunking
from refrag.chunker import Chunker, RecursiveChunker

# Configuration objects
from refrag.configuration import (
    LiteLLMProvider,
    LocalStorage,
    ProviderConfig,
    RemoteStorage,
    StorageConfig,
)
from refrag.embedder import Embedder

# Errors
from refrag.exceptions import (
    ConfigError,
    GenerationError,
    IndexingError,
    LoadError,
    RefragError,
    RetrievalError,
)

# Pipelines
from refrag.generator import AnswerGenerator
from refrag.indexer import Indexer

# File loading
from refrag.loaders import Loader, PyPDFLoader

# Core models
from refrag.models import (
    Answer,
    Chunk,
    IndexReport,
    Page,
    QueryResponse,
    RetrievalResult,
    ScoredChunk,
)

# Provider ABCs
from refrag.providers import EmbeddingClient, LLMClient
from refrag.reference import ReferenceExtractor

# Central configuration
from refrag.refrag import RefRAG
from refrag.retriever import Retriever

# Configuration
from refrag.settings import Settings

# Storage
from refrag.stores import ChromaVectorStore, VectorStore

__all__ = [
    # Version
    "__version__",
    # Models
    "Answer",
    "Chunk",
    "IndexReport",
    "Page",
    "QueryResponse",
    "RetrievalResult",
    "ScoredChunk",
    # Config
    "Settings",
    # Configuration objects
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    "RemoteStorage",
    # Errors
    "RefragError",
    "ConfigError",
    "LoadError",
    "IndexingError",
    "RetrievalError",
    "GenerationError",
    # Storage
    "VectorStore",
    "ChromaVectorStore",
    # Embedding ABC
    "Embedder",
    # Provider ABCs
    "LLMClient",
    "EmbeddingClient",
    # Pipelines
    "Chunker",
    "RecursiveChunker",
    "Indexer",
    "ReferenceExtractor",
    "Retriever",
    "AnswerGenerator",
    # Central configuration
    "RefRAG",
    # File loading
    "Loader",
    "PyPDFLoader",
]
