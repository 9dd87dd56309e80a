# src/refrag/configuration/__init__.py
"""Configuration objects for refrag.

Instead of factory methods, you pass configuration objects that know how
to build their components.

Provider configurations (build AI/ML components):
- LiteLLMProvider: Uses LiteLLM for LLM and embedding calls

Storage configurations (build the vector store):
- LocalStorage: Persistent ChromaDB directory
- RemoteStorage: ChromaDB server over HTTP

Example:
    from refrag import RefRAG, LiteLLMProvider, LocalStorage

    rag = RefRAG(
        provider=LiteLLMProvider(
            llm="gemini/gemini-2.5-flash",
            embedding="huggingface/BAAI/bge-large-en-v1.5",
        ),
        storage=LocalStorage("./refrag_data"),
    )
"""

from refrag.configuration.base import ProviderConfig, StorageConfig
from refrag.configuration.providers import LiteLLMProvider
from refrag.configuration.storage import LocalStorage, RemoteStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    "RemoteStorage",
]
