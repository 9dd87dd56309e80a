# src/refrag/configuration/providers/litellm.py
"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from refrag.embedder import Embedder
    from refrag.providers import LLMClient
    from refrag.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for LLM and embedding calls.

    Args:
        llm: LiteLLM model identifier for reference extraction and answers.
             Examples: "gemini/gemini-2.5-flash", "openai/gpt-5-mini"
        embedding: LiteLLM model identifier for embeddings.
                   Examples: "huggingface/BAAI/bge-large-en-v1.5"
        llm_api_key: Optional API key for the LLM service
        embedding_api_key: Optional API key for the embedding service

    Example:
        provider = LiteLLMProvider(
            llm="gemini/gemini-2.5-flash",
            embedding="huggingface/BAAI/bge-large-en-v1.5",
        )
    """

    llm: str
    embedding: str
    llm_api_key: str | None = field(default=None, repr=False)
    embedding_api_key: str | None = field(default=None, repr=False)

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build a ClientEmbedder using the LiteLLM embedding client."""
        from refrag.embedder import ClientEmbedder
        from refrag.providers.litellm import LiteLLMEmbeddingClient

        embedding_client = LiteLLMEmbeddingClient(
            model=self.embedding,
            api_key=self.embedding_api_key,
            num_retries=settings.num_retries,
        )
        return ClientEmbedder(embedding_client=embedding_client)

    def build_llm_client(self, settings: Settings) -> LLMClient:
        """Build a LiteLLMClient for reference extraction and answers."""
        from refrag.providers.litellm import LiteLLMClient

        return LiteLLMClient(
            model=self.llm,
            api_key=self.llm_api_key,
            num_retries=settings.num_retries,
        )
