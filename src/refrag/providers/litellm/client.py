# src/refrag/providers/litellm/client.py
"""LiteLLM client implementations for LLM and embedding APIs."""

from typing import Any

import litellm
from loguru import logger

from refrag.providers.base import EmbeddingClient, LLMClient
from refrag.providers.litellm.models import ChatModels, EmbeddingModels


def _get(obj: Any, key: str) -> Any:
    """Read a field from either a dict-like or attribute-style response object."""
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _first(items: Any) -> Any:
    if isinstance(items, (list, tuple)) and items:
        return items[0]
    return None


class LiteLLMClient(LLMClient):
    """LiteLLM-based LLM client for text generation.

    Supports any model available through LiteLLM (Gemini, OpenAI, Anthropic,
    Ollama, etc.).

    Example:
        from refrag.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.GEMINI_25_FLASH)
        answer = client.complete("Summarise section 6.7")
    """

    def __init__(
        self,
        model: str = ChatModels.GEMINI_25_FLASH,
        api_key: str | None = None,
        num_retries: int = 0,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: LiteLLM model identifier.
                   Examples: "gemini/gemini-2.5-flash", "openai/gpt-5-mini"
            api_key: Optional API key. If None, LiteLLM reads the provider's
                     standard environment variable.
            num_retries: Retries LiteLLM performs on rate limit errors. Default: 0.
        """
        self.model = model
        self.api_key = api_key
        self.num_retries = num_retries

    def generate(self, prompt: str, temperature: float | None = None) -> Any:
        """Call litellm.completion with a single user message."""
        completion_kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "drop_params": True,
            "num_retries": self.num_retries,
        }
        if temperature is not None:
            completion_kwargs["temperature"] = temperature
        if self.api_key:
            completion_kwargs["api_key"] = self.api_key

        logger.debug(f"[LiteLLM] completion model={self.model} prompt_chars={len(prompt)}")
        return litellm.completion(**completion_kwargs)

    def extract_text(self, response: Any) -> str:
        """Return the first non-empty text among the response shapes LiteLLM produces.

        Checked in order: chat ``choices[0].message.content``, text-completion
        ``choices[0].text``, then a top-level ``text`` field.
        """
        choice = _first(_get(response, "choices"))
        candidates = []
        if choice is not None:
            message = _get(choice, "message")
            if message is not None:
                candidates.append(_get(message, "content"))
            candidates.append(_get(choice, "text"))
        candidates.append(_get(response, "text"))

        for candidate in candidates:
            if isinstance(candidate, str) and candidate.strip():
                return candidate
        return ""


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Example:
        from refrag.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.HF_BGE_LARGE_EN_V15)
        embeddings = client.embed(["Hello world", "How are you?"])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.HF_BGE_LARGE_EN_V15,
        api_key: str | None = None,
        num_retries: int = 0,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
                   Examples: "huggingface/BAAI/bge-large-en-v1.5",
                   "openai/text-embedding-3-small"
            api_key: Optional API key for the embedding service.
            num_retries: Retries LiteLLM performs on rate limit errors. Default: 0.
        """
        self.model = model
        self.api_key = api_key
        self.num_retries = num_retries

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []

        embedding_kwargs: dict[str, Any] = {
            "model": self.model,
            "input": texts,
            "num_retries": self.num_retries,
        }
        if self.api_key:
            embedding_kwargs["api_key"] = self.api_key

        response = litellm.embedding(**embedding_kwargs)
        # Sort by index to maintain order
        sorted_data = sorted(response.data, key=lambda x: x["index"])
        return [item["embedding"] for item in sorted_data]
