# src/refrag/providers/base.py
"""Abstract base classes for LLM and embedding providers."""

from abc import ABC, abstractmethod
from typing import Any


class LLMClient(ABC):
    """Abstract base class for LLM completion providers.

    Backends differ in where they put the answer text, so each implementation
    pairs the raw call (generate) with an adapter that pulls the text out of
    its own response shape (extract_text). Callers use complete(), which
    composes the two.

    Example:
        class MyLLMClient(LLMClient):
            def generate(self, prompt, temperature=None):
                return my_api.generate(prompt, temp=temperature)

            def extract_text(self, response):
                return response["output"]
    """

    model: str

    @abstractmethod
    def generate(self, prompt: str, temperature: float | None = None) -> Any:
        """Send a single prompt to the model and return the raw response.

        Args:
            prompt: The full prompt text.
            temperature: Optional temperature. If None, use provider default.

        Returns:
            The backend's response object, untouched.
        """
        ...

    @abstractmethod
    def extract_text(self, response: Any) -> str:
        """Return the answer text from a raw response, or "" if there is none."""
        ...

    def complete(self, prompt: str, temperature: float | None = None) -> str:
        """Generate a completion and return its text."""
        return self.extract_text(self.generate(prompt, temperature))


class EmbeddingClient(ABC):
    """Abstract base class for embedding providers.

    Example:
        class MyEmbeddingClient(EmbeddingClient):
            def embed(self, texts):
                return my_api.embed_batch(texts)
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts.

        Args:
            texts: List of texts to embed.

        Returns:
            List of embedding vectors, one per input text.
            Order is preserved (result[i] corresponds to texts[i]).
        """
        ...
