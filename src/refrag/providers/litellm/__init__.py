# src/refrag/providers/litellm/__init__.py
"""LiteLLM provider clients for refrag.

This module contains LiteLLM-based client implementations:
- LiteLLMClient: LLM completion using LiteLLM
- LiteLLMEmbeddingClient: Embeddings using LiteLLM
- ChatModels: Curated chat model constants
- EmbeddingModels: Curated embedding model constants

Usage:
    from refrag.providers.litellm import LiteLLMClient, ChatModels

    client = LiteLLMClient(model=ChatModels.GEMINI_25_FLASH)
    text = client.complete("What does clause 6.7 say?")
"""

from refrag.providers.litellm.client import LiteLLMClient, LiteLLMEmbeddingClient
from refrag.providers.litellm.models import ChatModels, EmbeddingModels

__all__ = [
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # Clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
