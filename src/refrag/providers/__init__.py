# src/refrag/providers/__init__.py
"""Provider implementations for refrag.

This module contains LLM and embedding provider abstractions:
- LLMClient: Abstract base class for LLM completion providers
- EmbeddingClient: Abstract base class for embedding providers
- LiteLLM implementations

Usage:
    from refrag.providers import LLMClient, EmbeddingClient
    from refrag.providers.litellm import LiteLLMClient, ChatModels
"""

from refrag.providers.base import EmbeddingClient, LLMClient
from refrag.providers.litellm import (
    ChatModels,
    EmbeddingModels,
    LiteLLMClient,
    LiteLLMEmbeddingClient,
)

__all__ = [
    # ABCs
    "LLMClient",
    "EmbeddingClient",
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # LiteLLM clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
