# src/refrag/configuration/providers/__init__.py
"""Provider configurations for refrag."""

from refrag.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
