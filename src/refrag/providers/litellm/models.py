# src/refrag/providers/litellm/models.py
"""Curated model constants for the LiteLLM provider.

Any valid LiteLLM model string can be passed directly; these exist for
IDE autocomplete.
"""


class ChatModels:
    """Chat/completion models for LiteLLMClient."""

    # Google Gemini
    GEMINI_25_FLASH = "gemini/gemini-2.5-flash"
    GEMINI_25_PRO = "gemini/gemini-2.5-pro"

    # OpenAI
    GPT_5_MINI = "openai/gpt-5-mini"
    GPT_4O_MINI = "openai/gpt-4o-mini"

    # Anthropic
    CLAUDE_SONNET_45 = "anthropic/claude-sonnet-4-5-20250929"
    CLAUDE_HAIKU_45 = "anthropic/claude-haiku-4-5-20251001"

    # DeepSeek
    DEEPSEEK_CHAT = "deepseek/deepseek-chat"

    # Local
    OLLAMA_LLAMA32 = "ollama/llama3.2"


class EmbeddingModels:
    """Embedding models for LiteLLMEmbeddingClient."""

    # Hugging Face Inference
    HF_BGE_LARGE_EN_V15 = "huggingface/BAAI/bge-large-en-v1.5"

    # OpenAI
    TEXT_3_SMALL = "openai/text-embedding-3-small"
    TEXT_3_LARGE = "openai/text-embedding-3-large"

    # Google Gemini
    GEMINI_EMBEDDING_001 = "gemini/gemini-embedding-001"

    # Local
    OLLAMA_NOMIC = "ollama/nomic-embed-text"
