# tests/providers/test_litellm.py
"""Tests for the LiteLLM clients."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from refrag.providers import EmbeddingClient, LLMClient
from refrag.providers.litellm import (
    ChatModels,
    EmbeddingModels,
    LiteLLMClient,
    LiteLLMEmbeddingClient,
)


def chat_response(content):
    """Attribute-style chat completion response, as LiteLLM returns."""
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def mock_embedding_response(embeddings: list[list[float]], reverse: bool = False):
    """Create a mock LiteLLM embedding response."""
    mock_response = MagicMock()
    data = [{"index": i, "embedding": emb} for i, emb in enumerate(embeddings)]
    mock_response.data = list(reversed(data)) if reverse else data
    return mock_response


class TestLiteLLMClient:
    def test_is_llm_client(self):
        assert isinstance(LiteLLMClient(), LLMClient)

    def test_default_model(self):
        assert LiteLLMClient().model == ChatModels.GEMINI_25_FLASH

    @patch("refrag.providers.litellm.client.litellm.completion")
    def test_complete(self, mock_completion):
        mock_completion.return_value = chat_response("6.7")

        result = LiteLLMClient().complete("Which reference?")

        assert result == "6.7"
        mock_completion.assert_called_once_with(
            model="gemini/gemini-2.5-flash",
            messages=[{"role": "user", "content": "Which reference?"}],
            drop_params=True,
            num_retries=0,
        )

    @patch("refrag.providers.litellm.client.litellm.completion")
    def test_passes_temperature_and_api_key(self, mock_completion):
        mock_completion.return_value = chat_response("ok")

        client = LiteLLMClient(model="openai/gpt-5-mini", api_key="secret", num_retries=2)
        client.complete("prompt", temperature=0.0)

        kwargs = mock_completion.call_args.kwargs
        assert kwargs["temperature"] == 0.0
        assert kwargs["api_key"] == "secret"
        assert kwargs["num_retries"] == 2

    @patch("refrag.providers.litellm.client.litellm.completion")
    def test_errors_propagate(self, mock_completion):
        mock_completion.side_effect = ConnectionError("down")
        with pytest.raises(ConnectionError):
            LiteLLMClient().complete("prompt")


class TestExtractText:
    @pytest.fixture
    def client(self):
        return LiteLLMClient()

    def test_chat_message_content(self, client):
        assert client.extract_text(chat_response("answer")) == "answer"

    def test_dict_chat_response(self, client):
        response = {"choices": [{"message": {"content": "answer"}}]}
        assert client.extract_text(response) == "answer"

    def test_text_completion_choice(self, client):
        response = {"choices": [{"text": "answer"}]}
        assert client.extract_text(response) == "answer"

    def test_top_level_text(self, client):
        assert client.extract_text(SimpleNamespace(text="answer")) == "answer"

    def test_skips_empty_candidates(self, client):
        response = {"choices": [{"message": {"content": ""}, "text": "fallback"}]}
        assert client.extract_text(response) == "fallback"

    def test_none_content(self, client):
        assert client.extract_text(chat_response(None)) == ""

    def test_unknown_shape(self, client):
        assert client.extract_text({"output": "x"}) == ""
        assert client.extract_text({"choices": []}) == ""


class TestLiteLLMEmbeddingClient:
    def test_is_embedding_client(self):
        assert isinstance(LiteLLMEmbeddingClient(), EmbeddingClient)

    def test_default_model(self):
        assert LiteLLMEmbeddingClient().model == EmbeddingModels.HF_BGE_LARGE_EN_V15

    @patch("refrag.providers.litellm.client.litellm.embedding")
    def test_embed(self, mock_embedding):
        mock_embedding.return_value = mock_embedding_response([[1.0, 0.0], [0.0, 1.0]])

        result = LiteLLMEmbeddingClient().embed(["a", "b"])

        assert result == [[1.0, 0.0], [0.0, 1.0]]
        mock_embedding.assert_called_once_with(
            model="huggingface/BAAI/bge-large-en-v1.5",
            input=["a", "b"],
            num_retries=0,
        )

    @patch("refrag.providers.litellm.client.litellm.embedding")
    def test_embed_sorts_by_index(self, mock_embedding):
        mock_embedding.return_value = mock_embedding_response(
            [[1.0, 0.0], [0.0, 1.0]], reverse=True
        )
        assert LiteLLMEmbeddingClient().embed(["a", "b"]) == [[1.0, 0.0], [0.0, 1.0]]

    @patch("refrag.providers.litellm.client.litellm.embedding")
    def test_embed_empty(self, mock_embedding):
        assert LiteLLMEmbeddingClient().embed([]) == []
        mock_embedding.assert_not_called()

    @patch("refrag.providers.litellm.client.litellm.embedding")
    def test_api_key_passed(self, mock_embedding):
        mock_embedding.return_value = mock_embedding_response([[1.0]])
        LiteLLMEmbeddingClient(api_key="hf-key").embed(["a"])
        assert mock_embedding.call_args.kwargs["api_key"] == "hf-key"
