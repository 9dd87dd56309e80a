# tests/commands/test_index.py
"""Tests for the index command."""

import os
from unittest.mock import patch

from refrag.commands import CommandStage, index


class TestIndexCommand:
    """Tests for index.index()."""

    def test_index_creates_collection(self, cli_env, fake_refrag, product_pdf) -> None:
        result = index.index(product_pdf)

        assert result.success is True
        assert result.error is None
        assert result.collection == "refrag-document-v1"
        assert result.created is True
        assert result.chunks_written == 3
        assert result.batches == 1
        assert os.path.isdir(os.path.join(cli_env, "refrag_data"))

    def test_second_run_is_skipped(self, cli_env, fake_refrag, product_pdf) -> None:
        index.index(product_pdf)
        result = index.index(product_pdf)

        assert result.success is True
        assert result.created is False
        assert result.chunks_written == 0

    def test_collection_override(self, cli_env, fake_refrag, product_pdf) -> None:
        result = index.index(product_pdf, collection="product-v2")

        assert result.success is True
        assert result.collection == "product-v2"
        assert fake_refrag.configs[0].settings.collection_name == "product-v2"

    def test_data_dir_override(self, cli_env, fake_refrag, product_pdf) -> None:
        data_dir = os.path.join(cli_env, "elsewhere")
        result = index.index(product_pdf, data_dir=data_dir)

        assert result.success is True
        assert fake_refrag.configs[0].data_dir == data_dir
        assert os.path.isdir(data_dir)

    def test_missing_pdf(self, cli_env, fake_refrag) -> None:
        result = index.index(os.path.join(cli_env, "missing.pdf"))

        assert result.success is False
        assert "PDF not found" in result.error
        assert fake_refrag.configs == []

    def test_missing_api_key(self, cli_env, product_pdf, monkeypatch) -> None:
        monkeypatch.delenv("REFRAG_LLM_API_KEY")
        environment = {"keys_in_environment": False, "missing_keys": ["GEMINI_API_KEY"]}

        with patch("litellm.validate_environment", return_value=environment):
            result = index.index(product_pdf)

        assert result.success is False
        assert "No API key" in result.error
        assert "REFRAG_LLM_API_KEY" in result.error

    def test_invalid_pdf_fails(self, cli_env, fake_refrag) -> None:
        path = os.path.join(cli_env, "broken.pdf")
        with open(path, "w") as f:
            f.write("not a pdf")

        result = index.index(path)

        assert result.success is False
        assert result.error

    def test_reports_progress(self, cli_env, fake_refrag, product_pdf) -> None:
        updates = []

        result = index.index(product_pdf, on_progress=updates.append)

        assert result.success is True
        stages = [update.stage for update in updates]
        assert stages[0] == CommandStage.LOADING
        assert CommandStage.INDEXING in stages
        assert stages[-1] == CommandStage.COMPLETE
