# tests/test_settings.py
"""Tests for Settings.

Settings is a plain BaseModel (no env var reading).
The library is programmatic-first - env vars are read by the CLI application layer.
"""

import pytest
from pydantic import ValidationError

from refrag.settings import DEFAULT_COLLECTION_NAME, Settings


class TestSettings:
    def test_default_settings(self):
        settings = Settings()
        assert settings.collection_name == DEFAULT_COLLECTION_NAME
        assert settings.batch_size == 20
        assert settings.chunk_size == 1500
        assert settings.chunk_overlap == 500
        assert settings.default_k == 15
        assert settings.reference_lookup is True
        assert settings.fallback_to_similarity is False
        assert settings.strict_citations is False
        assert settings.synthesis_prompt is None
        assert settings.synthesis_temperature is None
        assert settings.num_retries == 0

    def test_custom_values(self):
        settings = Settings(collection_name="product-v2", default_k=5, strict_citations=True)
        assert settings.collection_name == "product-v2"
        assert settings.default_k == 5
        assert settings.strict_citations is True

    def test_is_frozen(self):
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.default_k = 3

    @pytest.mark.parametrize(
        "field, value",
        [
            ("batch_size", 0),
            ("chunk_size", 0),
            ("chunk_overlap", -1),
            ("default_k", 0),
            ("num_retries", -1),
            ("collection_name", ""),
        ],
    )
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})

    def test_overlap_must_be_smaller_than_chunk_size(self):
        with pytest.raises(ValidationError, match="chunk_overlap"):
            Settings(chunk_size=500, chunk_overlap=500)
