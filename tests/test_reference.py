# tests/test_reference.py
"""Tests for reference extraction."""

import pytest

from refrag.reference import DEFAULT_PROMPT, ReferenceExtractor, parse_reference


class TestParseReference:
    @pytest.mark.parametrize(
        "reply, expected",
        [
            ("6.7", "6.7"),
            ("  8.21\n", "8.21"),
            ('"6.7"', "6.7"),
            ("`A.5.1`", "A.5.1"),
            ("Reference: 6.7", "6.7"),
            ("reference number = REQ-104", "REQ-104"),
            ('{"reference": "6.7"}', "6.7"),
            ('```json\n{"reference": "8.21"}\n```', "8.21"),
            ("```\n6.7\n```", "6.7"),
        ],
    )
    def test_accepted_forms(self, reply, expected):
        assert parse_reference(reply) == expected

    @pytest.mark.parametrize(
        "reply",
        [
            "",
            "   ",
            "NONE",
            "none",
            "null",
            "N/A",
            '{"reference": null}',
            '{"reference": ',
            "6.7\n8.21",
            "x" * 65,
        ],
    )
    def test_no_reference(self, reply):
        assert parse_reference(reply) is None


class TestReferenceExtractor:
    def test_returns_reference(self, make_llm):
        llm = make_llm(reference_reply="6.7")
        assert ReferenceExtractor(llm).extract("what does 6.7 say?") == "6.7"

    def test_returns_none_for_sentinel(self, make_llm):
        llm = make_llm(reference_reply="NONE")
        assert ReferenceExtractor(llm).extract("how are keys rotated?") is None

    def test_prompt_contains_question(self, make_llm):
        llm = make_llm(reference_reply="6.7")
        ReferenceExtractor(llm).extract("what does 6.7 say?")

        assert len(llm.prompts) == 1
        assert llm.prompts[0] == DEFAULT_PROMPT.format(question="what does 6.7 say?")

    def test_uses_zero_temperature(self, make_llm):
        llm = make_llm(reference_reply="6.7")
        ReferenceExtractor(llm).extract("what does 6.7 say?")
        assert llm.temperatures == [0.0]

    def test_llm_failure_is_no_reference(self, make_llm):
        llm = make_llm(reference_reply=ConnectionError("timeout"))
        assert ReferenceExtractor(llm).extract("what does 6.7 say?") is None

    def test_blank_question_skips_llm(self, make_llm):
        llm = make_llm(reference_reply="6.7")
        assert ReferenceExtractor(llm).extract("   ") is None
        assert llm.prompts == []

    def test_custom_prompt(self, make_llm):
        llm = make_llm(answer_reply="8.21")
        extractor = ReferenceExtractor(llm, prompt_template="Find the clause in: {question}")

        assert extractor.extract("tell me about 8.21") == "8.21"
        assert llm.prompts == ["Find the clause in: tell me about 8.21"]
