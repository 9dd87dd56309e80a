# src/refrag/reference.py
"""Reference-number extraction for exact-match retrieval."""

import json
import re

from loguru import logger

from refrag.providers.base import LLMClient

NO_REFERENCE = "NONE"
MAX_REFERENCE_LENGTH = 64

DEFAULT_PROMPT = """You classify questions about a single document.

Decide whether the question below asks about ONE specific reference identifier
in the document, such as a section, clause, control, or requirement number
(examples: "6.7", "8.21", "A.5.1", "REQ-104").

- If it does, reply with that identifier exactly as it would appear in the
  document, and nothing else.
- If it does not, reply with exactly: NONE

Question: {question}

Reply:"""

_FENCE_RE = re.compile(r"```(?:json)?\s*\n(.*?)\n\s*```", re.DOTALL)
_LABEL_RE = re.compile(r"^(?:reference(?:\s+number)?|ref)\s*[:=]\s*", re.IGNORECASE)
_EMPTY_VALUES = {"NONE", "NULL", "N/A", "NO REFERENCE", "NO"}


def parse_reference(response_text: str) -> str | None:
    """Normalise a classifier reply into a reference string, or None.

    Accepts a bare identifier, an identifier inside a code fence or quotes,
    a ``Reference: ...`` label, or JSON like ``{"reference": "6.7"}``.
    Anything empty, multi-line, over-long, or a "none" marker gives None.
    """
    text = response_text.strip()
    if not text:
        return None

    fenced = _FENCE_RE.search(text)
    if fenced:
        text = fenced.group(1).strip()

    if text.startswith("{"):
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            return None
        value = data.get("reference") if isinstance(data, dict) else None
        if not isinstance(value, str):
            return None
        text = value

    text = _LABEL_RE.sub("", text.strip())
    text = text.strip().strip("\"'`").strip()

    if not text or "\n" in text or len(text) > MAX_REFERENCE_LENGTH:
        return None
    if text.upper() in _EMPTY_VALUES:
        return None
    return text


class ReferenceExtractor:
    """Asks the LLM whether a question targets one document reference.

    Never fails the query: an LLM error or an unusable reply is treated as
    "no reference", so retrieval falls back to similarity search.

    Example:
        extractor = ReferenceExtractor(llm_client=LiteLLMClient())
        extractor.extract("what does 6.7 say?")   # "6.7"
        extractor.extract("how are keys rotated?")  # None
    """

    def __init__(
        self,
        llm_client: LLMClient,
        prompt_template: str | None = None,
        temperature: float | None = 0.0,
    ) -> None:
        """Initialize the extractor.

        Args:
            llm_client: Any LLMClient implementation
            prompt_template: Custom prompt template with a {question} placeholder
            temperature: LLM temperature. None to use model default.
        """
        self._client = llm_client
        self.prompt_template = prompt_template or DEFAULT_PROMPT
        self.temperature = temperature

    def extract(self, question: str) -> str | None:
        """Return the referenced identifier, or None when there is none."""
        if not question.strip():
            return None

        prompt = self.prompt_template.format(question=question)
        try:
            response_text = self._client.complete(prompt, temperature=self.temperature)
        except Exception as e:
            logger.warning(f"Reference extraction failed, treating as no reference: {e}")
            return None

        reference = parse_reference(response_text)
        if reference is None:
            logger.debug(f"No reference identified in question: {question[:80]!r}")
        else:
            logger.info(f"Reference identified: {reference!r}")
        return reference
