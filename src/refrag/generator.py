# src/refrag/generator.py
"""Answer generation from retrieved chunks."""

from loguru import logger

from refrag.exceptions import GenerationError
from refrag.models import Answer, Chunk
from refrag.providers.base import LLMClient

NOT_FOUND_MESSAGE = "Information not found in the document."
EMPTY_CONTEXT = "(no context retrieved)"

ANSWER_PROMPT = """You are a helpful document assistant. Use ONLY the provided context to answer the question.

Instructions:
- Provide detailed answers from the context
- Look for section numbers (6.7, 8.21, etc.) and their full descriptions
- If information spans multiple chunks, synthesize them
- Cite the page numbers you used
- If the answer is not in the context, say "{not_found}"
- If asked about the guidelines of a reference number, the guidelines are usually the paragraph right after (or before) the reference number; answer with that paragraph

Context:
{context}

Question:
{question}

Answer:"""

STRICT_ANSWER_PROMPT = """You are a careful document assistant. Use ONLY the provided context to answer the question.

Rules:
- Answer as bullet points
- EVERY bullet point must end with a citation in exactly this format: [Source: <file>, Page: <page>]
- Look for section numbers (6.7, 8.21, etc.) and their full descriptions
- If information spans multiple chunks, synthesize them and cite every page used
- Do not use any knowledge outside the context
- If the answer is not in the context, reply exactly: "{not_found}"

Context:
{context}

Question:
{question}

Answer:"""


def format_chunk(index: int, chunk: Chunk) -> str:
    """Render one chunk with its citation header."""
    header = (
        f"CHUNK {index} (Source: {chunk.source}, Page: {chunk.page_number}, "
        f"Chunk ID: {chunk.chunk_id})"
    )
    return f"{header}\n{chunk.text}"


def build_context(chunks: list[Chunk]) -> str:
    """Join chunks into one context block, in the order given."""
    if not chunks:
        return EMPTY_CONTEXT
    return "\n\n".join(format_chunk(i, chunk) for i, chunk in enumerate(chunks, 1))


class AnswerGenerator:
    """Produces the final answer with a single LLM call.

    Example:
        generator = AnswerGenerator(llm_client=LiteLLMClient(), strict_citations=True)
        answer = generator.generate("What does 6.7 require?", retrieval.chunks)
    """

    def __init__(
        self,
        llm_client: LLMClient,
        strict_citations: bool = False,
        temperature: float | None = None,
        prompt_template: str | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            llm_client: Any LLMClient implementation
            strict_citations: Require a [Source: ..., Page: ...] citation on every bullet
            temperature: LLM temperature. None to use model default.
            prompt_template: Custom template with {context}, {question} and
                {not_found} placeholders; overrides strict_citations
        """
        self._client = llm_client
        self.strict_citations = strict_citations
        self.temperature = temperature
        if prompt_template is not None:
            self.prompt_template = prompt_template
        elif strict_citations:
            self.prompt_template = STRICT_ANSWER_PROMPT
        else:
            self.prompt_template = ANSWER_PROMPT

    def build_prompt(self, question: str, chunks: list[Chunk]) -> str:
        """Fill the prompt template with the context block and the question."""
        return self.prompt_template.format(
            context=build_context(chunks),
            question=question,
            not_found=NOT_FOUND_MESSAGE,
        )

    def generate(self, question: str, chunks: list[Chunk]) -> Answer:
        """Answer the question from the given chunks.

        An empty chunk list still goes to the model, which is instructed to
        say the information was not found.

        Raises:
            GenerationError: If the LLM call fails or returns no text
        """
        prompt = self.build_prompt(question, chunks)
        logger.debug(
            f"[Generator] {len(chunks)} chunks, prompt_chars={len(prompt)}, "
            f"strict={self.strict_citations}"
        )

        try:
            text = self._client.complete(prompt, temperature=self.temperature)
        except Exception as e:
            raise GenerationError(f"LLM call failed: {e}") from e

        if not text.strip():
            raise GenerationError("LLM returned an empty answer")

        return Answer(text=text.strip())
