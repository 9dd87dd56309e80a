"""Shared pytest fixtures."""

import contextlib
import math
import os
import re
import tempfile
import zlib
from dataclasses import dataclass
from typing import Any

import pytest

from refrag.embedder import Embedder
from refrag.models import Chunk, ScoredChunk
from refrag.providers.base import LLMClient
from refrag.stores import VectorStore

EMBEDDING_DIM = 64


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir

        # Cleanup ChromaDB's shared system cache to release file handles
        # See: https://github.com/chroma-core/chroma/issues/5868
        try:
            from chromadb.api.shared_system_client import SharedSystemClient

            if hasattr(SharedSystemClient, "_identifier_to_system"):
                identifiers_to_remove = [
                    identifier
                    for identifier in list(SharedSystemClient._identifier_to_system.keys())
                    if tmpdir in str(identifier)
                ]
                for identifier in identifiers_to_remove:
                    if identifier in SharedSystemClient._identifier_to_system:
                        system = SharedSystemClient._identifier_to_system.pop(identifier)
                        with contextlib.suppress(Exception):
                            system.stop()
        except ImportError:
            pass


class MockEmbedder(Embedder):
    """Bag-of-words embedder: texts sharing words get similar vectors.

    Set ``error`` to make every call raise it.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.error: Exception | None = None

    def embed_text(self, text: str) -> list[float]:
        return self.embed_texts([text])[0]

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if self.error is not None:
            raise self.error
        self.calls.append(list(texts))
        return [self._vector(text) for text in texts]

    @staticmethod
    def _vector(text: str) -> list[float]:
        vector = [0.0] * EMBEDDING_DIM
        vector[0] = 0.1  # Never a zero vector
        for word in re.findall(r"[a-z]{3,}", text.lower()):
            vector[1 + zlib.crc32(word.encode()) % (EMBEDDING_DIM - 1)] += 1.0
        return vector


class MockLLMClient(LLMClient):
    """Scripted LLM that records every prompt.

    Reference-extraction prompts get ``reference_reply``; all other prompts
    get ``answer_reply``. A reply may be a string, a callable taking the
    prompt, or an exception to raise.
    """

    def __init__(self, reference_reply: Any = "NONE", answer_reply: Any = "Mock answer.") -> None:
        self.model = "mock/llm"
        self.reference_reply = reference_reply
        self.answer_reply = answer_reply
        self.prompts: list[str] = []
        self.temperatures: list[float | None] = []

    def generate(self, prompt: str, temperature: float | None = None) -> Any:
        self.prompts.append(prompt)
        self.temperatures.append(temperature)
        is_reference = prompt.startswith("You classify questions")
        reply = self.reference_reply if is_reference else self.answer_reply
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            reply = reply(prompt)
        return {"text": reply}

    def extract_text(self, response: Any) -> str:
        return response["text"]

    @property
    def answer_prompts(self) -> list[str]:
        return [p for p in self.prompts if not p.startswith("You classify questions")]


def _cosine(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b, strict=True))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


class InMemoryVectorStore(VectorStore):
    """Dict-backed store; ``fail_on_write`` makes the n-th write call raise (1-based)."""

    def __init__(self, embedder: Embedder, fail_on_write: int | None = None) -> None:
        self.embedder = embedder
        self.collections: dict[str, list[tuple[Chunk, list[float]]]] = {}
        self.writes: list[tuple[str, str, list[int]]] = []
        self.fail_on_write = fail_on_write
        self.similarity_calls: list[tuple[str, str, int]] = []
        self.closed = False

    def _check_failure(self) -> None:
        if self.fail_on_write is not None and len(self.writes) + 1 == self.fail_on_write:
            raise ConnectionError("vector store unavailable")

    def list_collections(self) -> set[str]:
        return set(self.collections)

    def create_with_first_batch(self, name: str, chunks: list[Chunk]) -> None:
        self._check_failure()
        if name in self.collections:
            raise ValueError(f"Collection {name} already exists")
        self.collections[name] = []
        self._add(name, chunks)
        self.writes.append(("create", name, [c.chunk_id for c in chunks]))

    def append_batch(self, name: str, chunks: list[Chunk]) -> None:
        self._check_failure()
        self._add(name, chunks)
        self.writes.append(("append", name, [c.chunk_id for c in chunks]))

    def _add(self, name: str, chunks: list[Chunk]) -> None:
        embeddings = self.embedder.embed_chunks(chunks)
        self.collections[name].extend(zip(chunks, embeddings, strict=True))

    def similarity_search(self, name: str, query: str, k: int) -> list[ScoredChunk]:
        self.similarity_calls.append((name, query, k))
        query_vector = self.embedder.embed_text(query)
        scored = [
            ScoredChunk(chunk=chunk, score=_cosine(query_vector, vector))
            for chunk, vector in self.collections[name]
        ]
        scored.sort(key=lambda item: item.score, reverse=True)
        return scored[:k]

    def find_containing(self, name: str, text: str) -> list[Chunk]:
        matches = [chunk for chunk, _ in self.collections[name] if text in chunk.text]
        return sorted(matches, key=lambda chunk: chunk.chunk_id)

    def count(self, name: str) -> int:
        return len(self.collections[name])

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def mock_embedder():
    """Create a deterministic bag-of-words embedder."""
    return MockEmbedder()


@pytest.fixture
def mock_llm():
    """Create a scripted LLM client (no reference, fixed answer)."""
    return MockLLMClient()


@pytest.fixture
def make_llm():
    """Factory for scripted LLM clients."""
    return MockLLMClient


@pytest.fixture
def memory_store(mock_embedder):
    """Create an in-memory vector store."""
    return InMemoryVectorStore(mock_embedder)


@pytest.fixture
def make_store(mock_embedder):
    """Factory for in-memory vector stores (e.g. with injected failures)."""

    def factory(fail_on_write: int | None = None) -> InMemoryVectorStore:
        return InMemoryVectorStore(mock_embedder, fail_on_write=fail_on_write)

    return factory


@dataclass(frozen=True)
class MockProvider:
    """Provider that hands out pre-built mock components."""

    embedder: Any
    llm_client: Any

    def build_embedder(self, settings: Any) -> Any:
        return self.embedder

    def build_llm_client(self, settings: Any) -> Any:
        return self.llm_client


@pytest.fixture
def make_provider(mock_embedder):
    """Factory for providers wrapping the mock embedder and a given LLM client."""

    def factory(llm_client: LLMClient) -> MockProvider:
        return MockProvider(embedder=mock_embedder, llm_client=llm_client)

    return factory


def _escape_pdf_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def write_pdf(path: str, pages: list[str]) -> str:
    """Write a minimal PDF with one Helvetica text page per entry.

    Lines within a page are separated by newlines; an empty string gives a
    page with no text.
    """
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"",  # Pages, filled in below
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    kids = []
    for text in pages:
        operators = ["BT", "/F1 12 Tf", "72 720 Td"]
        for i, line in enumerate(text.split("\n") if text else []):
            if i:
                operators.append("0 -16 Td")
            operators.append(f"({_escape_pdf_text(line)}) Tj")
        operators.append("ET")
        stream = "\n".join(operators).encode("latin-1")

        page_number = len(objects) + 1
        kids.append(f"{page_number} 0 R")
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {page_number + 1} 0 R >>".encode()
        )
        objects.append(
            b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream"
        )
    objects[1] = f"<< /Type /Pages /Kids [{' '.join(kids)}] /Count {len(kids)} >>".encode()

    output = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(output))
        output += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(output)
    output += f"xref\n0 {len(objects) + 1}\n".encode()
    output += b"0000000000 65535 f \n"
    for offset in offsets:
        output += f"{offset:010d} 00000 n \n".encode()
    output += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()

    with open(path, "wb") as f:
        f.write(bytes(output))
    return path


@pytest.fixture
def make_pdf(temp_dir):
    """Factory writing a text PDF into the temp dir and returning its path."""

    def factory(pages: list[str], name: str = "document.pdf") -> str:
        return write_pdf(os.path.join(temp_dir, name), pages)

    return factory


PRODUCT_PAGES = [
    "Product Overview\nThis document describes the platform and its components.",
    "6.7 Supplier Security\nSuppliers must pass an annual security review before onboarding.",
    "Encryption\nEncryption keys are rotated every 90 days by the key management service.",
]


@pytest.fixture
def product_pdf(make_pdf):
    """Three-page PDF with "6.7 Supplier Security" on page 2 only."""
    return make_pdf(PRODUCT_PAGES, name="product.pdf")


@pytest.fixture
def cli_env(temp_dir, monkeypatch):
    """Empty working directory with API keys set and no other REFRAG_* variables."""
    for key in list(os.environ):
        if key.startswith("REFRAG_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("REFRAG_LLM_API_KEY", "test-llm-key")
    monkeypatch.setenv("REFRAG_EMBEDDING_API_KEY", "test-embedding-key")
    monkeypatch.chdir(temp_dir)
    return temp_dir


@pytest.fixture
def fake_refrag(monkeypatch, make_provider):
    """Make the commands layer build RefRAG with mock AI components.

    Storage and settings still come from the real configuration. Assign
    ``fake_refrag.llm`` to script the LLM.
    """
    from refrag import LocalStorage, RefRAG

    class FakeFactory:
        def __init__(self) -> None:
            self.llm = MockLLMClient()
            self.configs: list[Any] = []

        def __call__(self, config: Any) -> RefRAG:
            self.configs.append(config)
            return RefRAG(
                provider=make_provider(self.llm),
                storage=LocalStorage(config.data_dir),
                settings=config.settings,
            )

    factory = FakeFactory()
    for module in ("refrag.commands.index", "refrag.commands.query", "refrag.commands.status"):
        monkeypatch.setattr(f"{module}.create_refrag", factory)
    return factory
