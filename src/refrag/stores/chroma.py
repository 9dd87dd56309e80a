# src/refrag/stores/chroma.py
"""ChromaDB vector store implementation."""

import contextlib
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import chromadb
from chromadb.api.shared_system_client import SharedSystemClient
from loguru import logger

from refrag.embedder import Embedder
from refrag.models import Chunk, ScoredChunk
from refrag.stores.base import VectorStore


def _chunk_from_record(document: str | None, meta: Any) -> Chunk:
    return Chunk(
        text=document or "",
        page_number=int(meta["page_number"]),
        chunk_id=int(meta["chunk_id"]),
        source=str(meta["source"]),
    )


class ChromaVectorStore(VectorStore):
    """ChromaDB-backed vector store.

    Uses a local persistent directory by default, or a remote Chroma server
    when ``url`` is given.

    Example:
        store = ChromaVectorStore(embedder, persist_dir="./refrag_data/chroma")

        # Remote server with token auth
        store = ChromaVectorStore(embedder, url="https://chroma.example.com", api_key="...")
    """

    def __init__(
        self,
        embedder: Embedder,
        persist_dir: str | None = None,
        url: str | None = None,
        api_key: str | None = None,
        client: Any = None,
    ) -> None:
        """Initialize the ChromaDB store.

        Args:
            embedder: Embedder used for chunk text on write and query text on search
            persist_dir: Directory for a local persistent database
            url: Base URL of a Chroma server; takes precedence over persist_dir
            api_key: Token sent to the Chroma server
            client: Pre-built chromadb client (mainly for tests)

        Raises:
            ValueError: If none of client, url, persist_dir is given
        """
        self._embedder = embedder
        if client is not None:
            self._client = client
        elif url:
            self._client = self._http_client(url, api_key)
        elif persist_dir:
            Path(persist_dir).mkdir(parents=True, exist_ok=True)
            self._client = chromadb.PersistentClient(path=persist_dir)
        else:
            raise ValueError("ChromaVectorStore needs a client, url, or persist_dir")

    @staticmethod
    def _http_client(url: str, api_key: str | None) -> Any:
        parsed = urlparse(url)
        ssl = parsed.scheme == "https"
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else None
        return chromadb.HttpClient(
            host=parsed.hostname or "localhost",
            port=parsed.port or (443 if ssl else 8000),
            ssl=ssl,
            headers=headers,
        )

    def close(self) -> None:
        """Close the store and release resources.

        ChromaDB doesn't have an official close method, so we call the internal
        _system.stop() to release file handles, and drop the stopped system from
        chroma's per-path cache so a later client on the same path starts fresh.

        See: https://github.com/chroma-core/chroma/issues/5868
        """
        system = getattr(self._client, "_system", None)
        if system is not None:
            with contextlib.suppress(Exception):
                system.stop()
            cache = getattr(SharedSystemClient, "_identifier_to_system", {})
            for identifier, cached in list(cache.items()):
                if cached is system:
                    del cache[identifier]
        self._client = None

    def list_collections(self) -> set[str]:
        """Names of all collections in the store."""
        # Chroma 0.6 returns names, other versions return Collection objects
        return {
            item if isinstance(item, str) else item.name
            for item in self._client.list_collections()
        }

    def create_with_first_batch(self, name: str, chunks: list[Chunk]) -> None:
        """Create the collection (cosine space) and write the first batch.

        The batch is embedded before the collection exists, so a failed
        embedding call leaves no empty collection behind.
        """
        embeddings = self._embedder.embed_chunks(chunks)
        collection = self._client.create_collection(
            name=name,
            metadata={"hnsw:space": "cosine"},
        )
        logger.debug(f"[Chroma] Created collection {name!r}")
        self._add(collection, chunks, embeddings)

    def append_batch(self, name: str, chunks: list[Chunk]) -> None:
        """Embed and append chunks to an existing collection."""
        collection = self._client.get_collection(name=name)
        embeddings = self._embedder.embed_chunks(chunks)
        self._add(collection, chunks, embeddings)

    @staticmethod
    def _add(collection: Any, chunks: list[Chunk], embeddings: list[list[float]]) -> None:
        if not chunks:
            return

        collection.add(
            ids=[f"chunk-{chunk.chunk_id}" for chunk in chunks],
            embeddings=embeddings,
            documents=[chunk.text for chunk in chunks],
            metadatas=[chunk.metadata() for chunk in chunks],
        )

    def similarity_search(self, name: str, query: str, k: int) -> list[ScoredChunk]:
        """Return up to k chunks closest to the query, highest score first."""
        collection = self._client.get_collection(name=name)
        total = collection.count()
        if total == 0 or k < 1:
            return []

        query_embedding = self._embedder.embed_text(query)
        results = collection.query(
            query_embeddings=[query_embedding],
            n_results=min(k, total),
            include=["documents", "metadatas", "distances"],
        )

        documents = results["documents"][0]  # type: ignore[index]
        metadatas = results["metadatas"][0]  # type: ignore[index]
        distances = results["distances"][0]  # type: ignore[index]

        scored = [
            # Cosine distance; similarity = 1 - distance
            ScoredChunk(chunk=_chunk_from_record(doc, meta), score=1.0 - dist)
            for doc, meta, dist in zip(documents, metadatas, distances, strict=True)
        ]
        scored.sort(key=lambda item: item.score, reverse=True)
        return scored

    def find_containing(self, name: str, text: str) -> list[Chunk]:
        """Return every chunk whose text contains ``text`` literally, by chunk_id."""
        if not text:
            return []

        collection = self._client.get_collection(name=name)
        results = collection.get(
            where_document={"$contains": text},
            include=["documents", "metadatas"],
        )
        documents = results["documents"] or []
        metadatas = results["metadatas"] or []

        chunks = [
            _chunk_from_record(doc, meta)
            for doc, meta in zip(documents, metadatas, strict=True)
            if doc and text in doc
        ]
        chunks.sort(key=lambda chunk: chunk.chunk_id)
        return chunks

    def count(self, name: str) -> int:
        """Number of vectors in the collection."""
        return self._client.get_collection(name=name).count()
