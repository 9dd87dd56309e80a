# src/refrag/commands/query.py
"""Query command - answer a question about the indexed PDF.

This module provides the core query logic the CLI uses.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from refrag.commands.base import (
    CommandStage,
    ProgressCallback,
    ProgressUpdate,
    QueryResult,
    SourceChunk,
    format_error,
)
from refrag.config import create_refrag, get_refrag_config
from refrag.exceptions import RefragError

if TYPE_CHECKING:
    from refrag.models import QueryResponse
    from refrag.refrag import RefRAG


def query(
    question: str,
    pdf_path: str | Path | None = None,
    collection: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    k: int | None = None,
    raw: bool = False,
    strict: bool | None = None,
    on_progress: ProgressCallback | None = None,
) -> QueryResult:
    """Answer a question, building the index first when a PDF is known.

    Args:
        question: The question to ask
        pdf_path: PDF to index if its collection does not exist yet
            (falls back to pdf_path from config)
        collection: Override the collection name
        data_dir: Override data directory
        config_path: Override config file path
        k: Number of chunks in similarity mode (None for default)
        raw: If True, return retrieved chunks without LLM synthesis
        strict: Require a citation on every bullet (None for settings default)
        on_progress: Callback for progress updates

    Returns:
        QueryResult with answer and sources
    """
    if not question.strip():
        return QueryResult(success=False, query=question, error="Question must not be empty")

    try:
        config = get_refrag_config(
            data_dir,
            config_path,
            pdf_path=str(pdf_path) if pdf_path else None,
            collection_name=collection,
            strict_citations=strict,
        )
        rag = create_refrag(config)
    except RefragError as e:
        return QueryResult(success=False, query=question, error=format_error(e))

    try:
        if config.pdf_path:
            report = rag.build_index(config.pdf_path)
            if report.created:
                logger.info(f"Indexed {report.chunks_written} chunks into {report.collection!r}")
        return query_with_refrag(rag, question, k=k, raw=raw, on_progress=on_progress)
    except RefragError as e:
        logger.error(f"Query failed: {e}")
        return QueryResult(success=False, query=question, error=format_error(e))
    finally:
        rag.close()


def query_with_refrag(
    rag: RefRAG,
    question: str,
    k: int | None = None,
    raw: bool = False,
    on_progress: ProgressCallback | None = None,
) -> QueryResult:
    """Query using an existing RefRAG instance.

    Errors from retrieval or generation are returned as a failed result.
    """
    if on_progress:
        on_progress(ProgressUpdate(stage=CommandStage.RETRIEVING, current=0, total=0))

    try:
        response = rag.ask(question, k=k, synthesize=not raw)
    except RefragError as e:
        return QueryResult(success=False, query=question, error=format_error(e))

    if on_progress:
        on_progress(ProgressUpdate(stage=CommandStage.COMPLETE, current=1, total=1))

    return to_query_result(response)


def to_query_result(response: QueryResponse) -> QueryResult:
    """Convert a pipeline QueryResponse to the command result format."""
    retrieval = response.retrieval
    scores = retrieval.scores or [None] * len(retrieval.chunks)

    sources = [
        SourceChunk(
            source=chunk.source,
            page_number=chunk.page_number,
            chunk_id=chunk.chunk_id,
            content=chunk.text,
            score=score,
        )
        for chunk, score in zip(retrieval.chunks, scores, strict=True)
    ]

    return QueryResult(
        success=True,
        query=response.query,
        answer=response.answer.text if response.answer else None,
        mode=retrieval.mode,
        reference=retrieval.reference,
        sources=sources,
    )
