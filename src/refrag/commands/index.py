# src/refrag/commands/index.py
"""Index command - build the vector collection for a PDF.

This module provides the core indexing logic the CLI uses.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from refrag.commands.base import (
    CommandStage,
    IndexResult,
    ProgressCallback,
    ProgressUpdate,
    format_error,
)
from refrag.config import create_refrag, get_refrag_config
from refrag.exceptions import RefragError


def index(
    pdf_path: str | Path,
    collection: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_progress: ProgressCallback | None = None,
) -> IndexResult:
    """Index a PDF into its collection unless the collection already exists.

    Args:
        pdf_path: PDF file to index
        collection: Override the collection name
        data_dir: Override data directory (uses config if not provided)
        config_path: Override config file path
        on_progress: Callback for progress updates during indexing

    Returns:
        IndexResult describing what was written
    """

    def progress(stage: CommandStage, current: int, total: int, message: str | None = None) -> None:
        if on_progress:
            on_progress(ProgressUpdate(stage=stage, current=current, total=total, message=message))

    path = Path(pdf_path)
    if not path.exists():
        return IndexResult(success=False, error=f"PDF not found: {path}")

    try:
        config = get_refrag_config(data_dir, config_path, collection_name=collection)
        rag = create_refrag(config)
    except RefragError as e:
        return IndexResult(success=False, error=format_error(e))

    try:
        progress(CommandStage.LOADING, 0, 0, f"Checking collection {rag.collection_name!r}...")
        report = rag.build_index(
            str(path),
            on_progress=lambda current, total, message: progress(
                CommandStage.INDEXING, current, total, message
            ),
        )
    except RefragError as e:
        logger.error(f"Indexing failed: {e}")
        return IndexResult(success=False, collection=rag.collection_name, error=format_error(e))
    finally:
        rag.close()

    progress(CommandStage.COMPLETE, 1, 1)
    return IndexResult(
        success=True,
        collection=report.collection,
        created=report.created,
        chunks_written=report.chunks_written,
        batches=report.batches,
    )
