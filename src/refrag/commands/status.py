# src/refrag/commands/status.py
"""Status command - show vector store collections.

This module provides the status logic the CLI uses.
"""

from __future__ import annotations

import os
from pathlib import Path

from refrag.commands.base import CollectionInfo, StatusResult, format_error
from refrag.config import create_refrag, get_refrag_config
from refrag.exceptions import RefragError


def status(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> StatusResult:
    """List collections in the vector store with their vector counts.

    Does not need LLM or embedding API keys.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        StatusResult with one entry per collection
    """
    try:
        config = get_refrag_config(data_dir, config_path, require_api_keys=False)
    except RefragError as e:
        return StatusResult(success=False, error=format_error(e))

    location = config.vector_store_url or config.data_dir

    # Nothing indexed locally yet
    if not config.vector_store_url and not os.path.exists(config.data_dir):
        return StatusResult(success=True, location=location)

    try:
        rag = create_refrag(config)
    except Exception as e:
        return StatusResult(success=False, location=location, error=f"Failed to open store: {e}")

    try:
        collections = [
            CollectionInfo(name=name, vectors=rag.store.count(name))
            for name in sorted(rag.store.list_collections())
        ]
    except Exception as e:
        return StatusResult(
            success=False, location=location, error=f"Failed to access vector store: {e}"
        )
    finally:
        rag.close()

    return StatusResult(success=True, location=location, collections=collections)
