# src/refrag/cli/app.py
"""Command-line interface for refrag.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Creates progress callbacks (for Rich display)
3. Calls commands module functions
4. Renders results with Rich
"""

from __future__ import annotations

import typer
from loguru import logger
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from refrag import __version__
from refrag.commands import (
    IndexResult,
    ProgressUpdate,
    QueryResult,
    index,
    query,
    status,
)
from refrag.config import load_env_file
from refrag.logger import setup_logger

app = typer.Typer(
    name="refrag",
    help="refrag - Ask questions about a PDF, with exact lookup of reference numbers.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"refrag {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log pipeline details to stderr.",
    ),
    log_file: str = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this file.",
    ),
) -> None:
    """refrag - question answering over a single PDF."""
    load_env_file()
    setup_logger(log_level="DEBUG" if verbose else "WARNING", log_file=log_file)


def _fail(error: str | None) -> None:
    logger.error(error)
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


@app.command(name="index")
def index_cmd(
    pdf_path: str = typer.Argument(..., help="PDF file to index"),
    collection: str = typer.Option(
        None,
        "--collection",
        help="Collection name (default: from settings)",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Build the collection for a PDF (skipped if it already exists)."""
    if not plain and console.is_terminal:
        result = _index_with_progress(pdf_path, collection, data_dir, config_file)
    else:
        result = index.index(
            pdf_path,
            collection=collection,
            data_dir=data_dir,
            config_path=config_file,
        )

    _render_index_result(result, plain)


def _index_with_progress(
    pdf_path: str,
    collection: str | None,
    data_dir: str | None,
    config_file: str | None,
) -> IndexResult:
    """Index with a Rich progress bar."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.fields[stage]:>10}", justify="right"),
        BarColumn(bar_width=20),
        TextColumn("{task.fields[progress_text]}", style="cyan"),
        TextColumn("{task.description}", style="dim"),
        console=console,
    ) as progress:
        task = progress.add_task("", total=None, stage="", progress_text="")

        def on_progress(update: ProgressUpdate) -> None:
            if update.total > 1:
                progress.update(
                    task,
                    stage=update.stage.value,
                    progress_text=f"{update.percentage}%",
                    description=update.message or "",
                    total=update.total,
                    completed=update.current,
                )
            else:
                progress.update(
                    task,
                    stage=update.stage.value,
                    progress_text="",
                    description=update.message or "",
                )

        return index.index(
            pdf_path,
            collection=collection,
            data_dir=data_dir,
            config_path=config_file,
            on_progress=on_progress,
        )


def _render_index_result(result: IndexResult, plain: bool) -> None:
    """Render index result to console."""
    if not result.success:
        _fail(result.error)

    if not result.created:
        message = f"Collection '{result.collection}' already exists; nothing to index."
        console.print(message if plain else f"[dim]{message}[/dim]")
        return

    message = (
        f"Indexed {result.chunks_written} chunks into '{result.collection}' "
        f"({result.batches} batches)"
    )
    console.print(message if plain else f"[green]{message}[/green]")


@app.command(name="query")
def query_cmd(
    question: str = typer.Argument(..., help="Question to ask"),
    pdf_path: str = typer.Option(
        None,
        "--pdf",
        help="PDF to index first if its collection does not exist",
    ),
    collection: str = typer.Option(
        None,
        "--collection",
        help="Collection name (default: from settings)",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    k: int = typer.Option(
        None,
        "--k",
        "-k",
        min=1,
        help="Number of chunks for similarity search",
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        "-r",
        help="Show retrieved chunks without LLM synthesis",
    ),
    show_sources: bool = typer.Option(
        False,
        "--show-sources",
        "-s",
        help="List the retrieved chunks after the answer",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Require a [Source, Page] citation on every bullet",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Ask a question about the indexed PDF."""
    result = query.query(
        question,
        pdf_path=pdf_path,
        collection=collection,
        data_dir=data_dir,
        config_path=config_file,
        k=k,
        raw=raw,
        strict=strict or None,
    )

    if not result.success:
        _fail(result.error)

    if result.answer:
        if plain:
            console.print(result.answer, markup=False, highlight=False, soft_wrap=True)
        else:
            console.print(Panel(Markdown(result.answer), title="Answer", border_style="green"))

    if raw or show_sources:
        _render_sources(result, plain)


def _render_sources(result: QueryResult, plain: bool) -> None:
    """Render retrieved chunks to console."""
    if not result.sources:
        console.print("No chunks retrieved." if plain else "[yellow]No chunks retrieved.[/yellow]")
        return

    if result.mode == "reference":
        header = f"Chunks containing '{result.reference}' ({len(result.sources)}):"
    else:
        header = f"Most similar chunks ({len(result.sources)}):"
    console.print()
    console.print(header if plain else f"[bold]{header}[/bold]")

    for i, source in enumerate(result.sources, 1):
        score = f", score: {source.score:.3f}" if source.score is not None else ""
        location = f"{source.source}, page {source.page_number}, chunk {source.chunk_id}{score}"
        preview = source.content[:100].replace("\n", " ")
        if len(source.content) > 100:
            preview += "..."
        if plain:
            console.print(f"  [{i}] {location}")
            console.print(f"      {preview}")
        else:
            console.print(f"  \\[{i}] [cyan]{location}[/cyan]")
            console.print(f"      [dim]{preview}[/dim]")


@app.command(name="status")
def status_cmd(
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Show collections in the vector store."""
    result = status.status(data_dir=data_dir, config_path=config_file)

    if not result.success:
        _fail(result.error)

    if not result.collections:
        if plain:
            console.print("No collections found.")
        else:
            console.print("[dim]No collections found. Run 'refrag index' first.[/dim]")
        raise typer.Exit(0)

    if plain:
        console.print(f"Vector store: {result.location}")
        for info in result.collections:
            console.print(f"  {info.name}: {info.vectors} vectors")
    else:
        table = Table(title=f"Collections in {result.location}")
        table.add_column("Collection", style="cyan")
        table.add_column("Vectors", style="green", justify="right")
        for info in result.collections:
            table.add_row(info.name, str(info.vectors))
        console.print(table)
