# src/faqrag/cli/app.py
"""Command-line interface for faqrag.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Creates progress/confirm callbacks (for Rich display)
3. Calls commands module functions
4. Renders results with Rich
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from faqrag import __version__
from faqrag.commands import (
    ProgressUpdate,
    clear,
    config_cmd,
    ingest,
    log,
    query,
    settings_cmd,
    status,
)
from faqrag.commands.base import ConfirmRequest, IngestResult
from faqrag.config import load_env_file, resolve_data_dir

app = typer.Typer(
    name="faqrag",
    help="faqrag - answer FAQ questions from your documentation.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"faqrag {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through Rich; DEBUG with --verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # LiteLLM and httpx are noisy at DEBUG
    for name in ("LiteLLM", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


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
        help="Show debug logging.",
    ),
) -> None:
    """faqrag - answer FAQ questions from your documentation."""
    load_env_file()
    configure_logging(verbose)


@app.command(name="ingest")
def ingest_cmd(
    base_url: str = typer.Argument(None, help="Site to crawl"),
    pdf: list[str] = typer.Option(
        None,
        "--pdf",
        "-p",
        help="PDF URL to ingest (repeatable)",
    ),
    depth: int = typer.Option(
        None,
        "--depth",
        help="Link depth to crawl, 0-3 (default: 2)",
    ),
    max_pages: int = typer.Option(
        None,
        "--max-pages",
        help="Maximum pages to crawl, 1-25 (default: 10)",
    ),
    chunk_size: int = typer.Option(
        None,
        "--chunk-size",
        help="Words per chunk, 100-2000 (default: from settings)",
    ),
    chunk_overlap: int = typer.Option(
        None,
        "--chunk-overlap",
        help="Words shared by consecutive chunks, 0-500 (default: from settings)",
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
    """Crawl a site and/or fetch PDFs into the knowledge base."""
    kwargs = {
        "base_url": base_url,
        "pdf_urls": list(pdf or []),
        "crawl_depth": depth,
        "max_pages": max_pages,
        "chunk_size": chunk_size,
        "chunk_overlap": chunk_overlap,
        "data_dir": data_dir,
        "config_path": config_file,
    }

    if plain or not console.is_terminal:
        result = ingest.ingest(**kwargs)
    else:
        with Progress(
            SpinnerColumn(),
            TextColumn("[bold]{task.fields[stage]:>10}", justify="right"),
            BarColumn(bar_width=20),
            TextColumn("{task.fields[progress_text]}", style="cyan"),
            TextColumn("{task.description}", style="dim"),
            console=console,
            transient=True,
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
                        total=None,
                    )

            result = ingest.ingest(**kwargs, on_progress=on_progress)

    _render_ingest_result(result, plain=plain)


def _render_ingest_result(result: IngestResult, plain: bool) -> None:
    """Render ingest result to console."""
    if not result.success:
        if plain:
            console.print(f"Error: {result.error}", markup=False)
        else:
            console.print(f"[red]Error: {escape(str(result.error))}[/red]")
        raise typer.Exit(1)

    if plain:
        console.print(result.summary)
    else:
        console.print(f"[green]{result.summary}[/green]")


@app.command(name="query")
def query_cmd(
    question: str = typer.Argument(..., help="Question to ask"),
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
    """Ask the knowledge base a question."""
    result = query.query(
        question=question,
        data_dir=data_dir,
        config_path=config_file,
    )

    if not result.success:
        console.print(f"[red]Error: {escape(str(result.error))}[/red]")
        raise typer.Exit(1)

    if plain:
        console.print(result.answer or "", markup=False)
        if result.sources:
            console.print()
            console.print("Sources:")
            for i, source in enumerate(result.sources, 1):
                console.print(
                    f"  [S{i}] {source.title} - {source.url} (score: {source.score:.3f})",
                    markup=False,
                )
        return

    console.print(
        Panel(
            Markdown(result.answer or ""),
            title="Answer",
            border_style="green",
        )
    )

    if result.sources:
        console.print()
        console.print("[bold]Sources:[/bold]")
        for i, source in enumerate(result.sources, 1):
            console.print(
                f"  \\[S{i}] [cyan]{source.title}[/cyan] [dim](score: {source.score:.3f})[/dim]"
            )
            console.print(f"      [link={source.url}]{source.url}[/link]")
            console.print(f"      [dim]{source.snippet}[/dim]", markup=True, highlight=False)


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
    detailed: bool = typer.Option(
        False,
        "--detailed",
        help="Show chunk counts per source",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Show knowledge base statistics."""
    effective_data_dir = resolve_data_dir(data_dir, config_file)

    result = status.status(
        data_dir=data_dir,
        config_path=config_file,
        detailed=detailed,
    )

    if not result.success:
        console.print(f"[red]Error: {escape(str(result.error))}[/red]")
        raise typer.Exit(1)

    if result.total_chunks == 0:
        if plain:
            console.print("Knowledge base is empty.")
        else:
            console.print("[dim]Knowledge base is empty. Run 'faqrag ingest' first.[/dim]")
        raise typer.Exit(0)

    if plain:
        console.print("Knowledge Base Status:")
        console.print(f"  Data directory: {effective_data_dir}")
        console.print(f"  Sources: {result.total_sources}")
        console.print(f"  Chunks: {result.total_chunks}")
        console.print(f"  Tokens (estimated): {result.total_tokens}")
        console.print(f"  Last ingested: {result.last_ingested_at or 'never'}")

        if detailed and result.sources:
            console.print()
            console.print("Chunks by Source:")
            for source in result.sources:
                console.print(f"  {source.url}: {source.chunk_count} chunks")
    else:
        table = Table(title="Knowledge Base Status")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green", justify="right")

        table.add_row("Data directory", effective_data_dir)
        table.add_row("Sources", str(result.total_sources))
        table.add_row("Chunks", str(result.total_chunks))
        table.add_row("Tokens (estimated)", str(result.total_tokens))
        table.add_row("Last ingested", result.last_ingested_at or "never")

        console.print(table)

        if detailed and result.sources:
            console.print()
            detail_table = Table(title="Chunks by Source")
            detail_table.add_column("Source", style="cyan")
            detail_table.add_column("Title")
            detail_table.add_column("Chunks", justify="right", style="green")

            for source in result.sources:
                detail_table.add_row(source.url, source.title, str(source.chunk_count))

            console.print(detail_table)


@app.command(name="clear")
def clear_cmd(
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
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompt",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Delete every chunk and the ingestion history."""

    def cli_confirm(request: ConfirmRequest) -> bool:
        """CLI confirmation callback using typer.confirm."""
        if request.details:
            if plain:
                console.print(request.details)
            else:
                console.print(f"[yellow]{request.details}[/yellow]")
        return typer.confirm(request.message)

    result = clear.clear(
        data_dir=data_dir,
        config_path=config_file,
        on_confirm=None if force else cli_confirm,
    )

    if not result.success:
        # Cancellation is not an error
        if result.error == "Cancelled.":
            console.print("Cancelled.")
            raise typer.Exit(0)
        if plain:
            console.print(f"Error: {result.error}", markup=False)
        else:
            console.print(f"[red]Error: {escape(str(result.error))}[/red]")
        raise typer.Exit(1)

    if plain:
        console.print(f"Deleted {result.chunks_deleted} chunks")
    else:
        console.print(f"[green]Deleted {result.chunks_deleted} chunks[/green]")


@app.command(name="settings")
def settings_handler(
    model: str = typer.Option(
        None,
        "--model",
        help="Model tried first when answering",
    ),
    max_tokens: int = typer.Option(
        None,
        "--max-tokens",
        help="Completion token limit",
    ),
    brand_color: str = typer.Option(
        None,
        "--brand-color",
        help="Widget accent color, e.g. #2563EB",
    ),
    allow_origin: list[str] = typer.Option(
        None,
        "--allow-origin",
        help="Allowed widget origin (repeatable, replaces the list)",
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
) -> None:
    """Show or update the admin-editable settings."""
    updates: dict[str, object] = {}
    if model is not None:
        updates["model"] = model
    if max_tokens is not None:
        updates["max_tokens"] = max_tokens
    if brand_color is not None:
        updates["brand_color"] = brand_color
    if allow_origin:
        updates["allow_origins"] = list(allow_origin)

    result = settings_cmd.settings(
        updates=updates or None,
        data_dir=data_dir,
        config_path=config_file,
    )

    if not result.success:
        console.print(f"[red]Error: {escape(str(result.error))}[/red]")
        raise typer.Exit(1)

    table = Table(title="App Settings" + (" (updated)" if updates else ""))
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("model", result.model)
    table.add_row("max_tokens", str(result.max_tokens))
    table.add_row("brand_color", result.brand_color)
    table.add_row("allow_origins", "\n".join(result.allow_origins) or "(none)")

    console.print(table)


@app.command(name="log")
def log_cmd(
    limit: int = typer.Option(
        None,
        "--limit",
        "-n",
        help="Show at most this many entries",
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
    """Show the ingestion history, newest first."""
    result = log.log(data_dir=data_dir, config_path=config_file, limit=limit)

    if not result.success:
        console.print(f"[red]Error: {escape(str(result.error))}[/red]")
        raise typer.Exit(1)

    if not result.entries:
        if plain:
            console.print("No ingestion runs recorded.")
        else:
            console.print("[dim]No ingestion runs recorded.[/dim]")
        raise typer.Exit(0)

    if plain:
        for entry in result.entries:
            console.print(f"{entry.created_at}  {entry.summary}", markup=False)
        return

    table = Table(title=f"Ingestion History ({len(result.entries)})")
    table.add_column("When", style="dim")
    table.add_column("Summary", style="green")
    table.add_column("Sources", style="cyan")

    for entry in result.entries:
        sources = [entry.base_url] if entry.base_url else []
        sources.extend(entry.pdf_urls)
        table.add_row(entry.created_at, entry.summary, "\n".join(sources))

    console.print(table)


@app.command(name="config")
def config_cmd_handler(
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
) -> None:
    """Show the effective configuration."""
    result = config_cmd.config(data_dir=data_dir, config_path=config_file)

    if not result.success:
        console.print(f"[red]Error: {escape(str(result.error))}[/red]")
        raise typer.Exit(1)

    table = Table(title="faqrag Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source", style="dim")

    table.add_row("answer_mode", result.answer_mode, "")
    table.add_row("llm_model", result.llm_model or "(none: no API key)", "")
    table.add_row("embedding_mode", result.embedding_mode, "")
    table.add_row("embedding_model", result.embedding_model or "(none: no API key)", "")
    table.add_row("data_dir", result.data_dir, "")

    table.add_row("", "", "")

    for setting in result.settings:
        table.add_row(setting.name, setting.value, setting.source)

    console.print(table)

    if result.config_path:
        console.print(f"\n[dim]Config file: {result.config_path}[/dim]")
    else:
        console.print("\n[dim]No config file found. Using env vars / defaults.[/dim]")

    console.print("\n[dim]Precedence: env var > yaml settings > default[/dim]")
