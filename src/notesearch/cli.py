"""Command line interface for notesearch."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

import typer
import uvicorn
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from websockets.exceptions import WebSocketException
from websockets.sync.client import connect

from notesearch.config import DEFAULT_HOST, DEFAULT_PORT, AppConfig
from notesearch.index.search import Searcher
from notesearch.utils.files import CorpusError
from notesearch.web.app import create_app


console = Console()
app = typer.Typer(help="notesearch - TF-IDF search over a directory of plain-text notes")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _resolve_root(root: Optional[Path]) -> Path:
    resolved = AppConfig(root=root).resolve_root(Path.cwd())
    if not resolved.is_dir():
        raise typer.BadParameter(f"Notes directory not found: {resolved}")
    return resolved


def _print_results(pairs: Iterable[Tuple[str, float]]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="yellow")
    table.add_column("Score")
    table.add_column("Document", style="blue")

    for position, (path, score) in enumerate(pairs, start=1):
        table.add_row(str(position), f"{score:.4f}", path)

    console.print(table)


@app.command()
def serve(
    root: Path = typer.Option(None, "--root", help="Directory of notes to search"),
    host: str = typer.Option(DEFAULT_HOST, help="Host interface"),
    port: int = typer.Option(DEFAULT_PORT, help="Server port"),
    max_concurrent: int = typer.Option(
        AppConfig().max_concurrent_queries, min=1, help="Queries scored at the same time"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Start the query server."""
    _setup_logging(verbose)
    config = AppConfig(
        root=_resolve_root(root),
        host=host,
        port=port,
        max_concurrent_queries=max_concurrent,
    )

    console.print(f"Serving [bold]{config.root}[/bold] on ws://{host}:{port}/")
    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        reload=False,
        log_level="debug" if verbose else "info",
    )


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    root: Path = typer.Option(None, "--root", help="Directory of notes to search"),
    top_k: int = typer.Option(10, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rank the notes against a query without starting a server."""
    _setup_logging(verbose)
    searcher = Searcher(_resolve_root(root))

    try:
        results = searcher.search(query)
    except CorpusError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    _print_results(result.as_pair() for result in results[:top_k])


@app.command()
def query(
    text: str = typer.Argument(..., help="Query text"),
    host: str = typer.Option(DEFAULT_HOST, help="Server host"),
    port: int = typer.Option(DEFAULT_PORT, help="Server port"),
    top_k: int = typer.Option(10, help="Number of results to display"),
) -> None:
    """Send a query to a running server and show its reply."""
    try:
        with connect(f"ws://{host}:{port}/") as websocket:
            websocket.send(text)
            reply = websocket.recv()
    except (OSError, WebSocketException) as exc:
        console.print(f"[red]Query failed: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    pairs = json.loads(reply)
    if not pairs:
        console.print("[yellow]No matches found.[/yellow]")
        return

    _print_results((path, score) for path, score in pairs[:top_k])


def main() -> None:
    app()


if __name__ == "__main__":
    main()
