"""CLI commands for Tone Trainer.

Commands:
- serve: Run the Web API with uvicorn
- init: Create the lesson and history files if missing
- lessons: List stored lessons
- stats: Show practice statistics
- check-llm: Check that the feedback provider answers
"""

import logging
from pathlib import Path

import structlog
import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from tonetrainer.config.app_config import AppConfig, load_app_config
from tonetrainer.core.lessons import LessonService
from tonetrainer.core.practice import PracticeService
from tonetrainer.db.json_store import StoreError
from tonetrainer.llm.client import LLMClient, LLMConfig
from tonetrainer.web.api import build_stores, create_app

app = typer.Typer(
    name="tonetrainer",
    help="Mandarin pronunciation lessons and practice tracking.",
    no_args_is_help=True,
)

console = Console()


def _load_config(config_path: Path | None) -> AppConfig:
    return load_app_config(config_path=config_path)


def _configure_logging(level: str) -> None:
    """Set the minimum structlog level (e.g. "info", "debug")."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"Unknown log level: {level}")
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(numeric))


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default: $PORT or 3000)"),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
    log_level: str = typer.Option("info", "--log-level", help="debug, info, warning, error"),
) -> None:
    """Run the Web API."""
    _configure_logging(log_level)
    config = _load_config(config_path)
    if host is not None:
        config.server.host = host
    if port is not None:
        config.server.port = port

    console.print("[bold]Tone Trainer[/bold]")
    console.print(f"  [dim]student:[/dim] http://localhost:{config.server.port}/student")
    console.print(f"  [dim]teacher:[/dim] http://localhost:{config.server.port}/teacher")

    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_level=log_level.lower(),
    )


@app.command()
def init(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
) -> None:
    """Create empty lesson and history files if they don't exist."""
    config = _load_config(config_path)
    for store in build_stores(config):
        try:
            created = store.initialize()
        except StoreError as e:
            console.print(f"[red]✗ {e}[/red]")
            raise typer.Exit(code=1)
        if created:
            console.print(f"[green]✓ Created {store.path}[/green]")
        else:
            console.print(f"[dim]· {store.path} already exists[/dim]")


@app.command()
def lessons(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
) -> None:
    """List stored lessons."""
    config = _load_config(config_path)
    lessons_store, _ = build_stores(config)

    try:
        items = LessonService(lessons_store).list_lessons()
    except StoreError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    if not items:
        console.print("[yellow]No lessons yet.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Type", justify="center")
    table.add_column("Text")
    table.add_column("Created")

    for lesson in items:
        table.add_row(
            str(lesson["id"]),
            str(lesson["title"]),
            str(lesson["type"]),
            _truncate(str(lesson["text"]), 30),
            str(lesson["createdAt"] or "")[:10],
        )

    console.print(table)


@app.command()
def stats(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
) -> None:
    """Show practice statistics."""
    config = _load_config(config_path)
    _, history_store = build_stores(config)

    try:
        result = PracticeService(history_store).get_stats()
    except StoreError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[bold]Attempts:[/bold] {result.total_attempts}")
    console.print(f"[bold]Average:[/bold]  {result.avg_score}")
    console.print(f"[bold]Best:[/bold]     {result.best_score}")

    if not result.recent_sessions:
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("When")
    table.add_column("Lesson")
    table.add_column("Score", justify="center")

    for session in result.recent_sessions:
        table.add_row(
            str(session.get("timestamp", "")),
            str(session.get("lessonTitle", "")),
            str(session.get("score", "")),
        )

    console.print(table)


@app.command(name="check-llm")
def check_llm(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="YAML config file"),
) -> None:
    """Check that the feedback provider is reachable."""
    config = _load_config(config_path)
    client = LLMClient(LLMConfig.from_app_config(config))

    if client.is_available():
        console.print(
            f"[green]✓ {client.config.provider} reachable at {client.config.base_url}[/green]"
        )
    else:
        console.print(
            f"[yellow]⚠ {client.config.provider} not reachable; feedback will use the fallback text[/yellow]"
        )
        raise typer.Exit(code=1)
