# contexto/interface/cli.py

import logging
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from contexto.domain.models import SearchResult, SyncReport, SyncStatus


console = Console()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def display_welcome_banner() -> None:
    console.print(Panel.fit(
        "[bold cyan]🔍 Contexto: documentation search[/bold cyan]\n"
        "[dim]Powered by sentence-transformers + cosine similarity[/dim]",
        box=box.DOUBLE,
        border_style="cyan",
    ))


def display_sync_report(report: SyncReport) -> None:
    style = {
        SyncStatus.UPDATED: "green",
        SyncStatus.NO_CHANGES: "dim",
        SyncStatus.DOCS_DIR_MISSING: "yellow",
    }[report.status]
    console.print(f"\n[{style}]{report.summary()}[/{style}]")

    for label, paths, colour in (
        ("+", report.added, "green"),
        ("~", report.modified, "yellow"),
        ("-", report.removed, "red"),
    ):
        for path in paths:
            console.print(f"  [{colour}]{label}[/{colour}] {path}")


def display_messages(messages: List[str]) -> None:
    for message in messages:
        console.print(f"[green]✓[/green] {message}")


def prompt_for_query() -> str:
    return Prompt.ask("\n[bold yellow]❓ Your question[/bold yellow]")


def display_results(query: str, results: List[SearchResult]) -> None:
    if not results:
        console.print(f"\n[dim]No matches found for the query: '{query}'.[/dim]\n")
        return

    table = Table(
        title=f"Results for: \"{query}\"",
        box=box.ROUNDED,
        show_lines=False,
    )
    table.add_column("#", justify="right", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Document", style="bold white")

    for rank, result in enumerate(results, start=1):
        score_color = _score_to_color(result.similarity_score)
        table.add_row(
            str(rank),
            f"[{score_color}]{result.similarity_score:.4f}[/{score_color}]",
            result.path,
        )

    console.print(table)


def display_document(path: str, content: str) -> None:
    console.print(Panel(content, title=f"[bold]{path}[/bold]", box=box.ROUNDED, padding=(1, 2)))


def display_error(message: str) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {message}\n")


def ask_continue() -> bool:
    answer = Prompt.ask(
        "\n[dim]Search again?[/dim]",
        choices=["y", "n"],
        default="y",
    )
    return answer.lower() == "y"


def _score_to_color(score: float) -> str:
    if score >= 0.75:
        return "green"
    elif score >= 0.50:
        return "yellow"
    else:
        return "red"
