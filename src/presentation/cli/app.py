"""Enrichment worker CLI application using Typer.

Commands:
    run        Tick enrichment batches until interrupted
    run-once   Drain the queue once and print a summary
    init-db    Create tables (development; production uses Alembic)
    enqueue    Record a session and queue it for enrichment
"""

import asyncio
from uuid import UUID

import typer
from rich.console import Console
from rich.table import Table

from src.application.commands.handlers.run_enrichment_batch_handler import (
    EnrichmentBatchSummary,
    RunEnrichmentBatchError,
)
from src.core.container import get_database
from src.core.result import Failure, Success
from src.domain.entities import EnrichableSession
from src.main import run_once, run_worker

app = typer.Typer(
    name="enrichment-worker",
    help="Session enrichment worker (geolocation + weather)",
    no_args_is_help=True,
)
console = Console()


@app.command("run")
def run(
    interval: float | None = typer.Option(
        None,
        "--interval",
        "-i",
        help="Seconds between batches (defaults to ENRICHMENT_INTERVAL_SECONDS)",
    ),
) -> None:
    """Run the enrichment scheduler until SIGINT/SIGTERM."""
    if interval is not None and interval <= 0:
        console.print("[red]Error: --interval must be positive[/red]")
        raise typer.Exit(1)

    asyncio.run(run_worker(interval_seconds=interval))


@app.command("run-once")
def run_once_command() -> None:
    """Drain the queue once and print the batch summary."""
    result = asyncio.run(run_once())

    match result:
        case Success(value=summary):
            _print_summary(summary)
        case Failure(error=RunEnrichmentBatchError.RUN_IN_PROGRESS):
            console.print("[yellow]A batch is already running[/yellow]")
        case Failure(error=reason):
            console.print(f"[red]Batch failed: {reason}[/red]")
            raise typer.Exit(1)


@app.command("init-db")
def init_db() -> None:
    """Create all tables (development only; production uses Alembic)."""

    async def _create() -> None:
        database = get_database()
        try:
            await database.create_all()
        finally:
            await database.close()

    asyncio.run(_create())
    console.print("[green]Tables created[/green]")


@app.command("enqueue")
def enqueue(
    session_id: UUID = typer.Argument(..., help="Session identifier"),
    ip_address: str = typer.Argument(..., help="Client IP address"),
) -> None:
    """Record a session and queue it for enrichment (local producer helper)."""
    from src.infrastructure.persistence.repositories import (
        SessionRepository,
        WorkQueueRepository,
    )

    async def _enqueue() -> None:
        database = get_database()
        try:
            async with database.get_session() as session:
                await SessionRepository(session).save(
                    EnrichableSession(id=session_id, ip_address=ip_address)
                )
                await WorkQueueRepository(session).enqueue(session_id)
        finally:
            await database.close()

    asyncio.run(_enqueue())
    console.print(f"Queued [cyan]{session_id}[/cyan] ({ip_address})")


def _print_summary(summary: EnrichmentBatchSummary) -> None:
    table = Table(title="Enrichment batch")
    table.add_column("Outcome")
    table.add_column("Count", justify="right")
    for name, count in summary.to_dict().items():
        table.add_row(name.replace("_", " "), str(count))
    console.print(table)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
