"""EduGate CLI application using Typer.

This module provides operator commands for the EduGate backend:
schema management, seeding the school registry, session housekeeping
and running the API server.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

import typer
import uvicorn
from rich.console import Console
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from edugate.presentation.api.dependencies import (
    create_tables,
    drop_tables,
    get_engine,
    reset_engine,
)
from edugate_config.settings import get_settings
from edugate_identity import InfrastructureError, SessionManager
from edugate_identity.infrastructure.persistence.sqlalchemy import (
    CredentialStoreSQLAlchemy,
    SessionRepositorySQLAlchemy,
)
from edugate_identity.services.validation import is_valid_school_id

T = TypeVar("T")

app = typer.Typer(
    name="edugate",
    help="EduGate - school registry authentication backend CLI",
    no_args_is_help=True,
)
console = Console()

db_app = typer.Typer(
    name="db",
    help="Database schema management",
    no_args_is_help=True,
)
schools_app = typer.Typer(
    name="schools",
    help="School registry management",
    no_args_is_help=True,
)
sessions_app = typer.Typer(
    name="sessions",
    help="Session housekeeping",
    no_args_is_help=True,
)
app.add_typer(db_app)
app.add_typer(schools_app)
app.add_typer(sessions_app)


def _run(operation: Callable[[AsyncEngine], Awaitable[T]]) -> T:
    """Run an async operation against a fresh engine and dispose it after."""

    async def runner() -> T:
        engine = get_engine()
        try:
            return await operation(engine)
        finally:
            await engine.dispose()

    try:
        return asyncio.run(runner())
    except InfrastructureError as e:
        console.print(f"[red]Database error:[/red] {e.message}")
        raise typer.Exit(code=1) from e
    except (OSError, SQLAlchemyError) as e:
        console.print(f"[red]Could not reach the database:[/red] {e}")
        raise typer.Exit(code=1) from e
    finally:
        # Each command owns its event loop; never reuse its pool
        reset_engine()


def _session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@db_app.command("init")
def db_init() -> None:
    """Create all tables (idempotent)."""
    _run(create_tables)
    console.print("[green]Database schema is up to date.[/green]")


@db_app.command("drop")
def db_drop(
    yes: bool = typer.Option(False, "--yes", help="Confirm dropping all tables"),
) -> None:
    """Drop all tables. Requires --yes."""
    if not yes:
        console.print("[yellow]Refusing to drop tables without --yes.[/yellow]")
        raise typer.Exit(code=1)

    _run(drop_tables)
    console.print("[green]All tables dropped.[/green]")


@schools_app.command("add")
def schools_add(school_id: str = typer.Argument(..., help="10 digit school id")) -> None:
    """Register a school so users can sign up for it."""
    if not is_valid_school_id(school_id):
        console.print(f"[red]Invalid school id:[/red] {school_id} (expected 10 digits)")
        raise typer.Exit(code=1)

    async def add(engine: AsyncEngine) -> bool:
        async with _session_maker(engine)() as session:
            added = await CredentialStoreSQLAlchemy(session).add_school(school_id)
            await session.commit()
            return added

    if _run(add):
        console.print(f"[green]Added school[/green] {school_id}")
    else:
        console.print(f"[yellow]School already registered:[/yellow] {school_id}")


@schools_app.command("list")
def schools_list() -> None:
    """List registered schools."""

    async def fetch(engine: AsyncEngine) -> list[str]:
        async with _session_maker(engine)() as session:
            return await CredentialStoreSQLAlchemy(session).list_schools()

    school_ids = _run(fetch)
    if not school_ids:
        console.print("[dim]No schools registered.[/dim]")
        return

    table = Table(title="Schools")
    table.add_column("School ID", style="cyan")
    for school_id in school_ids:
        table.add_row(school_id)
    console.print(table)


@sessions_app.command("cleanup")
def sessions_cleanup() -> None:
    """Delete expired sessions."""

    async def cleanup(engine: AsyncEngine) -> int:
        async with _session_maker(engine)() as session:
            manager = SessionManager(SessionRepositorySQLAlchemy(session))
            removed = await manager.cleanup_expired()
            await session.commit()
            return removed

    removed = _run(cleanup)
    console.print(f"[green]Removed {removed} expired session(s).[/green]")


@app.command("serve")
def serve() -> None:
    """Run the API server with the configured host and port."""
    settings = get_settings()
    console.print(
        f"[bold green]{settings.app_name}[/bold green] API on "
        f"http://{settings.api_host}:{settings.api_port}"
    )
    uvicorn.run(
        "edugate.presentation.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
