"""ABOUTME: CLI entry point for sluggable commands.
ABOUTME: Provides slugify, resolve, and history commands via Typer."""

import sqlite3
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.table import Table

from sluggable.config import load_slugging_config
from sluggable.errors import NotFoundError
from sluggable.logs import init_logging
from sluggable.slugging.options import apply_file_config, get_options
from sluggable.slugging.slug_config import SlugConfigRegistry
from sluggable.store.history import SqliteSlugHistory
from sluggable.store.sqlite_store import SqliteRecordStore, record_type_for_table

app = typer.Typer(
    name="sluggable",
    help="Compute slugs and look up records by slug, id or past slug.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to slugging.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Load logging and slug options before running a command."""
    init_logging(verbose=verbose)
    try:
        apply_file_config(load_slugging_config(config))
    except FileNotFoundError as e:
        if config is not None:
            console.print(f"[red]Error:[/] {e}")
            raise typer.Exit(1) from None
    except (ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid config:[/] {e}")
        raise typer.Exit(1) from None


def _open_database(db_path: Path) -> sqlite3.Connection:
    if not db_path.exists():
        console.print(f"[red]Error:[/] Database not found: {db_path}")
        raise typer.Exit(1)
    return sqlite3.connect(str(db_path))


def _open_store(
    db_path: Path,
    table: str,
    history: str | None,
    owner_type: str | None,
) -> SqliteRecordStore:
    conn = _open_database(db_path)
    configs = SlugConfigRegistry()
    try:
        record_type, primary_key = record_type_for_table(conn, table, owner_type)
        configs.declare(record_type, history=history)
    except ValueError as e:
        conn.close()
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1) from None

    store = SqliteRecordStore(conn, record_type, primary_key=primary_key, registry=configs)
    if store.history is not None and not store.history.exists():
        conn.close()
        console.print(f"[red]Error:[/] History table not found: {history}")
        raise typer.Exit(1)
    return store


@app.command()
def slugify(
    text: str = typer.Argument(..., help="Text to turn into a slug"),
) -> None:
    """Print the slug candidate for a text, truncated to the maximum length."""
    options = get_options()
    slug = options.slugify(text)[: options.maximum_length]
    if not slug:
        console.print("[yellow]Text has no usable characters; a random identifier would be used.[/]")
        raise typer.Exit(1)
    if options.is_reserved(slug):
        console.print(f"[yellow]{slug} is reserved; a random suffix would be appended.[/]")
    console.print(slug)


@app.command()
def resolve(
    db_path: Path = typer.Argument(..., help="SQLite database file"),
    table: str = typer.Argument(..., help="Table holding the records"),
    identifier: str = typer.Argument(..., help="Primary key, slug or past slug"),
    history: str | None = typer.Option(None, "--history", help="Slug history table"),
    owner_type: str | None = typer.Option(None, "--owner-type", help="Owner type name used in the history table"),
) -> None:
    """Find a record by primary key, slug or past slug."""
    store = _open_store(db_path, table, history, owner_type)
    try:
        record = store.from_slug_strict(identifier)
    except NotFoundError as e:
        console.print(f"[red]Not found:[/] {e}")
        raise typer.Exit(1) from None
    finally:
        store.conn.close()

    result = Table(title=f"{table} {record.id}")
    result.add_column("Column")
    result.add_column("Value")
    result.add_row("id", str(record.id))
    for column, value in record.to_row().items():
        result.add_row(column, "" if value is None else str(value))
    console.print(result)


@app.command(name="history")
def show_history(
    db_path: Path = typer.Argument(..., help="SQLite database file"),
    history_table: str = typer.Argument(..., help="Slug history table"),
    owner_type: str = typer.Argument(..., help="Owner type name"),
    owner_id: str = typer.Argument(..., help="Primary key of the record"),
) -> None:
    """List every slug a record has held, oldest first."""
    conn = _open_database(db_path)
    try:
        entries = SqliteSlugHistory(conn, history_table).entries_for(owner_type, owner_id)
    except (ValueError, sqlite3.OperationalError) as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1) from None
    finally:
        conn.close()

    if not entries:
        console.print(f"[yellow]No slug history for {owner_type} {owner_id}[/]")
        return

    for entry in entries:
        console.print(f"  {entry.created_at.isoformat()}  {entry.slug}")


if __name__ == "__main__":
    app()
