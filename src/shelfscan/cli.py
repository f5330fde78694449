"""Command-line interface for shelfscan.

Built with Typer for commands and Rich for output.
"""

import logging
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import get_config
from .db import get_db
from .metadata import SeriesMetadataDao, SeriesStatus
from .series import Series, SeriesDao, SeriesSearch

# Create the main app
app = typer.Typer(
    name="shelfscan",
    help="Inspect and prune scanned series.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_stored_data_error(error: ValidationError) -> None:
    """Report a stored row that no longer maps to a valid series."""
    details = "; ".join(err["msg"] for err in error.errors())
    print_error(f"Stored series data is invalid: {escape(details)}")


def get_series_dao() -> SeriesDao:
    return SeriesDao(get_db())


def format_series_table(series: list[Series], title: str = "Series") -> Table:
    """Create a rich table for displaying series."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan", no_wrap=False, max_width=40)
    table.add_column("Books", justify="right")
    table.add_column("Library", style="green")
    table.add_column("ID", style="dim")

    for item in series:
        table.add_row(item.name, str(item.book_count), item.library_id, item.id)

    return table


@app.callback()
def configure_logging() -> None:
    """Inspect and prune scanned series."""
    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


# ============================================================================
# Series Commands
# ============================================================================


@app.command("list")
def list_series(
    library: Optional[str] = typer.Option(None, "--library", "-l", help="Only this library"),
) -> None:
    """List series, optionally restricted to one library."""
    dao = get_series_dao()
    try:
        series = dao.find_all_by_library_id(library) if library else dao.find_all()
    except ValidationError as e:
        print_stored_data_error(e)
        raise typer.Exit(1)

    if not series:
        console.print("[dim]No series found.[/dim]")
        return

    series.sort(key=lambda item: item.name.lower())
    console.print(format_series_table(series))


@app.command()
def show(series_id: str = typer.Argument(..., help="Series ID")) -> None:
    """Show one series and its metadata."""
    db = get_db()
    try:
        series = SeriesDao(db).find_by_id_or_null(series_id)
    except ValidationError as e:
        print_stored_data_error(e)
        raise typer.Exit(1)
    if series is None:
        print_error(f"Series not found: {series_id}")
        raise typer.Exit(1)

    metadata = SeriesMetadataDao(db).find_by_id_or_null(series_id)

    console.print(f"[bold cyan]{series.name}[/bold cyan]")
    console.print(f"URL: {series.url}")
    console.print(f"Library: {series.library_id}")
    console.print(f"Books: {series.book_count}")
    console.print(f"Modified on disk: {series.file_last_modified:%Y-%m-%d %H:%M}")
    if metadata:
        console.print(f"Title: {metadata.title}")
        console.print(f"Status: {metadata.status.value}")
        if metadata.publisher:
            console.print(f"Publisher: {metadata.publisher}")


@app.command()
def search(
    term: Optional[str] = typer.Option(None, "--term", "-t", help="Title contains"),
    library: Optional[list[str]] = typer.Option(None, "--library", "-l", help="Library ID"),
    collection: Optional[list[str]] = typer.Option(None, "--collection", "-c", help="Collection ID"),
    status: Optional[list[SeriesStatus]] = typer.Option(None, "--status", "-s", help="Metadata status"),
    publisher: Optional[list[str]] = typer.Option(None, "--publisher", "-p", help="Publisher"),
) -> None:
    """Search series by library, collection, title, status and publisher."""
    criteria = SeriesSearch(
        library_ids=library or None,
        collection_ids=collection or None,
        search_term=term,
        metadata_status=status or None,
        publishers=publisher or None,
    )
    try:
        results = get_series_dao().find_all(criteria)
    except ValidationError as e:
        print_stored_data_error(e)
        raise typer.Exit(1)

    if not results:
        console.print("[dim]No matching series.[/dim]")
        return

    results.sort(key=lambda item: item.name.lower())
    console.print(format_series_table(results, title=f"Search results ({len(results)})"))


@app.command()
def count() -> None:
    """Show the total number of series."""
    console.print(f"{get_series_dao().count()} series")


@app.command()
def delete(
    series_ids: list[str] = typer.Argument(..., help="Series IDs to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete one or more series."""
    if not force:
        if not typer.confirm(f"Delete {len(series_ids)} series?"):
            console.print("[dim]Cancelled.[/dim]")
            return

    deleted = get_series_dao().delete_many(series_ids)
    if deleted == 0:
        print_error("No matching series.")
        raise typer.Exit(1)

    print_success(f"Deleted {deleted} series")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"shelfscan version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
