"""Command-line interface for shelfkeeper.

Built with Typer for commands and Rich for output. Each command makes one
call on the library service and prints the notifications it produced.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import STORAGE_BACKENDS, get_config
from .notifications import NotificationKind
from .service import LibraryService, get_service, reset_service

# Create the main app
app = typer.Typer(
    name="shelfkeeper",
    help="Lend books to members, with waitlists for books on loan.",
    no_args_is_help=True,
)

# Create sub-apps for command groups
book_app = typer.Typer(help="Manage the book catalog.")
app.add_typer(book_app, name="book")

member_app = typer.Typer(help="Manage library members.")
app.add_typer(member_app, name="member")

# Rich consoles for pretty output; logs go to stderr
console = Console()
err_console = Console(stderr=True)

NOTIFICATION_STYLES = {
    NotificationKind.LENT: "bold cyan",
    NotificationKind.WAITLISTED: "bold yellow",
    NotificationKind.RETURNED: "bold cyan",
    NotificationKind.BOOK_NOT_FOUND: "yellow",
    NotificationKind.MEMBER_NOT_FOUND: "yellow",
}


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def configure_logging(level: str) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def print_notifications(service: LibraryService) -> None:
    """Print and clear the notifications produced by the last call."""
    for notification in service.notifications.drain():
        style = NOTIFICATION_STYLES.get(notification.kind, "green")
        console.print(notification.message, style=style, markup=False, highlight=False)


def format_book_table(books, title: str = "Books in Library") -> Table:
    """Create a rich table for displaying books."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Title", style="cyan", no_wrap=False, max_width=40)
    table.add_column("Author", style="green", max_width=25)
    table.add_column("Available", justify="center")
    table.add_column("Waitlist", style="yellow")

    for book in books:
        table.add_row(
            book.title,
            book.author,
            "No" if book.on_loan else "Yes",
            ", ".join(str(member_id) for member_id in book.waitlist) or "-",
        )

    return table


def format_member_table(members, title: str = "Members in Library") -> Table:
    """Create a rich table for displaying members."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Member ID", justify="right", style="cyan")
    table.add_column("Name", style="green")

    for member in members:
        table.add_row(str(member.id), member.name)

    return table


# ============================================================================
# Global Options
# ============================================================================


@app.callback()
def main(
    data_dir: Optional[Path] = typer.Option(
        None, "--data-dir", "-d", help="Directory holding the library files"
    ),
    backend: Optional[str] = typer.Option(
        None, "--backend", "-b", help=f"Storage backend ({', '.join(STORAGE_BACKENDS)})"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Lend books to members, with waitlists for books on loan."""
    config = get_config()
    if data_dir is not None:
        config = replace(config, data_dir=data_dir.expanduser())
    if backend is not None:
        config = replace(config, storage_backend=backend.lower())

    errors = config.validate()
    if errors:
        for error in errors:
            print_error(error)
        raise typer.Exit(1)

    configure_logging("DEBUG" if verbose else config.log_level)

    # Every invocation reads the stores afresh
    reset_service()
    get_service(config)


@app.command()
def version() -> None:
    """Show the shelfkeeper version."""
    console.print(f"shelfkeeper {__version__}")


# ============================================================================
# Book Commands
# ============================================================================


@book_app.command("add")
def book_add(
    title: str = typer.Argument(..., help="Book title"),
    author: str = typer.Argument(..., help="Book author"),
) -> None:
    """Add a book to the catalog."""
    service = get_service()
    service.add_book(title, author)
    print_notifications(service)


@book_app.command("remove")
def book_remove(
    title: str = typer.Argument(..., help="Title of the book(s) to remove"),
) -> None:
    """Remove every book with the given title."""
    service = get_service()
    service.remove_book(title)
    print_notifications(service)


@book_app.command("search")
def book_search(
    title: str = typer.Argument(..., help="Title to search for"),
) -> None:
    """Find a book by title."""
    service = get_service()
    item = service.search_book(title)
    print_notifications(service)
    if item is not None and item.waitlist:
        console.print(f"Waitlist: {', '.join(str(m) for m in item.waitlist)}", markup=False)


@book_app.command("list")
def book_list(
    sort: bool = typer.Option(False, "--sort", "-s", help="Sort by title"),
) -> None:
    """List all books."""
    service = get_service()
    books = service.list_books(sort=sort)

    if not books:
        console.print("[dim]No books found.[/dim]")
        return

    console.print(format_book_table(books))


# ============================================================================
# Loan Commands
# ============================================================================


@app.command()
def lend(
    title: str = typer.Argument(..., help="Title of the book to lend"),
    member_id: int = typer.Argument(..., help="Member ID"),
) -> None:
    """Lend a book, or join its waitlist if it is on loan."""
    service = get_service()
    service.lend_book(title, member_id)
    print_notifications(service)


@app.command("return")
def return_(
    title: str = typer.Argument(..., help="Title of the book to return"),
) -> None:
    """Return a book. It goes to the next waiting member, if any."""
    service = get_service()
    service.return_book(title)
    print_notifications(service)


# ============================================================================
# Member Commands
# ============================================================================


@member_app.command("add")
def member_add(
    member_id: int = typer.Argument(..., help="Member ID"),
    name: str = typer.Argument(..., help="Member name"),
) -> None:
    """Add a member."""
    service = get_service()
    service.add_member(member_id, name)
    print_notifications(service)


@member_app.command("remove")
def member_remove(
    member_id: int = typer.Argument(..., help="Member ID"),
) -> None:
    """Remove every member with the given ID."""
    service = get_service()
    service.remove_member(member_id)
    print_notifications(service)


@member_app.command("search")
def member_search(
    member_id: int = typer.Argument(..., help="Member ID"),
) -> None:
    """Find a member by ID."""
    service = get_service()
    service.search_member_by_id(member_id)
    print_notifications(service)


@member_app.command("list")
def member_list() -> None:
    """List all members."""
    service = get_service()
    members = service.list_members()

    if not members:
        console.print("[dim]No members found.[/dim]")
        return

    console.print(format_member_table(members))


if __name__ == "__main__":
    app()
