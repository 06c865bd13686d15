"""Rich console shared by all CLI modules."""

import sys

from rich.console import Console

# Box drawing characters break on legacy Windows code pages
_safe_box = sys.platform == "win32"

console = Console(safe_box=_safe_box)


def print_error(message: str, details: dict | None = None) -> None:
    """Print an error message with optional key/value details."""
    console.print(f"[red]Error: {message}[/red]")
    if details:
        for key, value in details.items():
            console.print(f"  [dim]{key}:[/dim] [yellow]{value}[/yellow]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_success(message: str) -> None:
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    console.print(f"[cyan]{message}[/cyan]")


def print_progress(step: str, message: str, percentage: int | None = None) -> None:
    """One dim line per wizard progress update, e.g. `` 30% extraction: ...``."""
    prefix = f"{percentage:>3}% " if percentage is not None else ""
    console.print(f"[dim]  {prefix}{step}: {message}[/dim]")
