"""Self-remove command implementation."""

import click
from rich.console import Console
from rich.markup import escape

from uir.core.errors import UirError
from uir.core.lifecycle import Lifecycle

console = Console()


@click.command("self-remove")
def self_remove():
    """Completely remove the uir package manager and all package directories."""
    try:
        Lifecycle(console=console).self_remove()
    except UirError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)
