"""Update command implementation."""

import click
from rich.console import Console

console = Console()


@click.command()
def update():
    """Check for package manager updates."""
    console.print("Checking for updates...")
    console.print("Use: [bold]uir self-update <package.uir>[/bold]")
