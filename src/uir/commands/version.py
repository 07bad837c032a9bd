"""Version command implementation."""

import click
from rich.console import Console

from uir import __version__

console = Console()


@click.command()
def version():
    """Show the uir version."""
    console.print(f"uir package manager v{__version__}")
