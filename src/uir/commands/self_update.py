"""Self-update command implementation."""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from uir.core.errors import UirError
from uir.core.lifecycle import Lifecycle

console = Console()


@click.command("self-update")
@click.argument("package_file", required=False)
def self_update(package_file: str | None):
    """Update uir itself from a .uir package.

    The current uir must be removed from the registry first, otherwise the
    install step reports it as already installed.
    """
    if not package_file:
        console.print("[red]Error:[/red] Please specify package file for update")
        raise SystemExit(1)

    try:
        Lifecycle(console=console).self_update(Path(package_file))
    except UirError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)
