"""Remove command implementation."""

import click
from rich.console import Console
from rich.markup import escape

from uir.core.errors import UirError
from uir.core.lifecycle import Lifecycle

console = Console()


@click.command()
@click.argument("package_name", required=False)
def remove(package_name: str | None):
    """Remove an installed package.

    PACKAGE_NAME is the name from the package's set.conf. Removing "uir"
    removes the package manager itself.
    """
    if not package_name:
        console.print("[red]Error:[/red] Please specify package name")
        raise SystemExit(1)

    try:
        Lifecycle(console=console).remove(package_name)
    except UirError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)
