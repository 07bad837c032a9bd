"""Install command implementation."""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from uir.core.errors import UirError
from uir.core.lifecycle import Lifecycle

console = Console()


@click.command()
@click.argument("package_file", required=False)
def install(package_file: str | None):
    """Install a package from a .uir archive.

    PACKAGE_FILE is the path to the archive, e.g. foo-1.0.0.uir
    """
    if not package_file:
        console.print("[red]Error:[/red] Please specify package file")
        raise SystemExit(1)

    try:
        Lifecycle(console=console).install(Path(package_file))
    except UirError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)
