"""List command implementation."""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from uir.core.errors import UirError
from uir.core.lifecycle import Lifecycle

console = Console()


@click.command("list")
def list_packages():
    """List all installed packages."""
    try:
        packages = Lifecycle(console=console).list_packages()
    except UirError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    if not packages:
        console.print("No packages installed")
        return

    table = Table(title="Installed packages", show_header=True, header_style="bold")
    table.add_column("Package")
    table.add_column("Version")
    table.add_column("Installed")

    for pkg in sorted(packages, key=lambda p: p.name):
        table.add_row(escape(pkg.name), escape(pkg.version), escape(pkg.install_date))

    console.print(table)
