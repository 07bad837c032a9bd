"""Info command implementation."""

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from uir.core.errors import UirError
from uir.core.lifecycle import Lifecycle

console = Console()


@click.command()
@click.argument("package_name", required=False)
def info(package_name: str | None):
    """Show detailed information about an installed package."""
    if not package_name:
        console.print("[red]Error:[/red] Please specify package name")
        raise SystemExit(1)

    try:
        package = Lifecycle(console=console).info(package_name)
    except UirError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    config = package.config
    lines = [
        f"[bold]Version:[/bold] {escape(package.version)}",
        f"[bold]Description:[/bold] {escape(config.description)}",
        f"[bold]Architecture:[/bold] {escape(config.arch)}",
        f"[bold]Install date:[/bold] {escape(package.install_date)}",
    ]
    if config.dependencies:
        lines.append(f"[bold]Dependencies:[/bold] {escape(', '.join(config.dependencies))}")

    if config.install_paths:
        lines.append("\n[bold]Installed files:[/bold]")
        for src, dest in config.install_paths.items():
            lines.append(f"  {escape(src)} -> {escape(dest)}")

    if config.bin_links:
        lines.append("\n[bold]Binary links:[/bold]")
        for src, link in config.bin_links.items():
            lines.append(f"  {escape(src)} -> {escape(link)}")

    console.print(Panel("\n".join(lines), title=f"[green]{escape(package.name)}[/green]"))
