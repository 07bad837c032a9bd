"""CLI entry point for uir."""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from uir import __version__
from uir.commands import info, install, list_cmd, remove, self_remove, self_update, update, version


def setup_logging(verbose: bool) -> None:
    """Route diagnostic logging to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="uir")
@click.option("--verbose", "-v", is_flag=True, help="Show diagnostic messages")
def main(verbose: bool):
    """uir - a local package manager for .uir archives.

    Installs, removes and inspects packages built as .uir archives and
    records them in /etc/uir/installed.json.

    Examples:

        uir install foo-1.0.0.uir

        uir list

        uir info foo

        uir remove foo
    """
    setup_logging(verbose)


# Register commands
main.add_command(install.install)
main.add_command(remove.remove)
main.add_command(list_cmd.list_packages)
main.add_command(info.info)
main.add_command(update.update)
main.add_command(self_update.self_update)
main.add_command(self_remove.self_remove)
main.add_command(version.version)


if __name__ == "__main__":
    main()
