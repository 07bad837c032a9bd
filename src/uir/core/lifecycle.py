"""Package lifecycle: install, remove, self-remove and self-update."""

from pathlib import Path
from typing import Callable
import logging
import os
import shutil
import subprocess
import sys

from rich.console import Console
from rich.markup import escape

from uir.core.config import UirConfig, get_config
from uir.core.errors import (
    AlreadyInstalled,
    ArchiveNotFound,
    FilePlacementFailed,
    InvalidArchiveName,
    InvalidPackageName,
    ManifestError,
    NotInstalled,
    PrivilegeRequired,
    RegistryError,
    SelfUpdateFailed,
)
from uir.core.extractor import ARCHIVE_EXTENSION, copy_tree, extract_archive, staging_dir
from uir.core.links import create_bin_links, remove_bin_links
from uir.core.manifest import read_package_manifest
from uir.core.placement import install_files, remove_installed
from uir.core.registry import Registry
from uir.models.package import InstalledPackage

logger = logging.getLogger(__name__)


SELF_PACKAGE = "uir"
SELF_BINARIES = ("uir", "uir-build")


def running_as_root() -> bool:
    return os.geteuid() == 0


class Lifecycle:
    """Sequences the install/remove steps and commits registry state.

    The registry write is the only durable checkpoint: install writes it
    last, remove deletes it after the package directory is gone. Nothing is
    rolled back when a step in between fails.
    """

    def __init__(
        self,
        config: UirConfig | None = None,
        console: Console | None = None,
        is_privileged: Callable[[], bool] | None = None,
    ):
        self.config = config or get_config()
        self.console = console or Console()
        self.is_privileged = is_privileged or running_as_root
        self.registry = Registry(self.config)

    def _require_privilege(self, action: str) -> None:
        if not self.is_privileged():
            raise PrivilegeRequired(f"{action} requires root privileges")

    def install(self, archive: Path) -> InstalledPackage:
        """Install a package from a .uir archive."""
        self._require_privilege("Installation")

        archive = Path(archive)
        if not archive.name.endswith(ARCHIVE_EXTENSION):
            raise InvalidArchiveName(f"Package file must have {ARCHIVE_EXTENSION} extension")
        if not archive.exists():
            raise ArchiveNotFound(f"Package file {archive} does not exist")

        self.console.print(f"[blue]Installing[/blue] package {escape(str(archive))}...")

        with staging_dir(self.config.staging_dir) as extract_dir:
            extract_archive(archive, extract_dir)
            manifest = read_package_manifest(extract_dir)

            if self.registry.contains(manifest.name):
                raise AlreadyInstalled(
                    f"Package {manifest.name} is already installed. "
                    f"Use 'uir remove {manifest.name}' first."
                )

            package_dir = self.config.package_dir(manifest.name)
            try:
                copy_tree(extract_dir, package_dir)
            except OSError as e:
                raise FilePlacementFailed(package_dir, e)

        for placed in install_files(manifest, package_dir, self.config):
            self.console.print(f"  {escape(placed.describe())}")

        for link in create_bin_links(manifest, package_dir, self.config):
            self.console.print(f"  Created binary link: {escape(link.name)} -> {escape(str(link.target))}")

        package = InstalledPackage.from_manifest(manifest)
        self.registry.put(package)

        self.console.print(
            f"\n[green]✓[/green] Package [bold]{escape(package.name)}[/bold] v{escape(package.version)} successfully installed!"
        )
        return package

    def remove(self, name: str) -> bool:
        """Remove an installed package.

        Returns False if there was nothing to remove. Removing the tool's own
        package removes the tool entirely.
        """
        self._require_privilege("Removal")

        if name == SELF_PACKAGE:
            self.self_remove()
            return True

        package_dir = self.config.package_dir(name)
        if not package_dir.exists():
            self.console.print(f"Package [yellow]{escape(name)}[/yellow] is not installed")
            return False

        self.console.print(f"[blue]Removing[/blue] package {escape(name)}...")

        # The stored copy of set.conf drives file and link cleanup
        try:
            manifest = read_package_manifest(package_dir)
        except ManifestError as e:
            logger.warning("Skipping file and link cleanup for %s: %s", name, e)
        else:
            for path in remove_installed(manifest):
                self.console.print(f"  Removed: {escape(str(path))}")
            for path in remove_bin_links(manifest, self.config):
                self.console.print(f"  Removed binary link: {escape(path.name)}")

        shutil.rmtree(package_dir, ignore_errors=True)
        self.registry.remove(name)

        self.console.print(f"\n[green]✓[/green] Package [bold]{escape(name)}[/bold] successfully removed!")
        return True

    def self_remove(self) -> None:
        """Remove uir, every package directory and all uir state.

        Other packages' installed files and links are left behind.
        """
        self._require_privilege("Self-removal")

        self.console.print("[blue]Removing[/blue] uir package manager...")

        try:
            packages = self.registry.load()
        except RegistryError as e:
            logger.warning("Could not read registry, skipping package directories: %s", e)
            packages = {}

        for name in packages:
            if name == SELF_PACKAGE:
                continue
            try:
                package_dir = self.config.package_dir(name)
            except InvalidPackageName as e:
                logger.warning("Skipping registry entry: %s", e)
                continue
            self.console.print(f"  Removing dependent package: {escape(name)}")
            shutil.rmtree(package_dir, ignore_errors=True)

        shutil.rmtree(self.config.package_dir(SELF_PACKAGE), ignore_errors=True)

        for binary in SELF_BINARIES:
            path = self.config.link_dir / binary
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Could not remove %s: %s", path, e)

        for root in (self.config.config_root, self.config.storage_root, self.config.temp_root):
            shutil.rmtree(root, ignore_errors=True)

        self.console.print("[green]✓[/green] uir package manager completely removed!")

    def self_update(self, archive: Path) -> None:
        """Install a new uir archive through a fresh uir process.

        The running version's registry entry is not removed first, so this
        fails with the usual already-installed error while uir is registered.
        """
        self._require_privilege("Self-update")

        self.console.print("[blue]Self-updating[/blue] uir package manager...")

        env = dict(os.environ)
        env.update(self.config.to_env())
        result = subprocess.run(
            [sys.executable, "-m", "uir", "install", str(archive)],
            env=env,
        )

        if result.returncode != 0:
            raise SelfUpdateFailed(f"Update process exited with status {result.returncode}")

        self.console.print("[green]✓[/green] uir package manager successfully updated!")

    def list_packages(self) -> list[InstalledPackage]:
        return self.registry.list_packages()

    def info(self, name: str) -> InstalledPackage:
        """Look up a registered package. The registry is authoritative here."""
        package = self.registry.get(name)
        if package is None:
            raise NotInstalled(f"Package {name} is not installed")
        return package
