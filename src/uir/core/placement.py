"""Copying manifest-declared files to their system destinations."""

from dataclasses import dataclass
from pathlib import Path
import logging
import shutil

from uir.core.config import UirConfig, get_config
from uir.core.errors import FilePlacementFailed
from uir.core.extractor import make_executable
from uir.models.package import PackageManifest

logger = logging.getLogger(__name__)


@dataclass
class PlacedFile:
    """A file copied from package storage to its destination."""

    source: str  # path relative to the package directory
    destination: Path
    executable: bool

    def describe(self) -> str:
        label = "Installed (executable)" if self.executable else "Installed"
        return f"{label}: {self.source} -> {self.destination}"


def is_executable_destination(dest: Path, config: UirConfig | None = None) -> bool:
    """Check if dest lies under one of the recognized binary directories."""
    config = config or get_config()
    return any(dest.is_relative_to(bin_dir) for bin_dir in config.executable_dirs)


def install_files(
    manifest: PackageManifest,
    package_dir: Path,
    config: UirConfig | None = None,
) -> list[PlacedFile]:
    """Copy every install_paths entry from package_dir to its destination.

    Existing destinations are overwritten. Files already copied are left in
    place if a later copy fails.
    """
    config = config or get_config()
    placed = []

    for src, dest in manifest.install_paths.items():
        src_path = package_dir / src
        dest_path = Path(dest)

        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src_path, dest_path)
            executable = is_executable_destination(dest_path, config)
            if executable:
                make_executable(dest_path)
        except OSError as e:
            raise FilePlacementFailed(dest_path, e.strerror or e)

        placed.append(PlacedFile(source=src, destination=dest_path, executable=executable))

    return placed


def remove_installed(manifest: PackageManifest) -> list[Path]:
    """Delete every install_paths destination, best-effort.

    Missing files count as already removed. Other failures are logged and
    the remaining entries are still processed. Returns the paths removed.
    """
    removed = []

    for dest in manifest.install_paths.values():
        dest_path = Path(dest)
        try:
            dest_path.unlink()
        except FileNotFoundError:
            logger.debug("%s already gone", dest_path)
            continue
        except OSError as e:
            logger.warning("Could not remove %s: %s", dest_path, e)
            continue
        removed.append(dest_path)

    return removed
