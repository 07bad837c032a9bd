"""Binary links from the link directory into package storage."""

from dataclasses import dataclass
from pathlib import Path
import logging

from uir.core.config import UirConfig, get_config
from uir.core.errors import LinkCreationFailed
from uir.core.extractor import make_executable
from uir.models.package import PackageManifest

logger = logging.getLogger(__name__)


@dataclass
class BinLink:
    """A symlink created in the link directory."""

    name: str
    link_path: Path
    target: Path


def create_bin_links(
    manifest: PackageManifest,
    package_dir: Path,
    config: UirConfig | None = None,
) -> list[BinLink]:
    """Create a symlink in the link directory for every bin_links entry.

    Existing entries at the link path are replaced. Links already created
    are left in place if a later one fails.
    """
    config = config or get_config()
    link_dir = config.link_dir
    package_dir = package_dir.absolute()
    created = []

    for src, link_name in manifest.bin_links.items():
        target = package_dir / src
        link_path = link_dir / link_name

        if target.is_file():
            try:
                make_executable(target)
            except OSError as e:
                logger.warning("Could not make %s executable: %s", target, e)

        try:
            link_dir.mkdir(parents=True, exist_ok=True)
            if link_path.is_symlink() or link_path.exists():
                link_path.unlink()
            link_path.symlink_to(target)
        except OSError as e:
            raise LinkCreationFailed(link_path, e.strerror or e)

        created.append(BinLink(name=link_name, link_path=link_path, target=target))

    return created


def remove_bin_links(manifest: PackageManifest, config: UirConfig | None = None) -> list[Path]:
    """Delete every bin_links entry from the link directory, best-effort."""
    config = config or get_config()
    removed = []

    for link_name in manifest.bin_links.values():
        link_path = config.link_dir / link_name
        try:
            link_path.unlink()
        except FileNotFoundError:
            logger.debug("%s already gone", link_path)
            continue
        except OSError as e:
            logger.warning("Could not remove link %s: %s", link_path, e)
            continue
        removed.append(link_path)

    return removed
