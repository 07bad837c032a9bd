"""Archive extraction and staging directory handling."""

from contextlib import contextmanager
from pathlib import Path
import logging
import shutil
import stat
import tarfile

from uir.core.errors import ExtractionFailed

logger = logging.getLogger(__name__)


ARCHIVE_EXTENSION = ".uir"


def make_executable(path: Path) -> None:
    """Make a file executable (0755)."""
    current = path.stat().st_mode
    path.chmod(
        (current & ~0o777) | stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH
    )


def extract_archive(archive_path: Path, dest_dir: Path) -> Path:
    """Extract a .uir archive (gzip-compressed tar) into dest_dir.

    Returns the directory containing extracted files.
    """
    dest_dir.mkdir(parents=True, exist_ok=True)

    try:
        with tarfile.open(archive_path, "r:*") as tar:
            tar.extractall(dest_dir, filter="tar")
    except (tarfile.TarError, OSError) as e:
        raise ExtractionFailed(f"Failed to extract {archive_path}: {e}")

    return dest_dir


def cleanup_temp_dir(temp_dir: Path) -> None:
    """Clean up a temporary directory."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir, ignore_errors=True)


@contextmanager
def staging_dir(path: Path):
    """Provide an empty scratch directory that is removed on exit.

    Any leftover from a previous run at the same path is cleared first.
    """
    cleanup_temp_dir(path)
    path.mkdir(parents=True, exist_ok=True)
    try:
        yield path
    finally:
        logger.debug("Removing staging directory %s", path)
        cleanup_temp_dir(path)


def copy_tree(source_dir: Path, dest_dir: Path) -> None:
    """Replace dest_dir with a verbatim copy of source_dir."""
    if dest_dir.is_symlink() or dest_dir.is_file():
        dest_dir.unlink()
    elif dest_dir.exists():
        shutil.rmtree(dest_dir)
    dest_dir.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(source_dir, dest_dir, symlinks=True)
