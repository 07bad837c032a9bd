"""Installed-package registry backed by a single JSON document."""

import contextlib
import fcntl
import json
import logging
import os
import tempfile
from pathlib import Path

from uir.core.config import UirConfig, get_config
from uir.core.errors import RegistryCorrupt, RegistryWriteFailed
from uir.models.package import InstalledPackage

logger = logging.getLogger(__name__)


class Registry:
    """Durable mapping from package name to InstalledPackage.

    Every mutation loads the whole document, changes it in memory and saves
    it back under an exclusive lock. An absent file means nothing is
    installed.
    """

    def __init__(self, config: UirConfig | None = None):
        config = config or get_config()
        self.path: Path = config.registry_path
        self.lock_path: Path = config.lock_path

    def load(self) -> dict[str, InstalledPackage]:
        """Load all records, or an empty mapping if the file is absent."""
        try:
            with open(self.path) as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RegistryCorrupt(f"Registry {self.path} does not parse: {e}")
        except OSError as e:
            raise RegistryCorrupt(f"Cannot read registry {self.path}: {e}")

        if not isinstance(data, dict):
            raise RegistryCorrupt(f"Registry {self.path} must be a JSON object")

        try:
            return {
                name: InstalledPackage.from_dict(name, record)
                for name, record in data.items()
            }
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise RegistryCorrupt(f"Registry {self.path} has an invalid record: {e}")

    def save(self, packages: dict[str, InstalledPackage]) -> None:
        """Persist the complete mapping, replacing the previous document."""
        data = {name: pkg.to_dict() for name, pkg in packages.items()}

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise RegistryWriteFailed(f"Cannot write registry {self.path}: {e}")

        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, self.path)
        except OSError as e:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise RegistryWriteFailed(f"Cannot write registry {self.path}: {e}")

    @contextlib.contextmanager
    def locked(self):
        """Hold an exclusive lock for a load/modify/save cycle."""
        try:
            self.lock_path.parent.mkdir(parents=True, exist_ok=True)
            lock_file = open(self.lock_path, "a")
        except OSError as e:
            raise RegistryWriteFailed(f"Cannot open registry lock {self.lock_path}: {e}")

        with lock_file:
            logger.debug("Waiting for registry lock %s", self.lock_path)
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def get(self, name: str) -> InstalledPackage | None:
        """Get a package record by name."""
        return self.load().get(name)

    def contains(self, name: str) -> bool:
        """Check if a package is installed."""
        return name in self.load()

    def list_packages(self) -> list[InstalledPackage]:
        """List all installed packages in document order."""
        return list(self.load().values())

    def put(self, package: InstalledPackage) -> None:
        """Insert or overwrite a record by name."""
        with self.locked():
            packages = self.load()
            packages[package.name] = package
            self.save(packages)

    def remove(self, name: str) -> InstalledPackage | None:
        """Delete a record if present. Returns the removed record."""
        with self.locked():
            packages = self.load()
            package = packages.pop(name, None)
            if package is not None:
                self.save(packages)
            return package
