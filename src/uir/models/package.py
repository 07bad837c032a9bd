"""Package data models."""

from dataclasses import dataclass, field
from datetime import date


def is_valid_package_name(name) -> bool:
    """Check that name is usable as a single directory under the storage root."""
    return (
        isinstance(name, str)
        and name not in ("", ".", "..")
        and "/" not in name
        and "\0" not in name
    )


@dataclass
class PackageManifest:
    """Declarative description bundled in a .uir archive (set.conf)."""

    name: str
    version: str
    description: str = ""
    arch: str = ""
    install_paths: dict[str, str] = field(default_factory=dict)  # staged path -> absolute destination
    bin_links: dict[str, str] = field(default_factory=dict)  # stored path -> link name
    dependencies: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "arch": self.arch,
            "install_paths": dict(self.install_paths),
            "bin_links": dict(self.bin_links),
            "dependencies": list(self.dependencies),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PackageManifest":
        """Create PackageManifest from dictionary.

        Raises KeyError, TypeError or ValueError on a structurally invalid
        document. Missing optional maps default to empty.
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")

        install_paths = data.get("install_paths") or {}
        bin_links = data.get("bin_links") or {}
        dependencies = data.get("dependencies") or []

        if not isinstance(install_paths, dict) or not isinstance(bin_links, dict):
            raise TypeError("install_paths and bin_links must be objects")
        if not isinstance(dependencies, list):
            raise TypeError("dependencies must be a list")

        name = data["name"]
        if not is_valid_package_name(name):
            raise ValueError(f"invalid package name {name!r}")
        version = data.get("version")

        return cls(
            name=name,
            version="" if version is None else str(version),
            description=data.get("description") or "",
            arch=data.get("arch") or "",
            install_paths={str(k): str(v) for k, v in install_paths.items()},
            bin_links={str(k): str(v) for k, v in bin_links.items()},
            dependencies=[str(d) for d in dependencies],
        )


@dataclass
class InstalledPackage:
    """Represents an installed package as recorded in the registry."""

    name: str
    version: str
    install_date: str  # YYYY-MM-DD
    config: PackageManifest

    @classmethod
    def from_manifest(cls, manifest: PackageManifest, today: date | None = None) -> "InstalledPackage":
        """Build a registry record for a freshly installed manifest."""
        today = today or date.today()
        return cls(
            name=manifest.name,
            version=manifest.version,
            install_date=today.strftime("%Y-%m-%d"),
            config=manifest,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "version": self.version,
            "install_date": self.install_date,
            "config": self.config.to_dict(),
        }

    @classmethod
    def from_dict(cls, name: str, data: dict) -> "InstalledPackage":
        """Create InstalledPackage from dictionary."""
        config = PackageManifest.from_dict(data.get("config") or {"name": name, "version": data["version"]})
        return cls(
            name=data.get("name") or name,
            version=data["version"],
            install_date=data.get("install_date", ""),
            config=config,
        )
