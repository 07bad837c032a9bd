"""Data models for uir."""

from uir.models.package import InstalledPackage, PackageManifest

__all__ = ["InstalledPackage", "PackageManifest"]
