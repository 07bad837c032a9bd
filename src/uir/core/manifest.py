"""Reading the set.conf manifest shipped inside a package."""

import json
from pathlib import Path

from uir.core.errors import ManifestMalformed, ManifestNotFound
from uir.models.package import PackageManifest


MANIFEST_FILENAME = "set.conf"


def read_manifest(path: Path) -> PackageManifest:
    """Parse a manifest file into a PackageManifest.

    Raises ManifestNotFound if the file is missing and ManifestMalformed if
    its content is not a manifest-shaped JSON object.
    """
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ManifestNotFound(f"Manifest {path} not found")
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ManifestMalformed(f"Manifest {path} is not valid JSON: {e}")
    except OSError as e:
        raise ManifestNotFound(f"Cannot read manifest {path}: {e}")

    try:
        return PackageManifest.from_dict(data)
    except KeyError as e:
        raise ManifestMalformed(f"Manifest {path} is missing field {e}")
    except (TypeError, ValueError) as e:
        raise ManifestMalformed(f"Manifest {path} is invalid: {e}")


def read_package_manifest(package_dir: Path) -> PackageManifest:
    """Read the manifest at the root of an extracted or stored package."""
    return read_manifest(package_dir / MANIFEST_FILENAME)
