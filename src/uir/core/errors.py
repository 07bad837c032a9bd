"""Exceptions raised by uir operations."""


class UirError(Exception):
    """Base class for all uir errors."""

    pass


class ConfigError(UirError):
    """Settings file could not be used."""

    pass


class PrivilegeRequired(UirError):
    """Operation needs root privileges."""

    pass


class InvalidArchiveName(UirError):
    """Archive file name lacks the .uir extension."""

    pass


class ArchiveNotFound(UirError):
    """Archive file does not exist."""

    pass


class ExtractionFailed(UirError):
    """Archive could not be unpacked."""

    pass


class ManifestError(UirError):
    """Package manifest could not be read."""

    pass


class ManifestNotFound(ManifestError):
    pass


class ManifestMalformed(ManifestError):
    pass


class InvalidPackageName(UirError):
    """Package name cannot be used as a storage directory."""

    pass


class AlreadyInstalled(UirError):
    """A package with the same name is already registered."""

    pass


class NotInstalled(UirError):
    """Package is not registered."""

    pass


class FilePlacementFailed(UirError):
    """Copying a file to its destination failed."""

    def __init__(self, path, reason):
        self.path = path
        super().__init__(f"Failed to install {path}: {reason}")


class LinkCreationFailed(UirError):
    """Creating a binary link failed."""

    def __init__(self, path, reason):
        self.path = path
        super().__init__(f"Failed to create link {path}: {reason}")


class RegistryError(UirError):
    """Installed-package registry could not be used."""

    pass


class RegistryCorrupt(RegistryError):
    pass


class RegistryWriteFailed(RegistryError):
    pass


class SelfUpdateFailed(UirError):
    """The install process spawned by self-update failed."""

    pass
