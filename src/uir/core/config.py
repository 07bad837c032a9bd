"""Configuration and path management for uir."""

from pathlib import Path
from dataclasses import dataclass, field, fields
import os

import yaml

from uir.core.errors import ConfigError, InvalidPackageName
from uir.models.package import is_valid_package_name


DEFAULT_STORAGE_ROOT = Path("/uir_packages")
DEFAULT_CONFIG_ROOT = Path("/etc/uir")
DEFAULT_TEMP_ROOT = Path("/tmp/uir_temp")
DEFAULT_LINK_DIR = Path("/usr/local/bin")
DEFAULT_EXECUTABLE_DIRS = (Path("/usr/local/bin"), Path("/usr/bin"), Path("/bin"))

# Environment variables that override individual paths
ENV_OVERRIDES = {
    "storage_root": "UIR_STORAGE_ROOT",
    "config_root": "UIR_CONFIG_ROOT",
    "temp_root": "UIR_TEMP_ROOT",
    "link_dir": "UIR_LINK_DIR",
}

SETTINGS_ENV = "UIR_SETTINGS"
SETTINGS_FILENAME = "uir.yaml"
REGISTRY_FILENAME = "installed.json"
LOCK_FILENAME = "installed.lock"


@dataclass
class UirConfig:
    """Configuration for the uir package manager."""

    storage_root: Path = DEFAULT_STORAGE_ROOT
    config_root: Path = DEFAULT_CONFIG_ROOT
    temp_root: Path = DEFAULT_TEMP_ROOT
    link_dir: Path = DEFAULT_LINK_DIR
    executable_dirs: tuple[Path, ...] = field(default=DEFAULT_EXECUTABLE_DIRS)

    def __post_init__(self):
        self.storage_root = Path(self.storage_root)
        self.config_root = Path(self.config_root)
        self.temp_root = Path(self.temp_root)
        self.link_dir = Path(self.link_dir)
        self.executable_dirs = tuple(Path(p) for p in self.executable_dirs)

    @property
    def registry_path(self) -> Path:
        return self.config_root / REGISTRY_FILENAME

    @property
    def lock_path(self) -> Path:
        return self.config_root / LOCK_FILENAME

    @property
    def staging_dir(self) -> Path:
        return self.temp_root / "install"

    def package_dir(self, name: str) -> Path:
        """Private storage directory for a package."""
        if not is_valid_package_name(name):
            raise InvalidPackageName(f"Invalid package name {name!r}")
        return self.storage_root / name

    @classmethod
    def default(cls) -> "UirConfig":
        """Create config from defaults, the settings file and the environment."""
        values: dict = {}

        config_root = Path(os.environ.get("UIR_CONFIG_ROOT", DEFAULT_CONFIG_ROOT))
        settings_path = Path(os.environ.get(SETTINGS_ENV, config_root / SETTINGS_FILENAME))
        values.update(load_settings(settings_path))

        for name, env_var in ENV_OVERRIDES.items():
            if env_var in os.environ:
                values[name] = os.environ[env_var]

        return cls(**values)

    def to_env(self) -> dict[str, str]:
        """Environment variables that reproduce this config in a child process."""
        return {env_var: str(getattr(self, name)) for name, env_var in ENV_OVERRIDES.items()}


def load_settings(path: Path) -> dict:
    """Load path overrides from a YAML settings file.

    A missing file yields no overrides.
    """
    if not path.exists():
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        raise ConfigError(f"Failed to read settings file {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")

    known = {f.name for f in fields(UirConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(
            f"Unknown settings in {path}: {', '.join(sorted(unknown))}"
        )

    return data


# Global config instance
_config: UirConfig | None = None


def get_config() -> UirConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = UirConfig.default()
    return _config


def set_config(config: UirConfig | None) -> None:
    """Set a custom configuration (useful for testing)."""
    global _config
    _config = config
