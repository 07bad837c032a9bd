"""Tests for configuration loading."""

from pathlib import Path

import pytest

from uir.core.config import UirConfig, get_config, load_settings, set_config
from uir.core.errors import ConfigError, InvalidPackageName


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("UIR_STORAGE_ROOT", "UIR_CONFIG_ROOT", "UIR_TEMP_ROOT", "UIR_LINK_DIR", "UIR_SETTINGS"):
        monkeypatch.delenv(var, raising=False)
    set_config(None)
    yield
    set_config(None)


class TestUirConfig:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setenv("UIR_SETTINGS", str(tmp_path / "absent.yaml"))
        config = UirConfig.default()

        assert config.storage_root == Path("/uir_packages")
        assert config.registry_path == Path("/etc/uir/installed.json")
        assert config.staging_dir == Path("/tmp/uir_temp/install")
        assert config.link_dir == Path("/usr/local/bin")
        assert Path("/usr/bin") in config.executable_dirs
        assert config.package_dir("foo") == Path("/uir_packages/foo")

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("UIR_CONFIG_ROOT", str(tmp_path / "etc"))
        monkeypatch.setenv("UIR_LINK_DIR", str(tmp_path / "bin"))

        config = UirConfig.default()

        assert config.registry_path == tmp_path / "etc" / "installed.json"
        assert config.link_dir == tmp_path / "bin"

    def test_settings_file_in_config_root(self, monkeypatch, tmp_path):
        (tmp_path / "uir.yaml").write_text(
            f"storage_root: {tmp_path / 'pkgs'}\nexecutable_dirs:\n  - {tmp_path / 'bin'}\n"
        )
        monkeypatch.setenv("UIR_CONFIG_ROOT", str(tmp_path))

        config = UirConfig.default()

        assert config.storage_root == tmp_path / "pkgs"
        assert config.executable_dirs == (tmp_path / "bin",)

    def test_environment_beats_settings_file(self, monkeypatch, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text(f"temp_root: {tmp_path / 'from_file'}\n")
        monkeypatch.setenv("UIR_SETTINGS", str(settings))
        monkeypatch.setenv("UIR_TEMP_ROOT", str(tmp_path / "from_env"))

        assert UirConfig.default().temp_root == tmp_path / "from_env"

    def test_to_env_round_trip(self, monkeypatch, tmp_path):
        original = UirConfig(
            storage_root=tmp_path / "s",
            config_root=tmp_path / "c",
            temp_root=tmp_path / "t",
            link_dir=tmp_path / "l",
        )
        for key, value in original.to_env().items():
            monkeypatch.setenv(key, value)

        restored = UirConfig.default()

        assert restored.storage_root == original.storage_root
        assert restored.config_root == original.config_root
        assert restored.temp_root == original.temp_root
        assert restored.link_dir == original.link_dir

    def test_get_config_is_cached(self, monkeypatch, tmp_path):
        monkeypatch.setenv("UIR_CONFIG_ROOT", str(tmp_path))
        assert get_config() is get_config()


class TestLoadSettings:
    def test_missing_file(self, tmp_path):
        assert load_settings(tmp_path / "nope.yaml") == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "uir.yaml"
        path.write_text("")
        assert load_settings(path) == {}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "uir.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "uir.yaml"
        path.write_text("key: [unclosed\n")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "uir.yaml"
        path.write_text("colour: blue\n")
        with pytest.raises(ConfigError, match="colour"):
            load_settings(path)


class TestPackageDir:
    @pytest.mark.parametrize("name", ["", ".", "..", "/usr", "a/b", "../x"])
    def test_rejects_names_outside_storage_root(self, tmp_path, name):
        config = UirConfig(storage_root=tmp_path / "pkgs")
        with pytest.raises(InvalidPackageName):
            config.package_dir(name)

    def test_plain_name(self, tmp_path):
        config = UirConfig(storage_root=tmp_path / "pkgs")
        assert config.package_dir("foo-1.2_x") == tmp_path / "pkgs" / "foo-1.2_x"
