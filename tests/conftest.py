"""Shared fixtures: an isolated uir layout under tmp_path and archive builders."""

import io
import json
import tarfile
from pathlib import Path

import pytest
from rich.console import Console

from uir.core.config import UirConfig, set_config
from uir.core.lifecycle import Lifecycle


@pytest.fixture
def config(tmp_path: Path) -> UirConfig:
    """Config with every root relocated under tmp_path."""
    root = tmp_path / "system"
    cfg = UirConfig(
        storage_root=root / "uir_packages",
        config_root=root / "etc" / "uir",
        temp_root=root / "tmp" / "uir_temp",
        link_dir=root / "usr" / "local" / "bin",
        executable_dirs=(root / "usr" / "local" / "bin", root / "usr" / "bin", root / "bin"),
    )
    set_config(cfg)
    yield cfg
    set_config(None)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def lifecycle(config: UirConfig, output: io.StringIO) -> Lifecycle:
    console = Console(file=output, width=200, color_system=None)
    return Lifecycle(config=config, console=console, is_privileged=lambda: True)


@pytest.fixture
def make_archive(tmp_path: Path):
    """Build a .uir archive from a manifest dict and a {relative path: content} map."""

    def _make(
        manifest: dict,
        files: dict[str, str] | None = None,
        filename: str | None = None,
        modes: dict[str, int] | None = None,
    ) -> Path:
        source = tmp_path / "build" / f"{manifest.get('name', 'pkg')}-{manifest.get('version', '0')}"
        source.mkdir(parents=True, exist_ok=True)
        (source / "set.conf").write_text(json.dumps(manifest))

        for rel, content in (files or {}).items():
            path = source / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
            path.chmod((modes or {}).get(rel, 0o644))

        archive = tmp_path / (filename or f"{source.name}.uir")
        with tarfile.open(archive, "w:gz") as tar:
            for item in sorted(source.iterdir()):
                tar.add(item, arcname=item.name)
        return archive

    return _make


@pytest.fixture
def foo_archive(config: UirConfig, make_archive):
    """foo 1.0.0 placing bin/foo into the executable directory and linking bin/foo-cli."""
    return make_archive(
        {
            "name": "foo",
            "version": "1.0.0",
            "description": "Foo tool",
            "arch": "amd64",
            "install_paths": {
                "bin/foo": str(config.link_dir / "foo"),
                "share/foo.conf": str(config.storage_root.parent / "etc" / "foo.conf"),
            },
            "bin_links": {"bin/foo-cli": "foo-cli"},
            "dependencies": ["libbar"],
        },
        files={
            "bin/foo": "#!/bin/sh\necho foo\n",
            "bin/foo-cli": "#!/bin/sh\necho cli\n",
            "share/foo.conf": "key=value\n",
        },
    )
