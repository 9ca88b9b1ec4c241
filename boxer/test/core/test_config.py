"""Tests for boxer.core.config module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from boxer.core.config import (
    BoxerConfig,
    ConfigOverrides,
    load_config_file,
    resolve_config,
)
from boxer.core.result import Err, Ok


def _write_config(tmp_path: Path, data: object, name: str = "boxer.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadConfigFile:
    def test_missing_file_is_none(self, tmp_path: Path) -> None:
        result = load_config_file(tmp_path / "boxer.json")
        assert result == Ok(None)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "boxer.json"
        path.write_text("not valid json file", encoding="utf-8")

        result = load_config_file(path)

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"
        assert result.error.path == path

    def test_root_must_be_object(self, tmp_path: Path) -> None:
        result = load_config_file(_write_config(tmp_path, ["vm-name"]))

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"

    def test_toml_by_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "boxer.toml"
        path.write_text('vm-name = "vube/dev"\nversion = "1.2"\n', encoding="utf-8")

        result = load_config_file(path)

        assert isinstance(result, Ok)
        assert result.value == {"vm-name": "vube/dev", "version": "1.2"}


class TestResolveConfig:
    def test_cli_only_requires_base(self) -> None:
        result = resolve_config(ConfigOverrides(config_file="default"))

        assert isinstance(result, Err)
        assert result.error.kind == "missing_argument"

    def test_cli_only_defaults(self) -> None:
        result = resolve_config(ConfigOverrides(config_file="default", base="basename"))

        assert isinstance(result, Ok)
        config = result.value
        assert config.release_name == "basename"
        assert config.vm_name == "basename"
        assert config.major_version == "0"
        assert config.url_template == "http://localhost/{name}-{version}-{provider}.box"
        assert config.provider == "virtualbox"
        assert config.checksum_type == "sha1"
        assert config.metadata_file == Path("metadata.json")
        assert config.upload_enabled is False
        assert config.config_source is None

    def test_missing_config_file_falls_back_to_cli(self, tmp_path: Path) -> None:
        overrides = ConfigOverrides(config_file=str(tmp_path / "nope.json"), base="basename")

        result = resolve_config(overrides)

        assert isinstance(result, Ok)
        assert result.value.config_source is None
        assert result.value.release_name == "basename"

    def test_cli_url_prefix_and_suffix(self) -> None:
        overrides = ConfigOverrides(
            config_file="default",
            base="b",
            url_prefix="https://boxes.example.com/",
            url_suffix="{version}/{provider}.box",
        )

        result = resolve_config(overrides)

        assert isinstance(result, Ok)
        assert result.value.url_template == "https://boxes.example.com/{version}/{provider}.box"

    def test_file_values(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path,
            {
                "vm-name": "vube/dev",
                "version": 1,
                "url-template": "https://x/{{name}}/{{version}}.box",
                "provider": "vmware_desktop",
                "checksum-type": "SHA256",
                "upload": True,
                "upload-destination": "host:/srv/boxes/",
                "upload-command": ["rsync", "-av"],
            },
        )

        result = resolve_config(ConfigOverrides(config_file=str(path)))

        assert isinstance(result, Ok)
        config = result.value
        assert config.release_name == "vube/dev"
        assert config.vm_name == "vube/dev"
        assert config.major_version == "1"
        assert config.url_template == "https://x/{{name}}/{{version}}.box"
        assert config.provider == "vmware_desktop"
        assert config.checksum_type == "sha256"
        assert config.upload_enabled is True
        assert config.upload_destination == "host:/srv/boxes/"
        assert config.upload_command == ("rsync", "-av")
        assert config.config_source == path

    def test_cli_overrides_file(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path,
            {"vm-name": "vube/dev", "version": "1.0", "url-template": "x", "upload": True},
        )
        overrides = ConfigOverrides(
            config_file=str(path),
            base="dev-vm",
            major_version="2.0",
            url="https://y/{name}.box",
            upload=False,
        )

        result = resolve_config(overrides)

        assert isinstance(result, Ok)
        config = result.value
        assert config.release_name == "vube/dev"
        assert config.vm_name == "dev-vm"
        assert config.major_version == "2.0"
        assert config.url_template == "https://y/{name}.box"
        assert config.upload_enabled is False

    def test_cli_url_prefix_replaces_file_template(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path, {"vm-name": "v", "url-template": "http://old/{name}.box"}
        )

        result = resolve_config(ConfigOverrides(config_file=str(path), url_prefix="https://cdn/"))

        assert isinstance(result, Ok)
        assert result.value.url_template == "https://cdn/{name}-{version}-{provider}.box"

    def test_cli_url_suffix_keeps_file_prefix(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, {"vm-name": "v", "download-url-prefix": "https://boxes/"})

        result = resolve_config(
            ConfigOverrides(config_file=str(path), url_suffix="{version}/{provider}.box")
        )

        assert isinstance(result, Ok)
        assert result.value.url_template == "https://boxes/{version}/{provider}.box"

    def test_empty_cli_url_prefix_counts(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, {"vm-name": "v", "download-url-prefix": "https://boxes/"})

        result = resolve_config(ConfigOverrides(config_file=str(path), url_prefix=""))

        assert isinstance(result, Ok)
        assert result.value.url_template == "{name}-{version}-{provider}.box"

    def test_download_url_prefix(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path, {"vm-name": "vube/dev", "download-url-prefix": "https://boxes/"}
        )

        result = resolve_config(ConfigOverrides(config_file=str(path)))

        assert isinstance(result, Ok)
        assert result.value.url_template == "https://boxes/{name}-{version}-{provider}.box"

    def test_file_requires_vm_name(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, {"url-template": "x"})

        result = resolve_config(ConfigOverrides(config_file=str(path)))

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"
        assert "vm-name" in result.error.message

    def test_file_requires_some_url(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, {"vm-name": "vube/dev"})

        result = resolve_config(ConfigOverrides(config_file=str(path)))

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"

    def test_unknown_checksum_type(self) -> None:
        overrides = ConfigOverrides(config_file="default", base="b", checksum_type="crc32")

        result = resolve_config(overrides)

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"

    def test_bad_upload_command(self, tmp_path: Path) -> None:
        path = _write_config(
            tmp_path, {"vm-name": "v", "url-template": "x", "upload-command": "scp"}
        )

        result = resolve_config(ConfigOverrides(config_file=str(path)))

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_input"


def test_config_is_frozen() -> None:
    config = BoxerConfig(release_name="a", vm_name="a")
    with pytest.raises(AttributeError):
        config.bump_version = True  # type: ignore[misc]
