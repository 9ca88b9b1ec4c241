from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from boxer import __version__
from boxer.cli.app import app
from boxer.cli.context import CLIContext
from boxer.core.errors import ErrorCode
from boxer.core.result import Err, Ok, Result
from boxer.output.console import MockConsole
from boxer.platform.process import ProcessError

runner = CliRunner()


@pytest.fixture
def console(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> MockConsole:
    import boxer.cli.commands.package as package_cmd
    import boxer.cli.commands.versions as versions_cmd

    mock = MockConsole()
    ctx = CLIContext(cwd=tmp_path, console=mock)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(package_cmd, "build_context", lambda **_: ctx)
    monkeypatch.setattr(versions_cmd, "build_context", lambda **_: ctx)
    return mock


def _fake_vagrant(returncode: int = 0):  # type: ignore[no-untyped-def]
    def run_silent(cmd: list[str], cwd: Path, env: object = None) -> Result[None, ProcessError]:
        if returncode != 0:
            return Err(ProcessError(tuple(cmd), returncode, "", ""))
        (cwd / cmd[cmd.index("--output") + 1]).write_bytes(b"box")
        return Ok(None)

    return run_silent


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_package_requires_base_without_config(console: MockConsole) -> None:
    result = runner.invoke(app, ["package", "--config-file", "default"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert console.find("--base is required")


def test_package_warns_about_missing_config(
    console: MockConsole, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import boxer.services.packager as packager

    monkeypatch.setattr(packager, "run_silent", _fake_vagrant())

    result = runner.invoke(app, ["package", "--base", "dev", "--bump-version"])

    assert result.exit_code == 0
    assert console.find("No boxer.json")
    assert console.find("version: 0.1")
    assert (tmp_path / "dev-0.1-virtualbox.box").exists()
    metadata = json.loads((tmp_path / "metadata.json").read_text(encoding="utf-8"))
    assert metadata["name"] == "dev"
    assert metadata["versions"][0]["version"] == "0.1"


def test_package_with_config_file(
    console: MockConsole, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import boxer.services.packager as packager

    monkeypatch.setattr(packager, "run_silent", _fake_vagrant())
    (tmp_path / "boxer.json").write_text(
        json.dumps(
            {
                "vm-name": "vube/dev",
                "base": "dev",
                "version": "2.1",
                "download-url-prefix": "https://boxes.example.com/",
            }
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["package"])

    assert result.exit_code == 0
    assert not console.find("No boxer.json")
    assert (tmp_path / "dev-2.1.0-virtualbox.box").exists()


def test_package_invalid_metadata_exit_code(console: MockConsole, tmp_path: Path) -> None:
    (tmp_path / "metadata.json").write_text('{"versions": 3}', encoding="utf-8")

    result = runner.invoke(app, ["package", "--base", "dev"])

    assert result.exit_code == int(ErrorCode.INPUT_ERROR)
    assert console.has_error()


def test_package_vagrant_failure_exit_code(
    console: MockConsole, monkeypatch: pytest.MonkeyPatch
) -> None:
    import boxer.services.packager as packager

    monkeypatch.setattr(packager, "run_silent", _fake_vagrant(returncode=1))

    result = runner.invoke(app, ["package", "--base", "dev"])

    assert result.exit_code == int(ErrorCode.TOOL_ERROR)
    assert console.find("release aborted at stage: version_computed")


def test_package_dry_run(console: MockConsole, tmp_path: Path) -> None:
    result = runner.invoke(app, ["package", "--base", "dev", "--dry-run"])

    assert result.exit_code == 0
    assert console.find("dry run: would package dev as dev-0.0-virtualbox.box")
    assert not (tmp_path / "metadata.json").exists()


def test_versions_lists_catalog(console: MockConsole, tmp_path: Path) -> None:
    (tmp_path / "metadata.json").write_text(
        json.dumps(
            {
                "name": "vube/dev",
                "versions": [
                    {
                        "version": "1.0.1",
                        "providers": [
                            {
                                "name": "virtualbox",
                                "url": "https://x/1.0.1.box",
                                "checksum_type": "sha1",
                                "checksum": "abc",
                            }
                        ],
                    },
                    {"version": "1.0.0", "providers": []},
                ],
            }
        ),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["versions"])

    assert result.exit_code == 0
    assert "1.0.1 (active)" in console.messages
    assert "1.0.0" in console.messages
    assert console.find("virtualbox: https://x/1.0.1.box (sha1 abc)")


def test_versions_without_catalog(console: MockConsole) -> None:
    result = runner.invoke(app, ["versions"])

    assert result.exit_code == 0
    assert console.find("No metadata.json found")
