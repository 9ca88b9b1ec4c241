"""Typed configuration loading and resolution.

A release run is driven by one immutable ``BoxerConfig``. It is built once by
``resolve_config`` from the optional boxer config file (``boxer.json`` or a
``.toml`` file) with command-line overrides layered on top, and is never
mutated afterwards.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .errors import BoxerError
from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_scalar_str, get_str, get_str_list

__all__ = [
    "BoxerConfig",
    "ConfigOverrides",
    "CHECKSUM_TYPES",
    "DEFAULT_CONFIG_FILE",
    "NO_CONFIG_FILE",
    "load_config_file",
    "resolve_config",
]

DEFAULT_CONFIG_FILE = "boxer.json"
NO_CONFIG_FILE = "default"
DEFAULT_METADATA_FILE = "metadata.json"
DEFAULT_VAGRANT = "vagrant"
DEFAULT_VAGRANT_OUTPUT = "package.box"
DEFAULT_URL_PREFIX = "http://localhost/"
DEFAULT_URL_SUFFIX = "{name}-{version}-{provider}.box"
DEFAULT_MAJOR_VERSION = "0"
DEFAULT_PROVIDER = "virtualbox"
DEFAULT_CHECKSUM_TYPE = "sha1"
DEFAULT_UPLOAD_COMMAND: tuple[str, ...] = ("scp",)

CHECKSUM_TYPES = ("md5", "sha1", "sha256", "sha512")


@dataclass(frozen=True, slots=True)
class BoxerConfig:
    """Effective settings for one release run.

    Attributes:
        release_name: Catalog ``name`` and the ``{name}`` URL placeholder.
        vm_name: VM passed to ``vagrant package --base``.
        major_version: Major-version line, e.g. ``"1.0"``.
        url_template: Download URL template with ``{name}``-style placeholders.
        provider: Provider kind recorded in the catalog (``virtualbox``...).
        config_source: Config file the values came from, None for CLI-only runs.
    """

    release_name: str
    vm_name: str
    major_version: str = DEFAULT_MAJOR_VERSION
    url_template: str = DEFAULT_URL_PREFIX + DEFAULT_URL_SUFFIX
    provider: str = DEFAULT_PROVIDER
    checksum_type: str = DEFAULT_CHECKSUM_TYPE
    metadata_file: Path = Path(DEFAULT_METADATA_FILE)
    vagrant: str = DEFAULT_VAGRANT
    vagrant_output: Path = Path(DEFAULT_VAGRANT_OUTPUT)
    output_dir: Path = Path(".")
    bump_version: bool = False
    keep_package: bool = False
    force_metadata: bool = False
    upload_enabled: bool = False
    upload_destination: str | None = None
    upload_command: tuple[str, ...] = DEFAULT_UPLOAD_COMMAND
    dry_run: bool = False
    config_source: Path | None = None


@dataclass(frozen=True, slots=True)
class ConfigOverrides:
    """Values given on the command line; None means "not given"."""

    config_file: str = DEFAULT_CONFIG_FILE
    metadata_file: Path | None = None
    base: str | None = None
    major_version: str | None = None
    url: str | None = None
    url_prefix: str | None = None
    url_suffix: str | None = None
    provider: str | None = None
    checksum_type: str | None = None
    vagrant: str | None = None
    vagrant_output: Path | None = None
    output_dir: Path | None = None
    bump_version: bool = False
    keep_package: bool = False
    force_metadata: bool = False
    upload: bool | None = None
    upload_destination: str | None = None
    dry_run: bool = False


def load_config_file(path: Path) -> Result[StrDict | None, BoxerError]:
    """Read a boxer config file.

    Returns:
        Ok(None) when the file does not exist, Ok(table) when it parses to an
        object, Err(BoxerError) otherwise.
    """
    import tomllib

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Ok(None)
    except (OSError, UnicodeDecodeError) as e:
        return Err(BoxerError("io_failure", f"Error reading config: {e}", path=path))

    try:
        data_obj: object = tomllib.loads(raw) if path.suffix == ".toml" else json.loads(raw)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        return Err(BoxerError("invalid_input", f"Invalid syntax in {path}: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(
            BoxerError(
                "invalid_input",
                f"{path} must contain an object configuration",
                path=path,
            )
        )
    return Ok(data)


def _url_template(
    file_data: Mapping[str, object] | None,
    overrides: ConfigOverrides,
    config_path: Path | None,
) -> Result[str, BoxerError]:
    """Pick the download URL template.

    ``--url`` wins outright. A ``--url-prefix`` or ``--url-suffix`` on the
    command line replaces the file's ``url-template``; the missing half comes
    from ``download-url-prefix`` or the defaults.
    """
    if overrides.url is not None:
        return Ok(overrides.url)

    table: Mapping[str, object] = file_data or {}
    file_prefix = get_str(table, "download-url-prefix")

    if overrides.url_prefix is not None or overrides.url_suffix is not None:
        prefix = overrides.url_prefix
        if prefix is None:
            prefix = file_prefix if file_prefix is not None else DEFAULT_URL_PREFIX
        suffix = DEFAULT_URL_SUFFIX if overrides.url_suffix is None else overrides.url_suffix
        return Ok(prefix + suffix)

    if file_data is None:
        return Ok(DEFAULT_URL_PREFIX + DEFAULT_URL_SUFFIX)

    template = get_str(file_data, "url-template")
    if template is not None:
        return Ok(template)

    if file_prefix is None:
        return Err(
            BoxerError(
                "invalid_input",
                f"Neither url-template nor download-url-prefix is defined in {config_path}",
                path=config_path,
            )
        )
    return Ok(file_prefix + DEFAULT_URL_SUFFIX)


def resolve_config(overrides: ConfigOverrides) -> Result[BoxerConfig, BoxerError]:
    """Build the effective configuration for a run.

    Command-line values win over config file values. Without a config file
    the ``--base`` option is mandatory.
    """
    file_data: StrDict | None = None
    config_path: Path | None = None
    if overrides.config_file != NO_CONFIG_FILE:
        config_path = Path(overrides.config_file)
        loaded = load_config_file(config_path)
        if isinstance(loaded, Err):
            return loaded
        file_data = loaded.value
        if file_data is None:
            config_path = None

    table: Mapping[str, object] = file_data or {}

    if file_data is not None:
        release_name = get_str(table, "vm-name")
        if release_name is None:
            return Err(
                BoxerError(
                    "invalid_input",
                    f"{config_path} does not define a vm-name",
                    path=config_path,
                )
            )
        vm_name = overrides.base or get_str(table, "base") or release_name
    else:
        if overrides.base is None:
            return Err(
                BoxerError(
                    "missing_argument",
                    "--base is required when no boxer config file is used",
                    hint=f"Pass --base <vm-name> or create {DEFAULT_CONFIG_FILE}",
                )
            )
        release_name = overrides.base
        vm_name = overrides.base

    url_template = _url_template(file_data, overrides, config_path)
    if isinstance(url_template, Err):
        return url_template

    checksum_type = (
        overrides.checksum_type or get_str(table, "checksum-type") or DEFAULT_CHECKSUM_TYPE
    ).lower()
    if checksum_type not in CHECKSUM_TYPES:
        return Err(
            BoxerError(
                "invalid_input",
                f"Unsupported checksum type: {checksum_type}",
                hint=f"Use one of: {', '.join(CHECKSUM_TYPES)}",
            )
        )

    upload_command = get_str_list(table, "upload-command")
    if "upload-command" in table and not upload_command:
        return Err(
            BoxerError(
                "invalid_input",
                f"upload-command in {config_path} must be a non-empty list of strings",
                path=config_path,
            )
        )

    upload_enabled = overrides.upload
    if upload_enabled is None:
        upload_enabled = get_bool(table, "upload") or False

    return Ok(
        BoxerConfig(
            release_name=release_name,
            vm_name=vm_name,
            major_version=overrides.major_version
            or get_scalar_str(table, "version")
            or DEFAULT_MAJOR_VERSION,
            url_template=url_template.value,
            provider=overrides.provider or get_str(table, "provider") or DEFAULT_PROVIDER,
            checksum_type=checksum_type,
            metadata_file=overrides.metadata_file or Path(DEFAULT_METADATA_FILE),
            vagrant=overrides.vagrant or DEFAULT_VAGRANT,
            vagrant_output=overrides.vagrant_output or Path(DEFAULT_VAGRANT_OUTPUT),
            output_dir=overrides.output_dir or Path("."),
            bump_version=overrides.bump_version,
            keep_package=overrides.keep_package,
            force_metadata=overrides.force_metadata,
            upload_enabled=upload_enabled,
            upload_destination=overrides.upload_destination
            or get_str(table, "upload-destination"),
            upload_command=tuple(upload_command) if upload_command else DEFAULT_UPLOAD_COMMAND,
            dry_run=overrides.dry_run,
            config_source=config_path,
        )
    )
