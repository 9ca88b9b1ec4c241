from __future__ import annotations

from pathlib import Path

import typer

from boxer.cli.commands._helpers import exit_on_error
from boxer.cli.context import build_context
from boxer.core.config import DEFAULT_CONFIG_FILE, NO_CONFIG_FILE, ConfigOverrides, resolve_config
from boxer.output.console import Style
from boxer.services.release import ReleaseService


def package(
    config_file: str = typer.Option(
        DEFAULT_CONFIG_FILE,
        "--config-file",
        help=f"Boxer config (.json or .toml); '{NO_CONFIG_FILE}' to use CLI values only",
    ),
    metadata_file: Path | None = typer.Option(
        None, "--metadata-file", help="Catalog file (default: metadata.json)"
    ),
    base: str | None = typer.Option(None, "--base", help="VM name to package"),
    major_version: str | None = typer.Option(
        None, "--major-version", help="Major-version line, e.g. 1.0"
    ),
    url: str | None = typer.Option(None, "--url", help="Full download URL template"),
    url_prefix: str | None = typer.Option(None, "--url-prefix", help="Download URL prefix"),
    url_suffix: str | None = typer.Option(None, "--url-suffix", help="Download URL suffix"),
    provider: str | None = typer.Option(None, "--provider", help="Provider (default: virtualbox)"),
    checksum_type: str | None = typer.Option(
        None, "--checksum-type", help="md5|sha1|sha256|sha512 (default: sha1)"
    ),
    vagrant: str | None = typer.Option(None, "--vagrant", help="Path to the vagrant executable"),
    vagrant_output: Path | None = typer.Option(
        None, "--vagrant-output-file", help="vagrant package output (default: package.box)"
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", help="Directory for the versioned box file"
    ),
    bump_version: bool = typer.Option(False, "--bump-version", help="Advance the patch number"),
    keep_package: bool = typer.Option(
        False, "--keep-package", help="Reuse an existing vagrant output instead of repackaging"
    ),
    force_metadata: bool = typer.Option(
        False, "--force-metadata", help="Rewrite the catalog even if unchanged"
    ),
    upload: bool | None = typer.Option(
        None, "--upload/--no-upload", help="Upload the box and catalog when done"
    ),
    upload_destination: str | None = typer.Option(
        None, "--upload-destination", help="Remote destination, e.g. host:/srv/boxes/"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be released"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show commands and file moves"),
) -> None:
    """Package a VM as a versioned box and record it in the catalog."""
    ctx = build_context(verbose=verbose)

    overrides = ConfigOverrides(
        config_file=config_file,
        metadata_file=metadata_file,
        base=base,
        major_version=major_version,
        url=url,
        url_prefix=url_prefix,
        url_suffix=url_suffix,
        provider=provider,
        checksum_type=checksum_type,
        vagrant=vagrant,
        vagrant_output=vagrant_output,
        output_dir=output_dir,
        bump_version=bump_version,
        keep_package=keep_package,
        force_metadata=force_metadata,
        upload=upload,
        upload_destination=upload_destination,
        dry_run=dry_run,
    )
    config = exit_on_error(resolve_config(overrides), ctx)
    if config_file != NO_CONFIG_FILE and config.config_source is None:
        ctx.console.warning(f"No {config_file} (current dir: {ctx.cwd}), using defaults")

    service = ReleaseService(config=config, console=ctx.console, cwd=ctx.cwd)
    report = exit_on_error(service.run(), ctx)
    plan = report.plan

    if plan.previous_version is not None and plan.previous_version != plan.version:
        ctx.console.print(f"version: {plan.previous_version} -> {plan.version}", Style.INFO)
    else:
        ctx.console.print(f"version: {plan.version}", Style.INFO)
    ctx.console.print(f"url: {plan.url}", Style.DIM)

    if config.dry_run:
        ctx.console.info(f"dry run: would package {config.vm_name} as {plan.box_name}")
        return

    if report.metadata_written:
        ctx.console.success(str(config.metadata_file))
    if report.box_path is not None:
        ctx.console.success(str(report.box_path))
    if report.uploaded:
        ctx.console.success(f"uploaded to {config.upload_destination}")
