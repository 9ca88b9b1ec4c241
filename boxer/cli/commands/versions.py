from __future__ import annotations

from pathlib import Path

import typer

from boxer.cli.commands._helpers import exit_on_error
from boxer.cli.context import build_context
from boxer.core.config import DEFAULT_METADATA_FILE
from boxer.output.console import Style
from boxer.services.catalog import Catalog, LoadResult


def versions(
    metadata_file: Path = typer.Option(
        Path(DEFAULT_METADATA_FILE), "--metadata-file", help="Catalog file to list"
    ),
) -> None:
    """List the versions and providers recorded in a catalog."""
    ctx = build_context()

    catalog = Catalog(release_name="")
    loaded = exit_on_error(catalog.load(ctx.cwd / metadata_file), ctx)
    if loaded == LoadResult.DEFAULT:
        ctx.console.info(f"No {metadata_file} found (current dir: {ctx.cwd})")
        return

    active = exit_on_error(catalog.get_active_version_number(), ctx)
    ctx.console.header(str(metadata_file))
    for record in catalog.versions():
        marker = " (active)" if record.version == active else ""
        ctx.console.print(f"{record.version}{marker}", Style.DEFAULT)
        for p in record.providers:
            ctx.console.print(f"  {p.name}: {p.url} ({p.checksum_type} {p.checksum})", Style.DIM)
