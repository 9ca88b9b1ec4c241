"""Release orchestration: one linear run from config to upload.

    START -> CONFIG_RESOLVED -> CATALOG_LOADED -> VERSION_COMPUTED -> PACKAGED
          -> CHECKSUMMED -> CATALOG_UPDATED -> CATALOG_PERSISTED
          -> UPLOADED | UPLOAD_SKIPPED -> DONE

Any failure aborts the run at the stage reached; there is no resumption.
Re-running is safe: an unchanged catalog is not rewritten, and
``keep_package`` reuses a box left by an earlier run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from boxer.core.config import BoxerConfig
from boxer.core.errors import BoxerError
from boxer.core.result import Err, Ok, Result
from boxer.output.console import ConsoleProtocol
from boxer.services.catalog import Catalog, LoadResult, ProviderEntry
from boxer.services.packager import check_box_output, checksum_box, package_box, stage_box
from boxer.services.upload import transfer_files
from boxer.services.version import box_filename, bump_patch, compute_current_version, render_url

__all__ = ["ReleasePlan", "ReleaseReport", "ReleaseService", "ReleaseStage"]


class ReleaseStage(Enum):
    START = "start"
    CONFIG_RESOLVED = "config_resolved"
    CATALOG_LOADED = "catalog_loaded"
    VERSION_COMPUTED = "version_computed"
    PACKAGED = "packaged"
    CHECKSUMMED = "checksummed"
    CATALOG_UPDATED = "catalog_updated"
    CATALOG_PERSISTED = "catalog_persisted"
    UPLOADED = "uploaded"
    UPLOAD_SKIPPED = "upload_skipped"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    """What a run is going to publish, known before anything is built."""

    version: str
    previous_version: str | None
    url: str
    box_name: str


@dataclass(frozen=True, slots=True)
class ReleaseReport:
    plan: ReleasePlan
    stage: ReleaseStage
    box_path: Path | None = None
    checksum: str | None = None
    num_versions: int = 0
    metadata_written: bool = False
    uploaded: bool = False


class ReleaseService:
    """Drives the catalog, version calculator and external tools for one run."""

    def __init__(
        self,
        *,
        config: BoxerConfig,
        console: ConsoleProtocol,
        cwd: Path | None = None,
    ) -> None:
        self._config = config
        self._console = console
        self._cwd = cwd or Path.cwd()
        self._catalog = Catalog(config.release_name)
        self._stage = ReleaseStage.START

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def stage(self) -> ReleaseStage:
        return self._stage

    def _path(self, path: Path) -> Path:
        return path if path.is_absolute() else self._cwd / path

    def _fail(self, error: BoxerError) -> Err[BoxerError]:
        return Err(error.at_stage(str(self._stage)))

    def _advance(self, stage: ReleaseStage) -> None:
        self._stage = stage
        self._console.debug(f"stage: {stage}")

    # -------------------------------------------------------------------------
    # Planning
    # -------------------------------------------------------------------------

    def plan(self) -> Result[ReleasePlan, BoxerError]:
        """Load the catalog and decide version, URL and box file name."""
        self._advance(ReleaseStage.CONFIG_RESOLVED)
        cfg = self._config
        metadata_path = self._path(cfg.metadata_file)

        loaded = self._catalog.load(metadata_path)
        if isinstance(loaded, Err):
            return self._fail(loaded.error)
        if loaded.value == LoadResult.DEFAULT:
            self._console.info(f"No {cfg.metadata_file} found (current dir: {self._cwd})")
        self._advance(ReleaseStage.CATALOG_LOADED)

        active = self._catalog.get_active_version_number()
        if isinstance(active, Err):
            return self._fail(active.error)

        version = compute_current_version(active.value, cfg.major_version)
        if cfg.bump_version:
            try:
                version = bump_patch(version)
            except ValueError:
                return self._fail(
                    BoxerError("invalid_input", f"Cannot bump non-numeric version: {version}")
                )

        url = render_url(
            cfg.url_template, name=cfg.release_name, version=version, provider=cfg.provider
        )
        self._advance(ReleaseStage.VERSION_COMPUTED)
        return Ok(
            ReleasePlan(
                version=version,
                previous_version=active.value,
                url=url,
                box_name=box_filename(
                    url, name=cfg.release_name, version=version, provider=cfg.provider
                ),
            )
        )

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def _package(self) -> Result[Path, BoxerError]:
        cfg = self._config
        checked = check_box_output(cfg.vagrant_output)
        if isinstance(checked, Err):
            return checked

        output = self._path(cfg.vagrant_output)
        if cfg.keep_package and output.is_file():
            self._console.info(f"Using existing {cfg.vagrant_output} due to --keep-package")
            return Ok(output)
        return package_box(
            vagrant=cfg.vagrant,
            vm_name=cfg.vm_name,
            output=cfg.vagrant_output,
            cwd=self._cwd,
            console=self._console,
        )

    def _upload(self, files: list[Path]) -> Result[bool, BoxerError]:
        cfg = self._config
        if not cfg.upload_enabled:
            self._console.info("Upload not enabled, skipping")
            return Ok(False)
        if cfg.upload_destination is None:
            self._console.warning("Upload enabled but no upload destination configured, skipping")
            return Ok(False)

        result = transfer_files(
            files,
            cfg.upload_destination,
            command=cfg.upload_command,
            cwd=self._cwd,
            console=self._console,
        )
        if isinstance(result, Err):
            return result
        return Ok(True)

    def run(self) -> Result[ReleaseReport, BoxerError]:
        """Execute the whole release pipeline."""
        cfg = self._config
        planned = self.plan()
        if isinstance(planned, Err):
            return planned
        plan = planned.value

        if cfg.dry_run:
            return Ok(
                ReleaseReport(
                    plan=plan,
                    stage=self._stage,
                    num_versions=self._catalog.num_versions,
                )
            )

        packaged = self._package()
        if isinstance(packaged, Err):
            return self._fail(packaged.error)

        box_path = self._path(cfg.output_dir) / plan.box_name
        staged = stage_box(packaged.value, box_path, self._console)
        if isinstance(staged, Err):
            return self._fail(staged.error)
        self._advance(ReleaseStage.PACKAGED)

        checksum = checksum_box(box_path, cfg.checksum_type)
        if isinstance(checksum, Err):
            return self._fail(checksum.error)
        self._advance(ReleaseStage.CHECKSUMMED)

        num_versions = self._catalog.add_version_provider(
            plan.version,
            ProviderEntry(
                name=cfg.provider,
                url=plan.url,
                checksum_type=cfg.checksum_type,
                checksum=checksum.value,
            ),
        )
        self._advance(ReleaseStage.CATALOG_UPDATED)

        metadata_path = self._path(cfg.metadata_file)
        saved = self._catalog.save(metadata_path, force=cfg.force_metadata)
        if isinstance(saved, Err):
            return self._fail(saved.error)
        if not saved.value:
            self._console.debug(f"{cfg.metadata_file} unchanged, not rewritten")
        self._advance(ReleaseStage.CATALOG_PERSISTED)

        uploaded = self._upload([box_path, metadata_path])
        if isinstance(uploaded, Err):
            return self._fail(uploaded.error)
        self._advance(ReleaseStage.UPLOADED if uploaded.value else ReleaseStage.UPLOAD_SKIPPED)

        self._advance(ReleaseStage.DONE)
        return Ok(
            ReleaseReport(
                plan=plan,
                stage=self._stage,
                box_path=box_path,
                checksum=checksum.value,
                num_versions=num_versions,
                metadata_written=saved.value,
                uploaded=uploaded.value,
            )
        )
