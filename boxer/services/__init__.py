"""Application services for the boxer CLI.

Services implement the release logic, coordinating between the domain layer
(core/) and infrastructure (platform/).
"""

from boxer.services.catalog import Catalog, LoadResult, ProviderEntry, VersionRecord
from boxer.services.release import ReleasePlan, ReleaseReport, ReleaseService, ReleaseStage
from boxer.services.version import box_filename, bump_patch, compute_current_version, render_url

__all__ = [
    # catalog
    "Catalog",
    "LoadResult",
    "ProviderEntry",
    "VersionRecord",
    # release
    "ReleasePlan",
    "ReleaseReport",
    "ReleaseService",
    "ReleaseStage",
    # version
    "box_filename",
    "bump_patch",
    "compute_current_version",
    "render_url",
]
