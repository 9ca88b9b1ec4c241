"""Version catalog backed by a Vagrant ``metadata.json`` file.

The catalog lists every published version of one box, newest first, with the
providers each version was built for:

    {
        "name": "vube/dev",
        "versions": [
            {
                "version": "1.0.1",
                "providers": [
                    {"name": "virtualbox", "url": "...", "checksum_type": "sha1", "checksum": "..."}
                ]
            }
        ]
    }

``versions[0]`` is always the active version. Every mutation site keeps that
ordering: a version not seen before is prepended, an existing one is updated in
place. The catalog tracks whether its content actually changed so that
``save`` can leave an untouched file (and its mtime) alone.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from boxer.core.errors import BoxerError
from boxer.core.result import Err, Ok, Result
from boxer.core.structured import StrDict, as_obj_list, as_str_dict, get_str
from boxer.platform.files import atomic_write_text

__all__ = ["Catalog", "LoadResult", "ProviderEntry", "VersionRecord"]


class LoadResult(Enum):
    DEFAULT = "default"  # No file on disk, defaults in use
    CUSTOM = "custom"  # Loaded from an existing file


@dataclass(frozen=True, slots=True)
class ProviderEntry:
    """One provider a version was published for."""

    name: str
    url: str
    checksum_type: str
    checksum: str

    def to_dict(self) -> StrDict:
        return {
            "name": self.name,
            "url": self.url,
            "checksum_type": self.checksum_type,
            "checksum": self.checksum,
        }

    @classmethod
    def from_dict(cls, data: StrDict) -> ProviderEntry:
        return cls(
            name=get_str(data, "name") or "",
            url=get_str(data, "url") or "",
            checksum_type=get_str(data, "checksum_type") or "",
            checksum=get_str(data, "checksum") or "",
        )


@dataclass(frozen=True, slots=True)
class VersionRecord:
    """Read-only view of one entry of ``versions``."""

    version: str
    providers: tuple[ProviderEntry, ...]


class Catalog:
    """In-memory catalog with value-based modification tracking."""

    def __init__(self, release_name: str) -> None:
        self._release_name = release_name
        self._data: StrDict = self._defaults()
        self._is_default = True
        self._modified = False

    def _defaults(self) -> StrDict:
        return {"name": self._release_name, "versions": []}

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_default(self) -> bool:
        """True until a real file has been loaded."""
        return self._is_default

    @property
    def is_modified(self) -> bool:
        return self._modified

    @property
    def num_versions(self) -> int:
        return len(self._versions())

    def as_dict(self) -> StrDict:
        """Deep copy of the document as it would be saved."""
        return copy.deepcopy(self._data)

    def _versions(self) -> list[StrDict]:
        # load() guarantees a list; elements are validated lazily at lookup.
        return self._data["versions"]  # type: ignore[return-value]

    # -------------------------------------------------------------------------
    # Field access
    # -------------------------------------------------------------------------

    def get(self, field: str) -> Result[object, BoxerError]:
        if field not in self._data or self._data[field] is None:
            return Err(BoxerError("no_such_field", f"No such metadata field: {field}"))
        return Ok(self._data[field])

    def set(self, field: str, value: object) -> None:
        """Set a top-level field; marks the catalog modified only on change."""
        if field in self._data and self._data[field] == value:
            return
        self._data[field] = value
        self._modified = True

    # -------------------------------------------------------------------------
    # Versions
    # -------------------------------------------------------------------------

    def get_active_version_number(self) -> Result[str | None, BoxerError]:
        """Version string of ``versions[0]``, or None when there are no versions."""
        versions = self._versions()
        if not versions:
            return Ok(None)

        head = as_str_dict(versions[0])
        version = head.get("version") if head is not None else None
        if not isinstance(version, str):
            return Err(
                BoxerError(
                    "consistency_error",
                    "Unexpected version definition in position 0",
                    hint="The metadata file looks hand-edited; fix versions[0].version",
                )
            )
        return Ok(version)

    def _version_index(self, version: str) -> int | None:
        for i, record in enumerate(self._versions()):
            entry = as_str_dict(record)
            if entry is not None and entry.get("version") == version:
                return i
        return None

    def find_version(self, version: str) -> VersionRecord | None:
        i = self._version_index(version)
        if i is None:
            return None
        providers = as_obj_list(self._versions()[i].get("providers")) or []
        return VersionRecord(
            version=version,
            providers=tuple(
                ProviderEntry.from_dict(p) for p in map(as_str_dict, providers) if p is not None
            ),
        )

    def versions(self) -> list[VersionRecord]:
        """All records, active first. Records without a version are skipped."""
        out: list[VersionRecord] = []
        seen: set[str] = set()
        for record in self._versions():
            entry = as_str_dict(record)
            version = entry.get("version") if entry is not None else None
            if not isinstance(version, str) or version in seen:
                continue
            seen.add(version)
            found = self.find_version(version)
            if found is not None:
                out.append(found)
        return out

    def add_version_provider(self, version: str, provider: ProviderEntry) -> int:
        """Record that ``version`` was published for ``provider``.

        An unknown version is prepended and becomes the active version, even
        if it sorts lower than existing ones. For a known version the provider
        is appended, or its standard fields are updated in place when any of them
        differs. Extra keys on an existing provider entry are kept.

        Returns:
            Number of version records after the operation.
        """
        versions = self._versions()
        entry = provider.to_dict()

        i = self._version_index(version)
        if i is None:
            versions.insert(0, {"version": version, "providers": [entry]})
            self._modified = True
            return len(versions)

        record = versions[i]
        providers = as_obj_list(record.get("providers"))
        if providers is None:
            providers = []
            record["providers"] = providers

        for existing in providers:
            existing_dict = as_str_dict(existing)
            if existing_dict is None or existing_dict.get("name") != provider.name:
                continue
            if any(existing_dict.get(k) != v for k, v in entry.items()):
                existing_dict.update(entry)
                self._modified = True
            return len(versions)

        providers.append(entry)
        self._modified = True
        return len(versions)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _validate(self, obj: object, path: Path) -> Result[StrDict, BoxerError]:
        data = as_str_dict(obj)
        if data is None:
            return Err(BoxerError("invalid_input", f"Invalid metadata in {path}", path=path))

        if "name" not in data or data["name"] is None:
            data["name"] = self._release_name

        if "versions" not in data or data["versions"] is None:
            data["versions"] = []
        elif as_obj_list(data["versions"]) is None:
            return Err(
                BoxerError(
                    "invalid_input",
                    f"Invalid versions setting in {path}",
                    hint="versions must be a JSON array",
                    path=path,
                )
            )
        return Ok(data)

    def load(self, path: Path) -> Result[LoadResult, BoxerError]:
        """Replace the catalog content with the file at ``path``, if any.

        A catalog created under an older release name is renamed to the
        configured one, which counts as a modification.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._data = self._defaults()
            self._is_default = True
            self._modified = False
            return Ok(LoadResult.DEFAULT)
        except (OSError, UnicodeDecodeError) as e:
            return Err(BoxerError("io_failure", f"Failed to read {path}: {e}", path=path))

        try:
            obj: object = json.loads(raw)
        except json.JSONDecodeError as e:
            return Err(BoxerError("invalid_input", f"Invalid JSON in {path}: {e}", path=path))

        validated = self._validate(obj, path)
        if isinstance(validated, Err):
            return validated
        data = validated.value

        self._modified = False
        if data["name"] != self._release_name:
            data["name"] = self._release_name
            self._modified = True

        self._data = data
        self._is_default = False
        return Ok(LoadResult.CUSTOM)

    def to_json(self) -> str:
        return json.dumps(self._data, indent=4, ensure_ascii=False) + "\n"

    def save(self, path: Path, *, force: bool = False) -> Result[bool, BoxerError]:
        """Write the catalog to ``path``.

        An existing file is left untouched (preserving its mtime) when nothing
        changed, unless ``force`` is set.

        Returns:
            Ok(True) if the file was written, Ok(False) if skipped.
        """
        if path.exists() and not self._modified and not force:
            return Ok(False)

        try:
            atomic_write_text(path, self.to_json())
        except OSError as e:
            return Err(BoxerError("io_failure", f"Failed to write file: {path} ({e})", path=path))
        return Ok(True)
