"""Core data model for package builds.

- `SourceManifest`: the development `composer.json`, validated.
- `OutputManifest`: the trimmed manifest shipped inside the package.
- `BuildState` / `BuildResult`: orchestrator state machine and its outcome.

This module must not import fs/bundle/build/cli.
"""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import PackageBuildError


# Order matters: validation reports the first missing field in this order.
REQUIRED_FIELDS = ("name", "version", "type", "license", "authors", "autoload")


@dataclass(frozen=True)
class SourceManifest:
    """Validated source manifest.

    `data` holds the full decoded JSON object, including keys that are not
    carried into the output manifest.
    """

    path: Path
    data: dict[str, Any]

    @property
    def name(self) -> str:
        return self.data["name"]

    @property
    def version(self) -> str:
        return self.data["version"]

    @property
    def autoload(self) -> dict[str, Any]:
        return self.data["autoload"]


@dataclass
class OutputManifest:
    """Manifest written into the staged tree.

    Mutable on purpose: autoload remapping rewrites `autoload` in place.
    """

    name: str
    version: str
    type: str
    license: Any
    authors: list[Any]
    autoload: Any  # rule-kind map; an empty JSON array stands for no rules
    description: Any = None
    require: dict[str, Any] | None = None
    has_description: bool = False

    @classmethod
    def from_source(cls, source: SourceManifest) -> "OutputManifest":
        d = source.data
        return cls(
            name=d["name"],
            version=d["version"],
            type=d["type"],
            license=copy.deepcopy(d["license"]),
            authors=copy.deepcopy(d["authors"]),
            autoload=copy.deepcopy(d["autoload"]),
            description=copy.deepcopy(d.get("description")),
            require=copy.deepcopy(d["require"]) if d.get("require") is not None else None,
            has_description=d.get("description") is not None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the manifest as a dict in shipped key order.

        Order: name, description?, version, type, license, authors, require?, autoload.
        """
        out: dict[str, Any] = {"name": self.name}
        if self.has_description:
            out["description"] = self.description
        out["version"] = self.version
        out["type"] = self.type
        out["license"] = self.license
        out["authors"] = self.authors
        if self.require is not None:
            out["require"] = self.require
        out["autoload"] = self.autoload
        return out


class BuildState(str, enum.Enum):
    INIT = "init"
    VALIDATE_SOURCE = "validate_source"
    VALIDATE_MANIFEST = "validate_manifest"
    VALIDATE_DESTINATION = "validate_destination"
    STAGE = "stage"
    TRANSFORM_MANIFEST = "transform_manifest"
    ARCHIVE = "archive"
    NOTIFY = "notify"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class BuildResult:
    """Outcome of one `PackageBuilder.build()` call.

    On failure, `failed_at` is the state that was running and `error` the
    typed error that stopped the build.
    """

    state: BuildState
    archive_path: Path | None = None
    error: PackageBuildError | None = None
    failed_at: BuildState | None = None
    steps: tuple[BuildState, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.state is BuildState.DONE

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error
