"""Builder configuration.

Values that used to be hard-coded constants (temp-dir prefix, marker file,
manifest file name) are carried explicitly so callers and tests can override
them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


DEFAULT_TEMP_PREFIX = "m2cpb_"
DEFAULT_MARKER_FILENAME = "registration.php"
DEFAULT_MANIFEST_FILENAME = "composer.json"


def _norm_str(value: object, *, where: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{where}: expected str, got {type(value).__name__}")
    s = value.strip()
    if not s:
        raise ValueError(f"{where}: must be a non-empty string")
    return s


@dataclass(frozen=True)
class BuilderConfig:
    """Configuration for `PackageBuilder`.

    - temp_prefix: prefix of the per-build staging directory name
    - temp_root: parent of staging directories (None -> system temp dir)
    - marker_filename: file that must exist at the component root
    - manifest_filename: name of the manifest written into the staged tree
    - keep_staging: leave the staging directory on disk after the build
    """

    temp_prefix: str = DEFAULT_TEMP_PREFIX
    temp_root: Path | None = None
    marker_filename: str = DEFAULT_MARKER_FILENAME
    manifest_filename: str = DEFAULT_MANIFEST_FILENAME
    keep_staging: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "temp_prefix", _norm_str(self.temp_prefix, where="BuilderConfig.temp_prefix"))
        object.__setattr__(
            self, "marker_filename", _norm_str(self.marker_filename, where="BuilderConfig.marker_filename")
        )
        object.__setattr__(
            self, "manifest_filename", _norm_str(self.manifest_filename, where="BuilderConfig.manifest_filename")
        )
        if self.temp_root is not None:
            object.__setattr__(self, "temp_root", Path(self.temp_root))
