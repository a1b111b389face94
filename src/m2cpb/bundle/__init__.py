"""Package bundle I/O.

- `manifest`: composer.json load/validate, projection, autoload remap, write
- `archive`: deterministic ZIP writer and entry listing
"""

from __future__ import annotations

from .archive import archive_filename, read_archive_entries, write_archive
from .manifest import derive_output, load_and_validate, remap_autoload, write_manifest

__all__ = [
    "archive_filename",
    "read_archive_entries",
    "write_archive",
    "derive_output",
    "load_and_validate",
    "remap_autoload",
    "write_manifest",
]
