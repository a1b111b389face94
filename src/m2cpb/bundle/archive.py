"""ZIP archive writer/reader for staged packages.

Entry layout:
- one entry per non-directory filesystem entry (directories are implied)
- entry names are POSIX paths relative to the staging root
- symlinks are stored as Unix link entries (mode S_IFLNK, payload = target)
- entries follow `m2cpb.fs.walk_tree` order, so one tree always yields the
  same entry sequence
"""

from __future__ import annotations

import logging
import os
import stat
import time
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING

from m2cpb.core.errors import ArchiveWriteFailure, PackageBuildError, UnsupportedEntryType
from m2cpb.fs.mirror import EntryKind, walk_tree

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd

log = logging.getLogger(__name__)

ARCHIVE_ENTRY_COLUMNS = ["path", "size", "compressed_size", "is_symlink"]

_ZIP_MIN_YEAR = 1980
_UNIX_CREATE_SYSTEM = 3


def archive_filename(name: str, version: str) -> str:
    """Return `<name>-<version>.zip` with path separators in `name` replaced by `-`."""
    safe = name.replace("/", "-")
    if os.sep != "/":
        safe = safe.replace(os.sep, "-")
    return f"{safe}-{version}.zip"


def _date_time(mtime: float) -> tuple[int, int, int, int, int, int]:
    dt = time.localtime(mtime)[:6]
    if dt[0] < _ZIP_MIN_YEAR:
        return (_ZIP_MIN_YEAR, 1, 1, 0, 0, 0)
    return dt  # type: ignore[return-value]


def _symlink_info(path: Path, arcname: str) -> zipfile.ZipInfo:
    st = os.lstat(path)
    info = zipfile.ZipInfo(arcname, date_time=_date_time(st.st_mtime))
    info.create_system = _UNIX_CREATE_SYSTEM
    info.external_attr = (stat.S_IFLNK | 0o777) << 16
    info.compress_type = zipfile.ZIP_STORED
    return info


def _discard_partial(path: Path) -> None:
    # Only a file this writer may have created is removed; a directory or
    # other entry already sitting at `path` is left alone.
    if path.is_file() and not path.is_symlink():
        try:
            path.unlink()
        except OSError as e:
            log.warning("cannot remove partial archive %s: %s", path, e)


def write_archive(staging_directory: Path, archive_file_path: Path) -> int:
    """Compress every non-directory entry below `staging_directory`.

    Creates or overwrites `archive_file_path`. The archive is only complete
    once this function returns; on failure the partial file is removed and
    ArchiveWriteFailure is raised.

    Returns the number of entries written.
    """
    root = Path(staging_directory)
    out = Path(archive_file_path)
    written = 0
    try:
        with zipfile.ZipFile(out, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for entry in walk_tree(root):
                if entry.kind is EntryKind.DIRECTORY:
                    continue
                if entry.kind is EntryKind.SYMLINK:
                    zf.writestr(_symlink_info(entry.path, entry.relpath), os.readlink(entry.path))
                elif entry.kind is EntryKind.FILE:
                    zf.write(entry.path, entry.relpath)
                else:
                    raise UnsupportedEntryType(entry.path)
                written += 1
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
        _discard_partial(out)
        raise ArchiveWriteFailure(out, str(e)) from e
    except PackageBuildError:
        _discard_partial(out)
        raise

    log.info("wrote %d entries to %s", written, out)
    return written


def read_archive_entries(archive_file_path: Path) -> "pd.DataFrame":
    """Return the archive's entries as a table sorted by path.

    Columns: path, size, compressed_size, is_symlink.
    """
    import pandas as pd  # local import to keep module import-light

    rows = []
    with zipfile.ZipFile(Path(archive_file_path)) as zf:
        for info in zf.infolist():
            mode = info.external_attr >> 16
            rows.append(
                {
                    "path": info.filename,
                    "size": int(info.file_size),
                    "compressed_size": int(info.compress_size),
                    "is_symlink": bool(stat.S_ISLNK(mode)),
                }
            )

    df = pd.DataFrame(rows, columns=ARCHIVE_ENTRY_COLUMNS)
    df = df.astype({"path": "string", "size": "int64", "compressed_size": "int64", "is_symlink": "bool"})
    return df.sort_values("path", kind="mergesort").reset_index(drop=True)
