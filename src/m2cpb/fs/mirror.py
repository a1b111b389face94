"""Filesystem mirror: lazy tree walk + link-preserving recursive copy.

Traversal order (used by both the mirror and the archive writer):
- depth-first, pre-order: a directory is yielded before its contents
- names inside a directory are sorted
- non-directory entries of a directory come before its subdirectories
- symbolic links are never followed; a link to a directory is a SYMLINK entry
"""

from __future__ import annotations

import enum
import logging
import os
import shutil
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from m2cpb.core.errors import SourceNotReadable, UnsupportedEntryType

log = logging.getLogger(__name__)


class EntryKind(str, enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


@dataclass(frozen=True)
class TreeEntry:
    path: Path
    relpath: str  # POSIX-style, relative to the walk root
    kind: EntryKind


def entry_kind(path: Path) -> EntryKind:
    """Classify `path` without following symbolic links."""
    mode = os.lstat(path).st_mode
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


def _list_dir(path: Path) -> list[str]:
    try:
        return sorted(os.listdir(path))
    except PermissionError as e:
        raise SourceNotReadable(path) from e


def walk_tree(root: Path) -> Iterator[TreeEntry]:
    """Yield every entry below `root` (root itself excluded).

    The walk is lazy and uses an explicit stack, so deep trees do not hit the
    recursion limit. It is not restartable: consume it once.
    """
    root = Path(root)
    stack: list[Path] = [root]
    while stack:
        current = stack.pop()
        if current != root:
            yield TreeEntry(current, current.relative_to(root).as_posix(), EntryKind.DIRECTORY)

        subdirs: list[Path] = []
        for name in _list_dir(current):
            p = current / name
            kind = entry_kind(p)
            if kind is EntryKind.DIRECTORY:
                subdirs.append(p)
                continue
            yield TreeEntry(p, p.relative_to(root).as_posix(), kind)

        # Reverse so the first subdirectory (by name) is popped first.
        stack.extend(reversed(subdirs))


def mirror(source_path: Path, dest_path: Path) -> int:
    """Recursively reproduce `source_path` into `dest_path`.

    - symlinks are recreated with the same target (never dereferenced)
    - directories are created, then filled
    - regular files are byte-copied (no permission/attribute preservation)
    - anything else raises UnsupportedEntryType and aborts the mirror

    `dest_path` is created if missing; an existing empty directory is reused.
    A failed mirror leaves a partial tree behind; callers discard it.

    Returns the number of non-directory entries copied.
    """
    source_path = Path(source_path)
    dest_path = Path(dest_path)
    dest_path.mkdir(parents=True, exist_ok=True)

    copied = 0
    for entry in walk_tree(source_path):
        target = dest_path / entry.relpath
        if entry.kind is EntryKind.SYMLINK:
            os.symlink(os.readlink(entry.path), target)
        elif entry.kind is EntryKind.DIRECTORY:
            target.mkdir()
            continue
        elif entry.kind is EntryKind.FILE:
            try:
                shutil.copyfile(entry.path, target, follow_symlinks=False)
            except PermissionError as e:
                if not os.access(entry.path, os.R_OK):
                    raise SourceNotReadable(entry.path) from e
                raise
        else:
            raise UnsupportedEntryType(entry.path)
        copied += 1

    log.debug("mirrored %d entries from %s to %s", copied, source_path, dest_path)
    return copied
