"""Filesystem helpers: deterministic tree walk and link-preserving mirror."""

from __future__ import annotations

from .mirror import EntryKind, TreeEntry, entry_kind, mirror, walk_tree

__all__ = [
    "EntryKind",
    "TreeEntry",
    "entry_kind",
    "mirror",
    "walk_tree",
]
