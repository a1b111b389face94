"""Composer manifest utilities.

This module is intentionally small and dependency-light. It provides:
- source `composer.json` loading + required-field validation
- projection to the trimmed output manifest
- autoload path remapping for re-rooted packages
- output manifest writing

Autoload remapping policy
-------------------------
Autoload paths in the source manifest are authored relative to the manifest's
own directory. The package root is the component source directory, which may
sit below it (e.g. manifest at `<repo>/composer.json`, component at
`<repo>/src`). The remap prefix is the source directory with the manifest
directory textually removed (`"src"`), and `"src/"` is stripped from each
autoload path. This is a textual strip of the first occurrence, not path
algebra: paths that do not contain the prefix are left unchanged.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from m2cpb.core.errors import InvalidManifestSyntax, MissingRequiredField
from m2cpb.core.model import REQUIRED_FIELDS, OutputManifest, SourceManifest

log = logging.getLogger(__name__)


def read_manifest(path: Path) -> dict[str, Any]:
    """Decode a JSON object from `path`, raising InvalidManifestSyntax otherwise."""
    p = Path(path)
    try:
        obj = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidManifestSyntax(p, str(e)) from e
    except json.JSONDecodeError as e:
        raise InvalidManifestSyntax(p, f"line {e.lineno}, column {e.colno}: {e.msg}") from e
    if not isinstance(obj, dict):
        raise InvalidManifestSyntax(p, f"expected JSON object, got {type(obj).__name__}")
    return obj


def load_and_validate(manifest_path: Path) -> SourceManifest:
    """Load the source manifest and check required fields in fixed order.

    A field set to `null` counts as missing. The first missing field wins.
    `autoload` must be a JSON object; an empty array is accepted as an empty
    rule set, the way PHP encoders write an empty object.
    """
    p = Path(manifest_path)
    data = read_manifest(p)
    for field in REQUIRED_FIELDS:
        if data.get(field) is None:
            raise MissingRequiredField(field, p)
    autoload = data["autoload"]
    if not isinstance(autoload, dict) and autoload != []:
        raise InvalidManifestSyntax(p, f"autoload: expected JSON object, got {type(autoload).__name__}")
    return SourceManifest(path=p, data=data)


def derive_output(source: SourceManifest) -> OutputManifest:
    """Project the source manifest to the fields shipped in the package."""
    return OutputManifest.from_source(source)


def compute_remap_prefix(repository_source_root: Path | str, manifest_file_dir: Path | str) -> str:
    """Return the source root relative to the manifest dir, POSIX-style, unslashed.

    Empty when the manifest lives in the directory being packaged.
    """
    source = str(repository_source_root)
    base = str(manifest_file_dir)
    rel = source.replace(base, "", 1) if base else source
    rel = rel.replace(os.sep, "/")
    return rel.strip("/")


def _strip_prefix(value: Any, prefix: str) -> tuple[Any, bool]:
    if isinstance(value, str) and prefix in value:
        return value.replace(prefix, "", 1), True
    return value, False


def _remap_paths(paths: Any, prefix: str) -> tuple[Any, int]:
    """Remap a single path or a list of paths; other values pass through."""
    if isinstance(paths, list):
        out: list[Any] = []
        n = 0
        for item in paths:
            new, changed = _strip_prefix(item, prefix)
            out.append(new)
            n += int(changed)
        return out, n
    new, changed = _strip_prefix(paths, prefix)
    return new, int(changed)


def remap_autoload(
    repository_source_root: Path | str,
    manifest_file_dir: Path | str,
    destination_manifest: OutputManifest,
) -> int:
    """Rewrite autoload paths of `destination_manifest` in place.

    Handles namespace maps (`psr-4`, `psr-0`: prefix -> path | [path, ...]) and
    plain path lists (`classmap`, `files`, `exclude-from-classmap`).

    Returns the number of rewritten path strings.
    """
    prefix = compute_remap_prefix(repository_source_root, manifest_file_dir)
    if not prefix:
        return 0
    prefix = prefix + "/"

    autoload = destination_manifest.autoload
    if not isinstance(autoload, dict):
        return 0

    rewritten = 0
    for kind, rules in autoload.items():
        if isinstance(rules, dict):
            for namespace, paths in rules.items():
                rules[namespace], n = _remap_paths(paths, prefix)
                rewritten += n
        else:
            autoload[kind], n = _remap_paths(rules, prefix)
            rewritten += n

    log.debug("autoload remap: stripped %r from %d path(s)", prefix, rewritten)
    return rewritten


def write_manifest(
    staging_directory: Path,
    manifest: OutputManifest,
    *,
    filename: str = "composer.json",
) -> Path:
    """Write the output manifest at `<staging_directory>/<filename>`.

    Pretty-printed with 4-space indent, slashes unescaped, newline-terminated.
    Overwrites any mirrored copy of the source manifest.
    """
    p = Path(staging_directory) / filename
    text = json.dumps(manifest.to_dict(), indent=4) + "\n"
    p.write_text(text, encoding="utf-8")
    return p
