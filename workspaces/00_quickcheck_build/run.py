"""Quickcheck workspace: fixture repo -> build -> rebuild -> compare.

This workspace is self-contained (no repo-level assets required). It writes a
small `awesome-module` repository under
`workspaces/00_quickcheck_build/outputs/awesome-module-repo/`, builds its
package twice into `outputs/dist/`, compares the two entry tables and writes
a JSON report.
"""

from __future__ import annotations

import json
import shutil
import zipfile
from pathlib import Path
from typing import Any

import pandas as pd

from m2cpb.build.orchestrator import PackageBuilder
from m2cpb.bundle.archive import read_archive_entries


def _fixture_manifest() -> dict[str, Any]:
    return {
        "name": "awesome-module",
        "description": "Quickcheck fixture",
        "version": "1.1.2",
        "type": "magento2-module",
        "license": "MIT",
        "authors": [{"name": "Jane Doe"}],
        "autoload": {"psr-4": {"Awesome\\Module\\": "src/"}, "files": ["src/registration.php"]},
    }


def _write_repo(repo: Path) -> tuple[Path, Path]:
    if repo.exists():
        shutil.rmtree(repo)
    src = repo / "src"
    (src / "etc").mkdir(parents=True)
    (src / "registration.php").write_text("<?php\n", encoding="utf-8")
    (src / "etc" / "module.xml").write_text('<module name="Awesome_Module"/>\n', encoding="utf-8")
    composer = repo / "composer.json"
    _write_json(composer, _fixture_manifest())
    return src, composer


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def main() -> None:
    here = Path(__file__).resolve().parent
    outputs = here / "outputs"
    dist = outputs / "dist"
    dist.mkdir(parents=True, exist_ok=True)

    src, composer = _write_repo(outputs / "awesome-module-repo")
    builder = PackageBuilder(print)

    zip_path = builder.build_or_raise(src, composer, dist)
    entries1 = read_archive_entries(zip_path)
    zip_path.unlink()

    zip_path = builder.build_or_raise(src, composer, dist)
    entries2 = read_archive_entries(zip_path)

    ok_entries = True
    try:
        pd.testing.assert_frame_equal(entries1, entries2)
    except AssertionError:
        ok_entries = False

    with zipfile.ZipFile(zip_path) as zf:
        shipped = json.loads(zf.read("composer.json"))
    ok_autoload = shipped["autoload"]["psr-4"]["Awesome\\Module\\"] == ""

    report = {
        "archive_path": str(zip_path),
        "entries": entries2["path"].tolist(),
        "entries_equal": ok_entries,
        "autoload_remapped": ok_autoload,
    }
    _write_json(outputs / "build_report.json", report)

    if not (ok_entries and ok_autoload):
        raise SystemExit("quickcheck failed; see outputs/build_report.json")


if __name__ == "__main__":
    main()
