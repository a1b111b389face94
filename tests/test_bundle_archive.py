from __future__ import annotations

import os
import zipfile
from pathlib import Path

import pandas as pd
import pytest

from m2cpb.bundle.archive import archive_filename, read_archive_entries, write_archive
from m2cpb.core.errors import ArchiveWriteFailure


def _make_staging(root: Path) -> Path:
    (root / "etc").mkdir(parents=True)
    (root / "registration.php").write_text("<?php\n", encoding="utf-8")
    (root / "composer.json").write_text("{}\n", encoding="utf-8")
    (root / "etc" / "module.xml").write_text("<module/>\n", encoding="utf-8")
    (root / "empty").mkdir()
    os.symlink("registration.php", root / "reg-link.php")
    return root


def test_archive_filename_replaces_separators() -> None:
    assert archive_filename("awesome-module", "1.1.2") == "awesome-module-1.1.2.zip"
    assert archive_filename("vendor/awesome-module", "2.0.0") == "vendor-awesome-module-2.0.0.zip"


def test_write_archive_stores_files_with_relative_posix_paths(tmp_path: Path) -> None:
    staging = _make_staging(tmp_path / "staging")
    out = tmp_path / "pkg.zip"

    n = write_archive(staging, out)

    with zipfile.ZipFile(out) as zf:
        names = zf.namelist()
        assert zf.read("etc/module.xml") == b"<module/>\n"
    # walk order: root files (sorted) then subdirectories; no directory entries
    assert names == ["composer.json", "reg-link.php", "registration.php", "etc/module.xml"]
    assert n == 4
    assert not any(name.startswith("/") or name.endswith("/") for name in names)


def test_write_archive_keeps_symlinks_as_links(tmp_path: Path) -> None:
    staging = _make_staging(tmp_path / "staging")
    out = tmp_path / "pkg.zip"

    write_archive(staging, out)

    with zipfile.ZipFile(out) as zf:
        assert zf.read("reg-link.php") == b"registration.php"
    df = read_archive_entries(out)
    links = df.loc[df["is_symlink"], "path"].tolist()
    assert links == ["reg-link.php"]


def test_write_archive_overwrites_existing_file(tmp_path: Path) -> None:
    staging = _make_staging(tmp_path / "staging")
    out = tmp_path / "pkg.zip"
    out.write_bytes(b"garbage")

    write_archive(staging, out)

    assert zipfile.is_zipfile(out)


def test_write_archive_failure_is_typed(tmp_path: Path) -> None:
    staging = _make_staging(tmp_path / "staging")
    out = tmp_path / "missing-dir" / "pkg.zip"

    with pytest.raises(ArchiveWriteFailure) as ei:
        write_archive(staging, out)
    assert str(out) in str(ei.value)
    assert not out.exists()


def test_read_archive_entries_is_sorted_and_repeatable(tmp_path: Path) -> None:
    staging = _make_staging(tmp_path / "staging")
    out1 = tmp_path / "one.zip"
    out2 = tmp_path / "two.zip"

    write_archive(staging, out1)
    write_archive(staging, out2)

    df1 = read_archive_entries(out1)
    df2 = read_archive_entries(out2)
    assert list(df1.columns) == ["path", "size", "compressed_size", "is_symlink"]
    assert df1["path"].tolist() == sorted(df1["path"].tolist())
    pd.testing.assert_frame_equal(df1, df2)


def test_write_archive_onto_directory_is_typed_and_leaves_directory(tmp_path: Path) -> None:
    staging = _make_staging(tmp_path / "staging")
    out = tmp_path / "pkg.zip"
    out.mkdir()

    with pytest.raises(ArchiveWriteFailure) as ei:
        write_archive(staging, out)
    assert str(out) in str(ei.value)
    assert out.is_dir()
