"""`m2cpb inspect` command.

Lists the entries of a built package: path, size, compressed size and whether
the entry is a symbolic link.
"""

from __future__ import annotations

import zipfile
from pathlib import Path

import typer

from m2cpb.bundle.archive import read_archive_entries


def register(app: typer.Typer) -> None:
    @app.command("inspect")
    def inspect(
        zip_path: str = typer.Argument(..., help="Path to a package ZIP built by `m2cpb build`."),
    ) -> None:
        """List the entries of a package ZIP."""
        p = Path(zip_path)
        if not p.is_file():
            raise typer.BadParameter(f'"{p}" is not a file')
        try:
            df = read_archive_entries(p)
        except zipfile.BadZipFile as e:
            raise typer.BadParameter(f'"{p}" is not a ZIP archive: {e}') from e

        typer.echo(df.to_string(index=False))
        typer.echo(f"{len(df)} entries")
