"""`m2cpb build` command.

Builds `<destination>/<name>-<version>.zip` from a component source tree and
its development composer.json. Exit code 0 on success, 1 on a build error
(message on stderr).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from m2cpb.build.orchestrator import PackageBuilder
from m2cpb.core.config import DEFAULT_TEMP_PREFIX, BuilderConfig


def register(app: typer.Typer) -> None:
    @app.command("build")
    def build(
        src_path: str = typer.Argument(
            ...,
            help="Path to the root directory of the component (the one which contains the registration.php file).",
        ),
        composer_file_path: str = typer.Argument(
            ...,
            help=(
                "Path to the original composer.json file used during development. The following properties "
                "must be set: name, version, type, license, authors and autoload."
            ),
        ),
        destination_zip_path: str = typer.Argument(
            ...,
            help=(
                "Path to the destination directory of the ZIP package file. The file name is generated "
                "from the Composer package name and version."
            ),
        ),
        temp_dir: Optional[str] = typer.Option(
            None,
            "--temp-dir",
            envvar="M2CPB_TEMP_DIR",
            help="Parent directory for staging directories (default: system temp dir).",
        ),
        temp_prefix: str = typer.Option(DEFAULT_TEMP_PREFIX, "--temp-prefix", help="Staging directory name prefix."),
        keep_staging: bool = typer.Option(False, "--keep-staging", help="Do not delete the staging directory."),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Log build steps to stderr."),
    ) -> None:
        """Build a ZIP package of a Magento2 component."""
        if verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

        try:
            config = BuilderConfig(
                temp_prefix=temp_prefix,
                temp_root=Path(temp_dir) if temp_dir else None,
                keep_staging=keep_staging,
            )
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e

        builder = PackageBuilder(typer.echo, config)
        result = builder.build(Path(src_path), Path(composer_file_path), Path(destination_zip_path))
        if not result.ok:
            typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(code=result.exit_code)
