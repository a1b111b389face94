"""Build orchestrator: source tree + composer.json -> `<name>-<version>.zip`.

States run strictly in order and never go back:

    INIT -> VALIDATE_SOURCE -> VALIDATE_MANIFEST -> VALIDATE_DESTINATION
         -> STAGE -> TRANSFORM_MANIFEST -> ARCHIVE -> NOTIFY -> DONE

Any `PackageBuildError` moves the build to FAILED and is returned inside the
`BuildResult`; remaining states are skipped. OS errors while staging or
writing the manifest become `StagingFailure`; archive errors become
`ArchiveWriteFailure`.

The staging directory is always removed when the build ends, successful or
not, unless `BuilderConfig.keep_staging` is set.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Optional

from m2cpb.bundle.archive import archive_filename, write_archive
from m2cpb.bundle.manifest import derive_output, load_and_validate, remap_autoload, write_manifest
from m2cpb.core.config import BuilderConfig
from m2cpb.core.errors import (
    DestinationNotWritable,
    MissingRegistrationMarker,
    PackageBuildError,
    SourceNotFound,
    SourceNotReadable,
    StagingFailure,
)
from m2cpb.core.model import BuildResult, BuildState, SourceManifest
from m2cpb.fs.mirror import mirror

log = logging.getLogger(__name__)

MessageSink = Callable[[str], None]

SUCCESS_MESSAGE = 'Package successfully built in "{path}"!'


class PackageBuilder:
    """Builds a ZIP package of a Magento2 component (module, theme, language or library)."""

    def __init__(self, sink: MessageSink, config: Optional[BuilderConfig] = None):
        self.sink = sink
        self.config = config if config is not None else BuilderConfig()

    # ---- validation steps ----

    def validate_source(self, source_path: Path) -> Path:
        p = Path(source_path)
        if not p.is_dir():
            raise SourceNotFound(p)
        if not os.access(p, os.R_OK | os.X_OK):
            raise SourceNotReadable(p)
        marker = p / self.config.marker_filename
        if not marker.is_file():
            raise MissingRegistrationMarker(marker)
        return p.resolve()

    def validate_manifest(self, manifest_path: Path) -> SourceManifest:
        source = load_and_validate(Path(manifest_path))
        return SourceManifest(path=source.path.resolve(), data=source.data)

    def validate_destination(self, destination_dir: Path) -> Path:
        p = Path(destination_dir)
        if not p.is_dir() or not os.access(p, os.W_OK | os.X_OK):
            raise DestinationNotWritable(p)
        return p.resolve()

    # ---- pipeline ----

    def _stage(self, source: Path) -> Path:
        temp_root = self.config.temp_root
        parent = (temp_root if temp_root is not None else Path(tempfile.gettempdir())).resolve()
        if parent == source or parent.is_relative_to(source):
            # The mirror would copy the staging directory into itself.
            raise StagingFailure(parent, f'inside source path "{source}"')
        try:
            if temp_root is not None:
                temp_root.mkdir(parents=True, exist_ok=True)
            staging = Path(tempfile.mkdtemp(prefix=self.config.temp_prefix, dir=temp_root))
        except OSError as e:
            raise StagingFailure(parent, str(e)) from e
        log.info("staging %s in %s", source, staging)
        return staging

    def build(self, source_path: Path, manifest_path: Path, destination_dir: Path) -> BuildResult:
        """Run one build.

        Args:
            source_path: component root (the directory containing registration.php).
            manifest_path: development composer.json; name, version, type,
                license, authors and autoload must be set.
            destination_dir: directory receiving `<name>-<version>.zip`.
        """
        state = BuildState.INIT
        steps: list[BuildState] = [state]
        staging: Path | None = None

        def enter(next_state: BuildState) -> BuildState:
            log.debug("build state: %s -> %s", steps[-1].value, next_state.value)
            steps.append(next_state)
            return next_state

        try:
            state = enter(BuildState.VALIDATE_SOURCE)
            source = self.validate_source(source_path)

            state = enter(BuildState.VALIDATE_MANIFEST)
            source_manifest = self.validate_manifest(manifest_path)

            state = enter(BuildState.VALIDATE_DESTINATION)
            destination = self.validate_destination(destination_dir)

            state = enter(BuildState.STAGE)
            staging = self._stage(source)
            try:
                mirror(source, staging)
            except OSError as e:
                raise StagingFailure(staging, str(e)) from e

            state = enter(BuildState.TRANSFORM_MANIFEST)
            output_manifest = derive_output(source_manifest)
            # Remap against the original locations, never the staging copy.
            remap_autoload(source, source_manifest.path.parent, output_manifest)
            try:
                write_manifest(staging, output_manifest, filename=self.config.manifest_filename)
            except OSError as e:
                raise StagingFailure(staging, str(e)) from e

            state = enter(BuildState.ARCHIVE)
            archive_path = destination / archive_filename(str(output_manifest.name), str(output_manifest.version))
            write_archive(staging, archive_path)

            state = enter(BuildState.NOTIFY)
            self.sink(SUCCESS_MESSAGE.format(path=archive_path))

            state = enter(BuildState.DONE)
        except PackageBuildError as e:
            log.debug("build failed in state %s: %s", state.value, e)
            steps.append(BuildState.FAILED)
            return BuildResult(state=BuildState.FAILED, error=e, failed_at=state, steps=tuple(steps))
        finally:
            if staging is not None:
                if self.config.keep_staging:
                    log.info("keeping staging directory %s", staging)
                else:
                    shutil.rmtree(staging, ignore_errors=True)

        return BuildResult(state=BuildState.DONE, archive_path=archive_path, steps=tuple(steps))

    def build_or_raise(self, source_path: Path, manifest_path: Path, destination_dir: Path) -> Path:
        """Like `build()` but raise the typed error on failure; return the archive path."""
        result = self.build(source_path, manifest_path, destination_dir)
        result.raise_for_error()
        return result.archive_path
