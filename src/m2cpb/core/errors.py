"""Error taxonomy for package builds.

Every failure the builder can detect maps to one subclass of
`PackageBuildError`. All of them are fatal: the build stops at the point of
detection and nothing is retried.

Messages are stable and always name the offending path or field so tests can
assert on them.
"""

from __future__ import annotations

from pathlib import Path


class PackageBuildError(Exception):
    """Base class for all build failures."""

    kind = "build_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class SourceNotFound(PackageBuildError):
    kind = "source_not_found"

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f'Source path "{path}" is not a directory.')


class SourceNotReadable(PackageBuildError):
    kind = "source_not_readable"

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f'Source path "{path}" is not readable.')


class MissingRegistrationMarker(PackageBuildError):
    kind = "missing_registration_marker"

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f'Cannot find Magento2 component registration file at path "{path}".')


class InvalidManifestSyntax(PackageBuildError):
    kind = "invalid_manifest_syntax"

    def __init__(self, path: Path | str, reason: str | None = None):
        self.path = Path(path)
        self.reason = reason
        msg = f'Cannot decode source Composer file at path "{path}".'
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class MissingRequiredField(PackageBuildError):
    kind = "missing_required_field"

    def __init__(self, field: str, path: Path | str):
        self.field = field
        self.path = Path(path)
        super().__init__(f'Cannot find required property "{field}" in source Composer file at path "{path}".')


class DestinationNotWritable(PackageBuildError):
    kind = "destination_not_writable"

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f'Given ZIP destination path "{path}" is not a directory or is not writable.')


class UnsupportedEntryType(PackageBuildError):
    kind = "unsupported_entry_type"

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f'Cannot copy "{path}" (unknown file type).')


class ArchiveWriteFailure(PackageBuildError):
    kind = "archive_write_failure"

    def __init__(self, path: Path | str, reason: str | None = None):
        self.path = Path(path)
        self.reason = reason
        msg = f'Cannot write ZIP package at path "{path}".'
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class StagingFailure(PackageBuildError):
    kind = "staging_failure"

    def __init__(self, path: Path | str, reason: str | None = None):
        self.path = Path(path)
        self.reason = reason
        msg = f'Cannot prepare build directory at path "{path}".'
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)
