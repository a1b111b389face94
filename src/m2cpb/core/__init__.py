"""m2cpb core: data model, configuration and error taxonomy.

This package is intentionally standalone and must not import fs/bundle/build/cli
to avoid circular dependencies.
"""

from __future__ import annotations

from .config import BuilderConfig
from .errors import (
    ArchiveWriteFailure,
    DestinationNotWritable,
    InvalidManifestSyntax,
    MissingRegistrationMarker,
    MissingRequiredField,
    PackageBuildError,
    SourceNotFound,
    SourceNotReadable,
    StagingFailure,
    UnsupportedEntryType,
)
from .model import REQUIRED_FIELDS, BuildResult, BuildState, OutputManifest, SourceManifest

__all__ = [
    "BuilderConfig",
    "BuildResult",
    "BuildState",
    "OutputManifest",
    "SourceManifest",
    "REQUIRED_FIELDS",
    "PackageBuildError",
    "SourceNotFound",
    "SourceNotReadable",
    "MissingRegistrationMarker",
    "InvalidManifestSyntax",
    "MissingRequiredField",
    "DestinationNotWritable",
    "StagingFailure",
    "UnsupportedEntryType",
    "ArchiveWriteFailure",
]
