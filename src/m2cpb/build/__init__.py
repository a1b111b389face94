"""Package build orchestration."""

from __future__ import annotations

from .orchestrator import SUCCESS_MESSAGE, MessageSink, PackageBuilder

__all__ = [
    "MessageSink",
    "PackageBuilder",
    "SUCCESS_MESSAGE",
]
