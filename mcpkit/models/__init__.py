"""mcpkit data models.

All models are Pydantic v2 and frozen (immutable after creation), except
``ScanReport`` which the loader appends to while a scan is in progress.
"""

from mcpkit.models.plugins import (
    KIND_PROFILES,
    FailureKind,
    KindProfile,
    LoadResult,
    LoadStatus,
    PluginFile,
    PluginKind,
    ScanReport,
    get_profile,
)

__all__ = [
    "KIND_PROFILES",
    "FailureKind",
    "KindProfile",
    "LoadResult",
    "LoadStatus",
    "PluginFile",
    "PluginKind",
    "ScanReport",
    "get_profile",
]
