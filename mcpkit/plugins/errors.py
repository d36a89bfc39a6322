"""Per-file plugin errors.

Each error carries the ``FailureKind`` it is recorded as.  The loader
catches ``PluginLoadError`` at the file boundary, so none of these ever
abort a scan.
"""

from __future__ import annotations

from typing import ClassVar

from mcpkit.models.plugins import FailureKind


class PluginLoadError(RuntimeError):
    """Base class for errors scoped to a single plugin file."""

    failure: ClassVar[FailureKind]


class ModuleEvaluationError(PluginLoadError):
    """Raised when importing the file raised (syntax error, top-level exception)."""

    failure = FailureKind.MODULE_EVALUATION


class NoUsableExportError(PluginLoadError):
    """Raised when no export rule produced a callable constructor."""

    failure = FailureKind.NO_USABLE_EXPORT


class ConstructionError(PluginLoadError):
    """Raised when calling the constructor with no arguments raised."""

    failure = FailureKind.CONSTRUCTION


class ContractViolationError(PluginLoadError):
    """Raised when the instance lacks a name, definition or handler."""

    failure = FailureKind.CONTRACT_VIOLATION


class SelfCheckError(PluginLoadError):
    """Raised when the plugin's own validation hook rejected it."""

    failure = FailureKind.SELF_CHECK
