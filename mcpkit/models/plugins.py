"""Plugin scan models: kinds, discovered files and scan results."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Plugin kinds
# ---------------------------------------------------------------------------

class PluginKind(str, Enum):
    """The category of pluggable unit a build directory holds.

    * ``tool`` — invocable operations exposed to the client.
    * ``prompt`` — reusable prompt templates.
    * ``resource`` — readable data sources.
    """

    TOOL = "tool"
    PROMPT = "prompt"
    RESOURCE = "resource"


class KindProfile(BaseModel):
    """Everything the shared pipeline needs to know about one plugin kind.

    The pipeline is identical for every kind; only the directory it scans,
    the base-class file it skips and the attribute names the capability
    contract accepts differ.

    Examples
    --------
    >>> profile = get_profile("tool")
    >>> profile.directory
    'tools'
    >>> profile.exclude_patterns([".py"])[:2]
    ['base_tool.py', '__init__.py']
    """

    model_config = ConfigDict(frozen=True)

    kind: PluginKind
    directory: str
    base_name: str
    definition_attrs: tuple[str, ...]
    handler_attrs: tuple[str, ...]

    def exclude_patterns(
        self, extensions: list[str], extra: list[str] | None = None
    ) -> list[str]:
        """Build the exclusion list for the given extensions.

        The base-class file and package initializers are excluded by exact
        name; test and spec files by wildcard.
        """
        patterns: list[str] = []
        for ext in extensions:
            patterns.extend([
                f"{self.base_name}{ext}",
                f"__init__{ext}",
                f"*.test{ext}",
                f"*.spec{ext}",
            ])
        patterns.extend(extra or [])
        return patterns


KIND_PROFILES: dict[PluginKind, KindProfile] = {
    PluginKind.TOOL: KindProfile(
        kind=PluginKind.TOOL,
        directory="tools",
        base_name="base_tool",
        definition_attrs=("tool_definition", "definition"),
        handler_attrs=("tool_call", "call", "execute"),
    ),
    PluginKind.PROMPT: KindProfile(
        kind=PluginKind.PROMPT,
        directory="prompts",
        base_name="base_prompt",
        definition_attrs=("prompt_definition", "definition"),
        handler_attrs=("get_messages", "call"),
    ),
    PluginKind.RESOURCE: KindProfile(
        kind=PluginKind.RESOURCE,
        directory="resources",
        base_name="base_resource",
        definition_attrs=("resource_definition", "definition"),
        handler_attrs=("read", "call"),
    ),
}


def get_profile(kind: PluginKind | str) -> KindProfile:
    """Return the profile for *kind*, accepting the enum or its value."""
    return KIND_PROFILES[PluginKind(kind)]


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

class PluginFile(BaseModel):
    """A candidate file found under the scan root."""

    model_config = ConfigDict(frozen=True)

    path: Path  # absolute
    relative_path: str  # POSIX-style, relative to the scan root
    name: str


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class LoadStatus(str, Enum):
    LOADED = "loaded"
    SKIPPED = "skipped"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Why a file (or the whole scan) did not produce a usable plugin."""

    DIRECTORY_MISSING = "directory_missing"
    MODULE_EVALUATION = "module_evaluation"
    NO_USABLE_EXPORT = "no_usable_export"
    CONSTRUCTION = "construction"
    CONTRACT_VIOLATION = "contract_violation"
    SELF_CHECK = "self_check"


class LoadResult(BaseModel):
    """Outcome of running one ``PluginFile`` through the pipeline.

    Exactly one of these exists per discovered file.  ``instance`` is set
    only for ``LOADED`` results; ``failure`` only for the other two.
    """

    model_config = ConfigDict(frozen=True)

    file: PluginFile
    status: LoadStatus
    instance: Any = Field(default=None, exclude=True, repr=False)
    failure: FailureKind | None = None
    message: str = ""
    export_rule: str = ""  # which export rule produced the constructor

    @property
    def ok(self) -> bool:
        return self.status == LoadStatus.LOADED

    @classmethod
    def loaded(cls, file: PluginFile, instance: Any, export_rule: str = "") -> LoadResult:
        name = getattr(instance, "name", "")
        return cls(
            file=file,
            status=LoadStatus.LOADED,
            instance=instance,
            message=f"loaded '{name}'",
            export_rule=export_rule,
        )

    @classmethod
    def skipped(cls, file: PluginFile, failure: FailureKind, message: str) -> LoadResult:
        return cls(file=file, status=LoadStatus.SKIPPED, failure=failure, message=message)

    @classmethod
    def failed(
        cls,
        file: PluginFile,
        failure: FailureKind,
        message: str,
        export_rule: str = "",
    ) -> LoadResult:
        return cls(
            file=file,
            status=LoadStatus.FAILED,
            failure=failure,
            message=message,
            export_rule=export_rule,
        )


class ScanReport(BaseModel):
    """Aggregate, ordered record of one scan over a plugin directory.

    ``root_error`` is set instead of per-file results when the scan root
    itself is missing; it counts as a single failure.

    Examples
    --------
    >>> report = ScanReport(kind=PluginKind.TOOL, root=Path("dist/tools"),
    ...                     root_error="no build output")
    >>> report.failure_count, report.passed
    (1, False)
    """

    kind: PluginKind
    root: Path
    results: list[LoadResult] = Field(default_factory=list)
    root_error: str | None = None

    @property
    def loaded_count(self) -> int:
        return sum(1 for r in self.results if r.status == LoadStatus.LOADED)

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self.results if r.status == LoadStatus.SKIPPED)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if r.status == LoadStatus.FAILED)

    @property
    def root_failure(self) -> FailureKind | None:
        return FailureKind.DIRECTORY_MISSING if self.root_error is not None else None

    @property
    def failure_count(self) -> int:
        """Per-file failures plus one for a missing scan root."""
        return self.failed_count + (1 if self.root_error is not None else 0)

    @property
    def passed(self) -> bool:
        return self.failure_count == 0

    @property
    def instances(self) -> list[Any]:
        return [r.instance for r in self.results if r.ok]

    @property
    def failures(self) -> list[LoadResult]:
        return [r for r in self.results if r.status == LoadStatus.FAILED]

    def summary(self) -> str:
        if self.root_error is not None:
            return f"{self.kind.value}s: {self.root_error}"
        return (
            f"{self.kind.value}s: {self.loaded_count} loaded, "
            f"{self.skipped_count} skipped, {self.failed_count} failed"
        )
