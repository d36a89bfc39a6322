"""Plugin loader — discovers, loads and validates plugins of one kind.

Pipeline per scan::

    resolve_plugin_dir -> discover_files -> for each file, in order:
        resolve constructor -> instantiate -> check contract [-> self-check]

Every file produces exactly one ``LoadResult``; no per-file error escapes
the file boundary.  The two public entry points differ only in how loud
they are about what went wrong:

* ``load_all()`` is for serving.  It returns whatever loaded and reports
  skips and failures through the log only.
* ``validate_all()`` is for build checks.  It returns the full
  ``ScanReport`` and treats a missing build directory as a failure.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from mcpkit.config import KitConfig
from mcpkit.config import config as default_config
from mcpkit.models.plugins import (
    FailureKind,
    LoadResult,
    LoadStatus,
    PluginFile,
    PluginKind,
    ScanReport,
    get_profile,
)
from mcpkit.plugins.discovery import discover_files, has_valid_files
from mcpkit.plugins.errors import NoUsableExportError, PluginLoadError
from mcpkit.plugins.paths import resolve_plugin_dir
from mcpkit.plugins.resolver import (
    DEFAULT_EXPORT_RULES,
    ConstructorResolver,
    ExportRule,
    ModuleLoader,
)
from mcpkit.plugins.validator import check_contract, instantiate, run_self_check

logger = logging.getLogger(__name__)


class PluginLoader:
    """Loads and validates every plugin of one kind from a build directory.

    Parameters
    ----------
    kind:
        Which kind of plugin to scan for; selects directory, excluded base
        file and contract attribute names.
    base_path:
        Optional explicit base path, used when the working directory has no
        build output of its own.
    plugin_dir:
        Scan root override; skips path resolution entirely.
    config:
        Settings; defaults to the env-driven module singleton.
    module_loader:
        File path -> namespace callable.  Defaults to an importlib loader.
    export_rules:
        Ordered constructor extraction rules.
    cwd:
        Working directory consulted first for build output.  Defaults to
        the process working directory.
    entry_dir:
        Directory of the entry script, the last resolution fallback.
        Defaults to the directory of ``sys.argv[0]``.

    Examples
    --------
    >>> loader = PluginLoader(PluginKind.TOOL, plugin_dir=Path("/tmp/none"))
    >>> loader.load_all()
    []
    >>> loader.validate_all().failure_count
    1
    """

    def __init__(
        self,
        kind: PluginKind | str = PluginKind.TOOL,
        base_path: Path | str | None = None,
        *,
        plugin_dir: Path | None = None,
        config: KitConfig | None = None,
        module_loader: ModuleLoader | None = None,
        export_rules: Sequence[ExportRule] = DEFAULT_EXPORT_RULES,
        cwd: Path | None = None,
        entry_dir: Path | None = None,
    ) -> None:
        self._config = config or default_config
        self._profile = get_profile(kind)
        self._resolver = ConstructorResolver(
            module_loader=module_loader,
            rules=export_rules,
            default_export=self._config.default_export,
        )
        if plugin_dir is not None:
            self._plugin_dir = Path(plugin_dir)
        else:
            self._plugin_dir = resolve_plugin_dir(
                self._profile.directory,
                build_dir=self._config.build_dir,
                base_path=base_path,
                cwd=cwd,
                entry_dir=entry_dir,
            )

    # -- Properties ---------------------------------------------------------

    @property
    def kind(self) -> PluginKind:
        return self._profile.kind

    @property
    def plugin_dir(self) -> Path:
        return self._plugin_dir

    @property
    def exclude_patterns(self) -> list[str]:
        return self._profile.exclude_patterns(
            self._config.extensions, self._config.extra_exclude_patterns
        )

    # -- Discovery ----------------------------------------------------------

    def has_plugins(self) -> bool:
        """Fast precheck: is there at least one candidate file?"""
        found = has_valid_files(
            self._plugin_dir,
            extensions=self._config.extensions,
            exclude_patterns=self.exclude_patterns,
        )
        if found:
            logger.debug("Found %ss in %s", self.kind.value, self._plugin_dir)
        else:
            logger.debug("No %ss found in %s", self.kind.value, self._plugin_dir)
        return found

    def discover(self) -> list[PluginFile]:
        return discover_files(
            self._plugin_dir,
            extensions=self._config.extensions,
            exclude_patterns=self.exclude_patterns,
        )

    # -- Public API ---------------------------------------------------------

    def load_all(self) -> list[Any]:
        """Load every valid plugin; skip and log everything else.

        Returns
        -------
        list
            Contract-satisfying plugin instances in discovery order.  May be
            shorter than the number of discovered files.
        """
        if not self._plugin_dir.is_dir():
            logger.debug(
                "No %s directory at %s; nothing to load.",
                self.kind.value, self._plugin_dir,
            )
            return []

        logger.debug("Attempting to load %ss from: %s", self.kind.value, self._plugin_dir)
        report = self.scan(self_check=False)

        for result in report.results:
            if result.status == LoadStatus.SKIPPED:
                logger.warning("Skipped %s: %s", result.file.relative_path, result.message)
            elif result.status == LoadStatus.FAILED:
                logger.error(
                    "Error loading %s %s: %s",
                    self.kind.value, result.file.relative_path, result.message,
                )

        instances = report.instances
        logger.debug(
            "Successfully loaded %d %ss: %s",
            len(instances),
            self.kind.value,
            ", ".join(getattr(i, "name", "?") for i in instances),
        )
        return instances

    def validate_all(self, *, self_check: bool = True) -> ScanReport:
        """Run the pipeline strictly and report every outcome.

        A missing scan root yields a report with a single top-level failure
        and no per-file results.
        """
        if not self._plugin_dir.is_dir():
            message = f"no build output: {self._plugin_dir} does not exist"
            logger.error("Cannot validate %ss: %s", self.kind.value, message)
            return ScanReport(kind=self.kind, root=self._plugin_dir, root_error=message)

        report = self.scan(self_check=self_check)
        if report.passed:
            logger.info("%s", report.summary())
        else:
            logger.error("%s", report.summary())
        return report

    def scan(self, *, self_check: bool = False) -> ScanReport:
        """Run every discovered file through the pipeline, one at a time."""
        report = ScanReport(kind=self.kind, root=self._plugin_dir)
        files = self.discover()
        if not files:
            logger.debug("No %s files found", self.kind.value)
        for plugin_file in files:
            report.results.append(self.process_file(plugin_file, self_check=self_check))
        return report

    def process_file(self, plugin_file: PluginFile, *, self_check: bool = False) -> LoadResult:
        """Produce the ``LoadResult`` for one file.  Never raises."""
        logger.debug("Attempting to load %s from: %s", self.kind.value, plugin_file.path)
        rule = ""
        stage = FailureKind.MODULE_EVALUATION
        try:
            namespace = self._resolver.load(plugin_file.path)
            stage = FailureKind.NO_USABLE_EXPORT
            constructor, rule = self._resolver.extract(namespace, source=plugin_file.name)
            stage = FailureKind.CONSTRUCTION
            instance = instantiate(constructor)
            stage = FailureKind.CONTRACT_VIOLATION
            check_contract(instance, self._profile)
            if self_check:
                stage = FailureKind.SELF_CHECK
                run_self_check(instance, self._config.self_check_method)
        except NoUsableExportError as exc:
            return LoadResult.skipped(plugin_file, exc.failure, str(exc))
        except PluginLoadError as exc:
            return LoadResult.failed(plugin_file, exc.failure, str(exc), export_rule=rule)
        except (Exception, SystemExit) as exc:
            logger.exception("Unexpected error processing %s", plugin_file.relative_path)
            return LoadResult.failed(
                plugin_file, stage, f"{type(exc).__name__}: {exc}", export_rule=rule
            )
        return LoadResult.loaded(plugin_file, instance, export_rule=rule)
