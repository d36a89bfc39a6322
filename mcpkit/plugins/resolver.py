"""Module loading and constructor extraction.

A ``ModuleLoader`` turns a file path into a namespace: a module, a mapping
of exported names, or any other object.  The default loader imports the
file with :mod:`importlib`; tests inject a fake that returns canned
namespaces.

Constructor extraction is an ordered list of export rules, tried in
sequence until one returns a callable:

1. ``from_default_export`` — the namespace's ``default`` export.
2. ``from_callable_namespace`` — the namespace object itself.
3. ``from_single_named_export`` — the only named export, if there is
   exactly one.

No match raises ``NoUsableExportError``; the file is skipped, not failed.
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import sys
import types
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from mcpkit.plugins.errors import ModuleEvaluationError, NoUsableExportError

logger = logging.getLogger(__name__)

ModuleLoader = Callable[[Path], Any]

_MODULE_PREFIX = "_mcpkit_plugin_"


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def synthetic_module_name(path: Path) -> str:
    digest = hashlib.sha256(str(path).encode("utf-8")).hexdigest()[:16]
    return f"{_MODULE_PREFIX}{digest}"


def import_module_from_path(path: Path) -> types.ModuleType:
    """Execute the file at *path* once and return the resulting module.

    The module is registered in ``sys.modules`` under a name unique to its
    path only while it is being executed, so plugins that share a file
    name never collide and nothing outlives the scan.

    Raises
    ------
    ModuleEvaluationError
        If no import spec can be built or executing the module raised.
    """
    path = Path(path)
    module_name = synthetic_module_name(path.resolve())
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ModuleEvaluationError(f"cannot create an import spec for {path.name}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except (Exception, SystemExit) as exc:
        raise ModuleEvaluationError(f"{type(exc).__name__}: {exc}") from exc
    finally:
        sys.modules.pop(module_name, None)
    return module


# ---------------------------------------------------------------------------
# Export views
# ---------------------------------------------------------------------------

class ExportContext(BaseModel):
    """Settings shared by the export rules for one resolver."""

    model_config = ConfigDict(frozen=True)

    default_export: str = "default"


ExportRule = Callable[[Any, ExportContext], Callable[..., Any] | None]


def namespace_mapping(namespace: Any) -> Mapping[str, Any]:
    """View *namespace* as a name -> value mapping."""
    if isinstance(namespace, Mapping):
        return namespace
    try:
        return vars(namespace)
    except TypeError:
        return {}


def named_exports(namespace: Any) -> dict[str, Any]:
    """Names the namespace exports on purpose.

    ``__all__`` wins when present.  For a real module, only public objects
    defined in that module count; imports (the framework base class,
    typing helpers) and plain constants do not.  For a bare mapping every
    public, non-module name counts.
    """
    members = namespace_mapping(namespace)
    declared = members.get("__all__")
    if declared is not None:
        return {name: members[name] for name in declared if name in members}

    owner = members.get("__name__")
    exports: dict[str, Any] = {}
    for name, value in members.items():
        if name.startswith("_") or isinstance(value, types.ModuleType):
            continue
        if owner is not None and getattr(value, "__module__", None) != owner:
            continue
        exports[name] = value
    return exports


# ---------------------------------------------------------------------------
# Export rules
# ---------------------------------------------------------------------------

def from_default_export(namespace: Any, ctx: ExportContext) -> Callable[..., Any] | None:
    candidate = namespace_mapping(namespace).get(ctx.default_export)
    return candidate if callable(candidate) else None


def from_callable_namespace(namespace: Any, ctx: ExportContext) -> Callable[..., Any] | None:
    if isinstance(namespace, types.ModuleType):
        return None
    return namespace if callable(namespace) else None


def from_single_named_export(namespace: Any, ctx: ExportContext) -> Callable[..., Any] | None:
    exports = named_exports(namespace)
    if len(exports) != 1:
        return None
    (candidate,) = exports.values()
    return candidate if callable(candidate) else None


DEFAULT_EXPORT_RULES: tuple[ExportRule, ...] = (
    from_default_export,
    from_callable_namespace,
    from_single_named_export,
)


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

class ConstructorResolver:
    """Loads a plugin file and picks its constructor.

    Parameters
    ----------
    module_loader:
        Callable from file path to namespace.  Defaults to
        ``import_module_from_path``.
    rules:
        Ordered export rules; the first one returning a callable wins.
    default_export:
        Name of the export consulted by ``from_default_export``.

    Examples
    --------
    >>> resolver = ConstructorResolver(module_loader=lambda p: {"Echo": dict})
    >>> ctor, rule = resolver.resolve(Path("echo.py"))
    >>> ctor is dict, rule
    (True, 'from_single_named_export')
    """

    def __init__(
        self,
        module_loader: ModuleLoader | None = None,
        rules: Sequence[ExportRule] = DEFAULT_EXPORT_RULES,
        default_export: str = "default",
    ) -> None:
        self._module_loader = module_loader or import_module_from_path
        self._rules = tuple(rules)
        self._ctx = ExportContext(default_export=default_export)

    @property
    def rules(self) -> tuple[ExportRule, ...]:
        return self._rules

    def load(self, path: Path) -> Any:
        """Evaluate *path* via the module loader.

        Any exception from the loader becomes ``ModuleEvaluationError``.
        """
        try:
            return self._module_loader(path)
        except ModuleEvaluationError:
            raise
        except (Exception, SystemExit) as exc:
            raise ModuleEvaluationError(f"{type(exc).__name__}: {exc}") from exc

    def extract(self, namespace: Any, source: str = "<namespace>") -> tuple[Callable[..., Any], str]:
        """Apply the export rules in order to an already-loaded namespace."""
        for rule in self._rules:
            constructor = rule(namespace, self._ctx)
            if constructor is not None:
                rule_name = getattr(rule, "__name__", repr(rule))
                logger.debug("%s: constructor found by %s", source, rule_name)
                return constructor, rule_name
        raise NoUsableExportError(f"no usable export found in {source}")

    def resolve(self, path: Path) -> tuple[Callable[..., Any], str]:
        """Load *path* and return ``(constructor, rule_name)``.

        Raises
        ------
        ModuleEvaluationError
            If evaluating the file raised.
        NoUsableExportError
            If no rule matched.
        """
        namespace = self.load(path)
        return self.extract(namespace, source=Path(path).name)
