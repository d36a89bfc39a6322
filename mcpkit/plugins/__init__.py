"""mcpkit plugin engine: discovery, loading and contract validation.

One pipeline serves every plugin kind (tool, prompt, resource); the kind
only selects the directory scanned and the attribute names checked.
"""

from mcpkit.plugins.errors import (
    ConstructionError,
    ContractViolationError,
    ModuleEvaluationError,
    NoUsableExportError,
    PluginLoadError,
    SelfCheckError,
)
from mcpkit.plugins.loader import PluginLoader
from mcpkit.plugins.resolver import ConstructorResolver, import_module_from_path

__all__ = [
    "PluginLoader",
    "ConstructorResolver",
    "import_module_from_path",
    "PluginLoadError",
    "ModuleEvaluationError",
    "NoUsableExportError",
    "ConstructionError",
    "ContractViolationError",
    "SelfCheckError",
]
