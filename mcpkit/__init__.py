"""mcpkit: scaffolding CLI and plugin loader for MCP-style servers.

The plugin engine walks a build output directory, imports each candidate
file, extracts a constructor from it, instantiates it and checks the
result against the capability contract for its kind (tool, prompt or
resource).  The same pipeline serves two callers:

  - ``PluginLoader.load_all()`` — best-effort loading for live serving
  - ``PluginLoader.validate_all()`` — strict build-time validation
"""

__version__ = "0.3.0"
__description__ = "Plugin discovery, loading and validation for MCP-style servers"

from mcpkit.models.plugins import LoadResult, PluginFile, PluginKind, ScanReport
from mcpkit.plugins.loader import PluginLoader

__all__ = [
    "PluginLoader",
    "PluginKind",
    "PluginFile",
    "LoadResult",
    "ScanReport",
    "__version__",
]
