"""Scan root resolution for compiled plugin artifacts.

Candidates, first match wins:

1. ``<cwd>/<build_dir>/<kind dir>`` if it exists.
2. ``<base_path>/<kind dir>`` if an explicit base path was given.
3. Derived from the entry script's directory: used as-is when it already
   ends in ``<build_dir>``, otherwise ``<build_dir>`` is appended first.

The returned directory may not exist; callers treat that as "no plugins".
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def entry_module_dir() -> Path:
    """Directory of the currently executing entry script (``sys.argv[0]``)."""
    script = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if not script or script == "-c":
        return Path.cwd()
    return Path(script).resolve().parent


def resolve_plugin_dir(
    kind_dir: str,
    *,
    build_dir: str = "dist",
    base_path: Path | str | None = None,
    cwd: Path | None = None,
    entry_dir: Path | None = None,
) -> Path:
    """Return the single directory to scan for plugins of one kind.

    Parameters
    ----------
    kind_dir:
        Conventional subdirectory for the plugin kind, e.g. ``"tools"``.
    build_dir:
        Name of the build output directory.
    base_path:
        Optional explicit base path supplied by the caller.
    cwd, entry_dir:
        Overrides for the working directory and the entry script directory.

    Examples
    --------
    >>> resolve_plugin_dir("tools", cwd=Path("/nowhere"),
    ...                    entry_dir=Path("/srv/app/dist"))
    PosixPath('/srv/app/dist/tools')
    """
    project_root = cwd if cwd is not None else Path.cwd()
    dist_path = project_root / build_dir / kind_dir

    if dist_path.is_dir():
        logger.debug("Using project build directory for %s: %s", kind_dir, dist_path)
        return dist_path

    if base_path:
        resolved = Path(base_path) / kind_dir
        logger.debug("Using provided base path for %s: %s", kind_dir, resolved)
        return resolved

    module_dir = entry_dir if entry_dir is not None else entry_module_dir()
    if module_dir.name == build_dir:
        resolved = module_dir / kind_dir
    else:
        resolved = module_dir / build_dir / kind_dir
    logger.debug("Using entry module path for %s: %s", kind_dir, resolved)
    return resolved
