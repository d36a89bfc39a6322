"""Recursive candidate-file discovery under a scan root.

Traversal is depth-first with directory entries sorted by name, so two
runs over an unchanged tree yield the same ordered sequence.  A missing
root yields nothing; an unreadable subdirectory is logged and skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from fnmatch import fnmatchcase
from pathlib import Path

from mcpkit.models.plugins import PluginFile

logger = logging.getLogger(__name__)


def is_excluded(file_name: str, exclude_patterns: Iterable[str]) -> bool:
    """Whether *file_name* matches any exact name or wildcard pattern."""
    for pattern in exclude_patterns:
        if file_name == pattern or fnmatchcase(file_name, pattern):
            return True
    return False


def has_allowed_extension(file_name: str, extensions: Iterable[str]) -> bool:
    return any(file_name.endswith(ext) for ext in extensions)


def iter_plugin_files(
    root: Path | str,
    *,
    extensions: Iterable[str],
    exclude_patterns: Iterable[str] = (),
) -> Iterator[PluginFile]:
    """Lazily yield every qualifying file below *root*, in sorted order."""
    root = Path(root)
    extensions = tuple(extensions)
    exclude_patterns = tuple(exclude_patterns)

    if not root.is_dir():
        logger.debug("Scan root does not exist: %s", root)
        return

    abs_root = root.resolve()
    pending = [abs_root]
    while pending:
        directory = pending.pop()
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            logger.warning("Cannot read directory %s: %s", directory, exc)
            continue

        subdirs: list[Path] = []
        for entry in entries:
            if entry.is_dir():
                # Symlinked directories are not followed (no cycles).
                if not entry.is_symlink():
                    subdirs.append(entry)
                continue
            if not entry.is_file():
                continue
            if not has_allowed_extension(entry.name, extensions):
                continue
            if is_excluded(entry.name, exclude_patterns):
                logger.debug("Excluded %s", entry)
                continue
            yield PluginFile(
                path=entry,
                relative_path=entry.relative_to(abs_root).as_posix(),
                name=entry.name,
            )

        # Files of a directory come before its subdirectories, which are
        # visited in name order.
        pending.extend(reversed(subdirs))


def discover_files(
    root: Path | str,
    *,
    extensions: Iterable[str],
    exclude_patterns: Iterable[str] = (),
) -> list[PluginFile]:
    """Return every qualifying file below *root*; empty if *root* is missing.

    Examples
    --------
    >>> discover_files("/does/not/exist", extensions=[".py"])
    []
    """
    return list(
        iter_plugin_files(root, extensions=extensions, exclude_patterns=exclude_patterns)
    )


def has_valid_files(
    root: Path | str,
    *,
    extensions: Iterable[str],
    exclude_patterns: Iterable[str] = (),
) -> bool:
    """True as soon as one qualifying file is found.  Never raises."""
    try:
        for _ in iter_plugin_files(
            root, extensions=extensions, exclude_patterns=exclude_patterns
        ):
            return True
    except OSError as exc:
        logger.debug("File precheck failed for %s: %s", root, exc)
    return False
