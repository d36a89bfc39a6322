"""Shared test fixtures for mcpkit."""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from mcpkit.config import KitConfig
from mcpkit.models.plugins import PluginFile


# ---------------------------------------------------------------------------
# Plugin classes used by fake loaders
# ---------------------------------------------------------------------------


class EchoTool:
    name = "echo"
    description = "Echoes its input"
    tool_definition = {"name": "echo", "inputSchema": {"type": "object"}}

    def tool_call(self, request: Any) -> Any:
        return request


class NamelessTool:
    tool_definition = {"name": "nameless"}

    def tool_call(self, request: Any) -> Any:
        return request


class ExplodingTool:
    def __init__(self) -> None:
        raise RuntimeError("boom in __init__")


class SelfCheckingTool(EchoTool):
    name = "checked"

    def validate(self) -> None:
        raise ValueError("schema is missing a description")


# ---------------------------------------------------------------------------
# Plugin sources written to disk
# ---------------------------------------------------------------------------

VALID_TOOL_SOURCE = '''
class GreetTool:
    name = "{name}"
    description = "Says hello"
    tool_definition = {{"name": "{name}", "inputSchema": {{"type": "object"}}}}

    def tool_call(self, request):
        return "Hello, " + request["name"]


default = GreetTool
'''

NAMED_EXPORT_TOOL_SOURCE = '''
from typing import Any

BASE_URL = "https://example.invalid"


class WeatherTool:
    name = "weather"
    tool_definition = {"name": "weather"}

    def tool_call(self, request: Any) -> Any:
        return {"forecast": "sunny"}
'''

RAISING_SOURCE = '''
raise ImportError("optional dependency missing")
'''

SYNTAX_ERROR_SOURCE = '''
class Broken(:
    pass
'''


@pytest.fixture
def kit_config() -> KitConfig:
    """Provide a KitConfig with defaults, ignoring any .env file."""
    return KitConfig(_env_file=None)


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture: write *source* at *relative* under a root directory."""

    def _write(relative: str, source: str = "", root: Path | None = None) -> Path:
        target = (root or tmp_path) / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(source), encoding="utf-8")
        return target

    return _write


@pytest.fixture
def tools_dir(tmp_path: Path) -> Path:
    """Provide an existing, empty ``dist/tools`` directory."""
    path = tmp_path / "dist" / "tools"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def make_plugin_file() -> Callable[..., PluginFile]:
    """Factory fixture: build a PluginFile without touching the disk."""

    def _factory(relative_path: str = "echo_tool.py", root: Path = Path("/srv/dist/tools")) -> PluginFile:
        path = root / relative_path
        return PluginFile(path=path, relative_path=relative_path, name=path.name)

    return _factory


@pytest.fixture
def fake_loader() -> Callable[[dict[str, Any]], Callable[[Path], Any]]:
    """Factory fixture: a module loader returning canned namespaces by file name.

    A value that is an exception instance is raised instead of returned.
    """

    def _factory(namespaces: dict[str, Any]) -> Callable[[Path], Any]:
        def _load(path: Path) -> Any:
            _load.calls.append(Path(path).name)  # type: ignore[attr-defined]
            namespace = namespaces[Path(path).name]
            if isinstance(namespace, BaseException):
                raise namespace
            return namespace

        _load.calls = []  # type: ignore[attr-defined]
        return _load

    return _factory


EXITING_SOURCE = '''
import sys

sys.exit(3)
'''

EXIT_IN_INIT_SOURCE = '''
import sys


class Quitter:
    name = "quitter"
    tool_definition = {"name": "quitter"}

    def __init__(self):
        sys.exit(1)

    def tool_call(self, request):
        return request


default = Quitter
'''

EXIT_IN_VALIDATE_SOURCE = '''
import sys


class Bailer:
    name = "bailer"
    tool_definition = {"name": "bailer"}

    def tool_call(self, request):
        return request

    def validate(self):
        sys.exit(0)


default = Bailer
'''
