"""Instantiation and capability-contract checks for resolved constructors."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from mcpkit.models.plugins import KindProfile
from mcpkit.plugins.errors import (
    ConstructionError,
    ContractViolationError,
    SelfCheckError,
)

logger = logging.getLogger(__name__)


def instantiate(constructor: Callable[..., Any]) -> Any:
    """Call *constructor* with no arguments.

    Raises
    ------
    ConstructionError
        If the call raised.
    """
    try:
        return constructor()
    except (Exception, SystemExit) as exc:
        raise ConstructionError(
            f"constructor raised {type(exc).__name__}: {exc}"
        ) from exc


def definition_of(instance: Any, profile: KindProfile) -> Any:
    """First non-None definition attribute accepted by *profile*, or None."""
    for attr in profile.definition_attrs:
        value = getattr(instance, attr, None)
        if value is not None:
            return value
    return None


def handlers_of(instance: Any, profile: KindProfile) -> list[str]:
    """Names of the callable handler methods *instance* provides."""
    return [
        attr for attr in profile.handler_attrs
        if callable(getattr(instance, attr, None))
    ]


def check_contract(instance: Any, profile: KindProfile) -> None:
    """Verify *instance* satisfies the capability contract for its kind.

    The contract is all-or-nothing: a non-empty string ``name``, a
    definition object under one of ``profile.definition_attrs`` and at
    least one callable handler from ``profile.handler_attrs``.

    Raises
    ------
    ContractViolationError
        Naming the first missing or mistyped field.
    """
    if instance is None:
        raise ContractViolationError("constructor returned None")

    name = getattr(instance, "name", None)
    if not isinstance(name, str):
        raise ContractViolationError(
            f"'name' must be a string, got {type(name).__name__}"
        )
    if not name.strip():
        raise ContractViolationError("'name' must be a non-empty string")

    if definition_of(instance, profile) is None:
        raise ContractViolationError(
            f"{profile.kind.value} '{name}' has no definition "
            f"(expected one of: {', '.join(profile.definition_attrs)})"
        )

    if not handlers_of(instance, profile):
        raise ContractViolationError(
            f"{profile.kind.value} '{name}' has no callable handler "
            f"(expected one of: {', '.join(profile.handler_attrs)})"
        )

    logger.debug("Validated %s: %s", profile.kind.value, name)


def run_self_check(instance: Any, method: str = "validate") -> bool:
    """Invoke the instance's own validation hook if it has one.

    Returns ``True`` when the hook ran and passed, ``False`` when the
    instance defines no hook.

    Raises
    ------
    SelfCheckError
        If the hook raised or explicitly returned ``False``.
    """
    hook = getattr(instance, method, None)
    if not callable(hook):
        return False

    try:
        outcome = hook()
    except (Exception, SystemExit) as exc:
        raise SelfCheckError(f"{method}() failed: {type(exc).__name__}: {exc}") from exc

    if outcome is False:
        raise SelfCheckError(f"{method}() returned False")
    return True
