"""Shared utilities for metacheck."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_MISSING = object()


def dist_to_namespace(dist_name: str) -> str:
    """Convert a distribution name to its module namespace.

    Examples:
        >>> dist_to_namespace("Foo-Bar")
        'Foo::Bar'
        >>> dist_to_namespace("Foo")
        'Foo'
    """
    return "::".join(part for part in dist_name.split("-") if part)


def in_namespace(module: str, namespace: str) -> bool:
    """Return True when module is the namespace itself or nested inside it."""
    return module == namespace or module.startswith(namespace + "::")


def lookup_dotted(data: Mapping[str, Any], dotted: str) -> Any:
    """Resolve a dotted key path (``resources.bugtracker``) in nested mappings.

    Returns None when any segment is missing or a non-mapping is traversed.
    """
    current: Any = data
    for segment in dotted.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment, _MISSING)
        if current is _MISSING:
            return None
    return current


def is_blank(value: Any) -> bool:
    """Return True for None, empty strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return not value
    return False
