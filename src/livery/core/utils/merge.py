"""Deep merge helpers for layered configuration.

Lists follow override semantics:
- Default: the override list replaces the base list
- A leading "+" element appends the remaining items to the base list
- A leading "=" element explicitly replaces (same as default)
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` onto ``base`` without mutating either.

    Example:
        >>> deep_merge({"overlay": {"sourceDir": "src"}}, {"overlay": {"brandsDirName": "skins"}})
        {'overlay': {'sourceDir': 'src', 'brandsDirName': 'skins'}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            result[key] = merge_arrays(current, value)
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge two lists using the "+"/"=" prefix convention.

    Example:
        >>> merge_arrays(["node_modules"], ["+", "bower_components"])
        ['node_modules', 'bower_components']
        >>> merge_arrays(["node_modules"], ["vendor"])
        ['vendor']
    """
    if not override:
        return list(base)
    first = override[0]
    if first == "+":
        return [*base, *override[1:]]
    if first == "=":
        return list(override[1:])
    return list(override)


__all__ = ["deep_merge", "merge_arrays"]
