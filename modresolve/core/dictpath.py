# modresolve/core/dictpath.py
from __future__ import annotations
from typing import Any
from collections.abc import Mapping

__all__ = ["getByPath"]



def _splitPathWithEscapes(path: str) -> list[str]:
    """
    Splits a dotted path where '.' is the segment separator and backslash
    escapes the next character.

    Examples:
      - resolution.maxWorkers -> ["resolution", "maxWorkers"]
      - files.package\\.json  -> ["files", "package.json"]
    """
    parts: list[str] = []
    curr: list[str] = []
    esc = False
    for ch in path or "":
        if esc:
            curr.append(ch)
            esc = False
            continue
        if ch == "\\":
            esc = True
            continue
        if ch == ".":
            parts.append("".join(curr))
            curr = []
            continue
        curr.append(ch)
    if esc:
        raise ValueError("Path ends with a dangling escape (trailing backslash)")
    parts.append("".join(curr))
    return parts



def _validatePathParts(original: str, parts: list[str]) -> None:
    if not isinstance(original, str) or not original:
        raise ValueError("Path must be a non-empty string")
    if not parts or any(part == "" for part in parts):
        raise ValueError(f"Path '{original}' contains empty segment(s)")



_MISSING = object()



def _walk(obj: Any, path: str) -> Any:
    try:
        parts = _splitPathWithEscapes(path)
        _validatePathParts(path, parts)
    except ValueError:
        # Invalid path is treated as "not found"
        return _MISSING

    current: Any = obj
    for part in parts:
        if isinstance(current, Mapping) and part in current:
            current = current[part]
            continue
        return _MISSING
    return current



def getByPath(obj: Any, path: str, default: Any | None = None) -> Any:
    """
    Returns the value at dotted `path` inside nested mappings, or `default`
    when the chain cannot be resolved.
    """
    value = _walk(obj, path)
    return default if value is _MISSING else value
