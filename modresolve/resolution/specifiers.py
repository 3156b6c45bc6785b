# modresolve/resolution/specifiers.py
from __future__ import annotations
import posixpath

from modresolve.config.settings import ResolverSettings, getSettings

__all__ = [
    "isBareModuleSpecifier",
    "isBareModuleMainSpecifier",
    "isRelativeOrAbsoluteSpecifier",
    "splitModuleSpecifier",
]

_PATH_PREFIXES = ("/", "./", "../")



def _hasDefaultExtension(specifier: str, settings: ResolverSettings | None) -> bool:
    """True when `specifier` carries the default source extension."""
    ext = (settings or getSettings()).defaultExtension
    return posixpath.splitext(specifier)[1] == ext



def isRelativeOrAbsoluteSpecifier(specifier: str) -> bool:
    return specifier in (".", "..") or specifier.startswith(_PATH_PREFIXES)



def isBareModuleSpecifier(specifier: str, *, settings: ResolverSettings | None = None) -> bool:
    """
    Identifies specifiers that target an installed module (or a file inside one):
        "lodash"       => True
        "lodash/array" => True
        "./a"          => False
        "../a"         => False
        "/a"           => False
        "a.js"         => False
        "lodash/"      => False
    """
    if not isinstance(specifier, str):
        raise TypeError(f"specifier must be a str, not {type(specifier).__name__}")

    return (
        specifier != ""
        and not isRelativeOrAbsoluteSpecifier(specifier)
        and not specifier.endswith("/")
        and not _hasDefaultExtension(specifier, settings)
    )



def isBareModuleMainSpecifier(specifier: str, *, settings: ResolverSettings | None = None) -> bool:
    """
    True for a module's main entry ("lodash"), False for anything inside it
    ("lodash/array") or any path-like specifier.
    """
    if not isinstance(specifier, str):
        raise TypeError(f"specifier must be a str, not {type(specifier).__name__}")

    return (
        specifier != ""
        and specifier not in (".", "..")
        and "/" not in specifier
        and not _hasDefaultExtension(specifier, settings)
    )



def splitModuleSpecifier(specifier: str) -> tuple[str, str]:
    """
    Split a bare specifier into (moduleName, remainder):
        "lodash/array/map" => ("lodash", "array/map")
        "@scope/pkg/lib/x" => ("@scope/pkg", "lib/x")
        "@scope/pkg"       => ("@scope/pkg", "")
    """
    head, _, rest = specifier.partition("/")
    if head.startswith("@") and rest:
        scoped, _, rest = rest.partition("/")
        return f"{head}/{scoped}", rest
    return head, rest
