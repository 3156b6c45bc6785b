# modresolve/core/paths.py
from __future__ import annotations
import os
import re
from os import PathLike

__all__ = [
    "splitSegments", "nearestCommonAncestor",
    "hasDependencyDirSegment", "moduleNameFromPath",
]

_SEP_RE = re.compile("[" + re.escape(os.sep + (os.altsep or "")) + "]")



def splitSegments(path: str | PathLike[str]) -> list[str]:
    """
    Split a path on the platform separators.

    An absolute path keeps a leading "" segment so that "/a" and "a" never share
    their first segment. Trailing and repeated separators produce no segments.
    """
    text = os.fspath(path)
    if not text:
        return []
    first, *rest = _SEP_RE.split(text)
    return [first, *(seg for seg in rest if seg)]



def nearestCommonAncestor(pathA: str | PathLike[str], pathB: str | PathLike[str]) -> str:
    """
    Return the nearest directory containing both paths, always ending with a separator.

    Comparison is by whole segments, never by shared character prefix:
        nearestCommonAncestor("/a/bb", "/a/ab") -> "/a/"
        nearestCommonAncestor("/a/b", "/a/b/c") -> "/a/b/"
    Returns "" when the paths share no segment at all (e.g. two unrelated relative paths).
    """
    segsA = splitSegments(pathA)
    segsB = splitSegments(pathB)

    common: list[str] = []
    for segA, segB in zip(segsA, segsB):
        if segA != segB:
            break
        common.append(segA)

    if not common:
        return ""
    # Root only: [""] joins to "", so spell it out
    if common == [""]:
        return os.sep
    return os.sep.join(common) + os.sep



def _dependencyDirName(dependencyDirName: str | None) -> str:
    if dependencyDirName:
        return dependencyDirName
    from modresolve.config.settings import getSettings
    return getSettings().dependencyDirName



def hasDependencyDirSegment(path: str | PathLike[str], *, dependencyDirName: str | None = None) -> bool:
    """True when one of the segments of `path` is the dependency directory."""
    return _dependencyDirName(dependencyDirName) in splitSegments(path)



def moduleNameFromPath(path: str | PathLike[str], *, dependencyDirName: str | None = None) -> str:
    """
    Returns the module name owning `path`, read after the *last* dependency directory:
      1) /project/node_modules/lodash/array/map          => lodash
      2) /project/node_modules/lodash/node_modules/jquery => jquery
      3) /project/node_modules/@scope/pkg/lib             => @scope/pkg
      4) /project/lib                                     => ""
    """
    depName = _dependencyDirName(dependencyDirName)
    segments = splitSegments(path)

    try:
        idx = len(segments) - 1 - segments[::-1].index(depName)
    except ValueError:
        return ""

    rest = segments[idx + 1:]
    if not rest:
        return ""
    if rest[0].startswith("@") and len(rest) > 1:
        return f"{rest[0]}/{rest[1]}"
    return rest[0]
