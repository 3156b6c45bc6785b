# modresolve/resolution/locator.py
from __future__ import annotations
import errno
import logging
import os
from os import PathLike
from pathlib import Path

from modresolve.config.settings import ResolverSettings, getSettings
from modresolve.core.errors import NotFoundError, ResolverIOError
from .fanout import mapOrdered
from .types import FoundItem, ItemKind

logger = logging.getLogger(__name__)

__all__ = ["locateItem", "absoluteDir"]



def absoluteDir(path: str | PathLike[str]) -> Path:
    """Absolute, normalized form of `path`; symlinks are left as they are."""
    text = os.fspath(path)
    if not text:
        raise ValueError("Directory path must be a non-empty string")
    return Path(os.path.abspath(text))



def _validateName(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise ValueError("Item name must be a non-empty string")
    if "/" in name or os.sep in name or name in (".", ".."):
        raise ValueError(f"Item name must be a single directory entry name, got {name!r}")



def _listDir(directory: Path) -> list[str]:
    try:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries]
    except OSError as err:
        raise ResolverIOError(
            f"Cannot list directory '{directory}': {err.strerror or err}",
            path=directory,
            cause=err,
        ) from err



def _searchDirectory(directory: Path, name: str, kind: ItemKind, maxWorkers: int) -> Path | None:
    """
    Stat every entry of `directory` concurrently and return the entry named
    `name` whose type is `kind`, if any.

    An entry that vanished or is a broken symlink (dangling or looping) is
    simply not a match; any other stat failure is raised.
    """
    def check(entryName: str) -> Path | None:
        entryPath = directory / entryName
        try:
            st = os.stat(entryPath)
        except FileNotFoundError:
            logger.debug("locateItem: '%s' disappeared or is a dangling link", entryPath)
            return None
        except OSError as err:
            if err.errno == errno.ELOOP:
                logger.debug("locateItem: '%s' is a symlink loop", entryPath)
                return None
            raise ResolverIOError(
                f"Cannot stat '{entryPath}': {err.strerror or err}",
                path=entryPath,
                cause=err,
            ) from err

        if entryName == name and kind.matches(st):
            return entryPath
        return None

    results = mapOrdered(check, _listDir(directory), maxWorkers=maxWorkers)
    try:
        for hit in results:
            if hit is not None:
                return hit
    finally:
        results.close()
    return None



def locateItem(
    name: str,
    kind: ItemKind | str,
    startDir: str | PathLike[str],
    recursive: bool = False,
    *,
    settings: ResolverSettings | None = None,
) -> FoundItem:
    """
    Find the entry `name` of type `kind` among the immediate children of `startDir`.

    With `recursive=True` the search continues in each parent directory until
    the item is found or the filesystem root has been inspected.

    Raises:
        NotFoundError     - search exhausted
        ResolverIOError   - a directory could not be listed or an entry could not
                            be stat-ed (permissions, I/O faults, missing startDir)
        ValueError        - invalid name or kind
    """
    _validateName(name)
    itemKind = ItemKind.coerce(kind)
    settings = settings or getSettings()
    start = absoluteDir(startDir)

    searched: list[Path] = []
    current = start
    while True:
        searched.append(current)
        hit = _searchDirectory(current, name, itemKind, settings.maxWorkers)
        if hit is not None:
            logger.debug("locateItem: found %s '%s' at '%s'", itemKind.value, name, hit)
            return FoundItem(path=hit, kind=itemKind)

        if not recursive:
            raise NotFoundError(
                f"Could not find {itemKind.value} {name!r} in '{current}'",
                name=name,
                kind=itemKind.value,
                startDir=start,
                searched=searched,
            )

        parent = current.parent
        if parent == current:
            raise NotFoundError(
                f"Traversed up to root directory from '{start}', but could not find "
                f"{itemKind.value} {name!r}",
                name=name,
                kind=itemKind.value,
                startDir=start,
                searched=searched,
            )
        current = parent
