# modresolve/resolution/dependencies.py
from __future__ import annotations
import logging
import os
from os import PathLike
from pathlib import Path

from modresolve.config.settings import ResolverSettings, getSettings
from modresolve.core.errors import DependencyNotFoundError, NotFoundError, ResolverIOError
from .locator import absoluteDir, locateItem
from .types import ItemKind

logger = logging.getLogger(__name__)

__all__ = ["findDependencyDir", "findModuleDir"]



def findDependencyDir(
    startDir: str | PathLike[str],
    *,
    settings: ResolverSettings | None = None,
) -> Path:
    """
    Finds the dependency directory (node_modules) nearest to `startDir`, looking
    in `startDir` first and then in each parent directory.
    """
    settings = settings or getSettings()
    return locateItem(settings.dependencyDirName, ItemKind.DIRECTORY, startDir, True, settings=settings).path



def _validateModuleName(moduleName: str) -> None:
    if not isinstance(moduleName, str) or not moduleName:
        raise ValueError("Module name must be a non-empty string")
    parts = moduleName.split("/")
    scoped = moduleName.startswith("@") and len(parts) == 2
    # "/" separates a scope from its package; no other separator may appear
    foreignSeps = {sep for sep in (os.sep, os.altsep, "\\") if sep and sep != "/"}
    if (len(parts) > 1 and not scoped) or any(part in ("", ".", "..") for part in parts) \
            or any(sep in moduleName for sep in foreignSeps):
        raise ValueError(f"Invalid module name {moduleName!r}")



def _isDirectory(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError as err:
        raise ResolverIOError(f"Cannot stat '{path}': {err.strerror or err}", path=path, cause=err) from err



def findModuleDir(
    startDir: str | PathLike[str],
    moduleName: str,
    *,
    settings: ResolverSettings | None = None,
) -> Path:
    """
    Finds the directory of an installed module.

    The nearest dependency directory may lack the module while an outer one
    provides it (nested installs), so on a miss the whole search restarts one
    directory above the previous starting point, until the root is exhausted.

    Raises:
        DependencyNotFoundError - no dependency directory above startDir has the module
        ResolverIOError         - filesystem failure other than non-existence
    """
    _validateModuleName(moduleName)
    settings = settings or getSettings()
    start = absoluteDir(startDir)

    current = start
    while True:
        try:
            depDir = findDependencyDir(current, settings=settings)
        except NotFoundError as err:
            # No dependency directory anywhere above: nothing left to retry.
            raise DependencyNotFoundError(moduleName, start) from err

        modulePath = depDir / moduleName
        if _isDirectory(modulePath):
            logger.debug("findModuleDir: '%s' resolved to '%s'", moduleName, modulePath)
            return modulePath

        logger.debug("findModuleDir: '%s' not in '%s', retrying above '%s'", moduleName, depDir, current)
        parent = current.parent
        if parent == current:
            raise DependencyNotFoundError(moduleName, start)
        current = parent
