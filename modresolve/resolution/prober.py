# modresolve/resolution/prober.py
from __future__ import annotations
import logging
import os
import stat
from dataclasses import replace
from os import PathLike
from pathlib import Path

from modresolve.config.settings import ResolverSettings, getSettings
from modresolve.core.errors import (
    DependencyNotFoundError,
    ManifestError,
    ReadError,
    ResolutionError,
    ResolverIOError,
)
from modresolve.core.logging import logContext
from .dependencies import findModuleDir
from .fanout import mapOrdered
from .locator import absoluteDir
from .manifest import resolveMainEntry
from .specifiers import isBareModuleMainSpecifier, isBareModuleSpecifier, splitModuleSpecifier
from .types import ResolvedFile

logger = logging.getLogger(__name__)

__all__ = ["candidatePaths", "resolveFile", "resolve", "openResolved"]



def candidatePaths(
    baseDir: str | PathLike[str],
    specifier: str,
    *,
    settings: ResolverSettings | None = None,
) -> list[Path]:
    """
    Paths a file specifier may refer to, in priority order. For require('./a'):
      1) a            (the path as written)
      2) a/index.js   (a directory with an index file)
      3) a.js         (extension omitted)
      4) a.jsx → a.js (a compiled sibling of a source file)
    2-4 are only tried when the specifier does not already end in .js.
    Duplicates are dropped, keeping the first occurrence.
    """
    settings = settings or getSettings()
    ext = settings.defaultExtension
    joined = os.path.normpath(os.path.join(os.fspath(baseDir), specifier))

    tryPaths = [joined]
    if os.path.splitext(specifier)[1] != ext:
        tryPaths.append(os.path.join(joined, settings.defaultIndexFile))
        tryPaths.append(joined + ext)
        tryPaths.append(os.path.splitext(joined)[0] + ext)

    return [Path(path) for path in dict.fromkeys(tryPaths)]



def _statRegularFile(path: Path) -> os.stat_result | None:
    try:
        st = os.stat(path)
    except OSError as err:
        logger.debug("candidate '%s' discarded: %s", path, err.strerror or err)
        return None
    if not stat.S_ISREG(st.st_mode):
        logger.debug("candidate '%s' discarded: not a regular file", path)
        return None
    return st



def resolveFile(
    baseDir: str | PathLike[str],
    specifier: str,
    *,
    settings: ResolverSettings | None = None,
) -> ResolvedFile:
    """
    Resolve a relative or absolute file specifier against `baseDir`.

    All candidates are stat-ed concurrently, but the winner is always the
    earliest candidate in list order that is a regular file.
    """
    settings = settings or getSettings()
    base = absoluteDir(baseDir)
    candidates = candidatePaths(base, specifier, settings=settings)

    outcomes = mapOrdered(_statRegularFile, candidates, maxWorkers=settings.maxWorkers)
    try:
        for candidate, st in zip(candidates, outcomes):
            if st is not None:
                logger.debug("resolved '%s' under '%s' to '%s'", specifier, base, candidate)
                return ResolvedFile.fromStat(candidate, st, specifier=specifier, baseDir=base)
    finally:
        outcomes.close()

    raise ResolutionError(specifier, base, candidates=candidates)



def _validateSpecifier(specifier: str) -> None:
    if not isinstance(specifier, str):
        raise TypeError(f"specifier must be a str, not {type(specifier).__name__}")
    if not specifier:
        raise ValueError("specifier must be a non-empty string")



def _inRequest(err: Exception, specifier: str, base: Path) -> str:
    return f"{err} (resolving {specifier!r} from '{base}')"



def _resolveInModule(base: Path, specifier: str, settings: ResolverSettings) -> ResolvedFile:
    if isBareModuleMainSpecifier(specifier, settings=settings):
        # require('lodash')
        moduleDir = findModuleDir(base, specifier, settings=settings)
        return resolveMainEntry(moduleDir, settings=settings)

    # require('lodash/array/map')
    moduleName, remainder = splitModuleSpecifier(specifier)
    moduleDir = findModuleDir(base, moduleName, settings=settings)
    if not remainder:
        # require('@scope/pkg')
        return resolveMainEntry(moduleDir, settings=settings)
    return resolveFile(moduleDir, remainder, settings=settings)



def resolve(
    baseDir: str | PathLike[str],
    specifier: str,
    *,
    settings: ResolverSettings | None = None,
) -> ResolvedFile:
    """
    Find the file `specifier` refers to when required from `baseDir`.

    Dispatch is on the specifier alone:
      - "lodash"           → module directory → manifest entry point
      - "lodash/array/map" → module directory → file inside it
      - "./a", "/a", "a.js" → candidate paths under baseDir

    Raises:
        DependencyNotFoundError - the module is not installed above baseDir
        ManifestError           - the module's manifest cannot be parsed
        ResolutionError         - no candidate path is a regular file
        ResolverIOError         - filesystem failure while searching
    """
    _validateSpecifier(specifier)
    settings = settings or getSettings()
    base = absoluteDir(baseDir)

    with logContext(specifier=specifier, baseDir=str(base)):
        if not isBareModuleSpecifier(specifier, settings=settings):
            return resolveFile(base, specifier, settings=settings)

        # Failures are re-raised naming the request as the caller made it; the inner error stays as __cause__
        try:
            found = _resolveInModule(base, specifier, settings)
        except ResolutionError as err:
            raise ResolutionError(specifier, base, candidates=err.candidates) from err
        except DependencyNotFoundError as err:
            raise DependencyNotFoundError(err.moduleName, base, specifier=specifier) from err
        except ManifestError as err:
            raise ManifestError(
                _inRequest(err, specifier, base), path=err.path, specifier=specifier, baseDir=base,
            ) from err
        except ResolverIOError as err:
            raise ResolverIOError(
                _inRequest(err, specifier, base), path=err.path, cause=err, specifier=specifier, baseDir=base,
            ) from err
        return replace(found, specifier=specifier, baseDir=base)



def openResolved(
    baseDir: str | PathLike[str],
    specifier: str,
    *,
    settings: ResolverSettings | None = None,
) -> ResolvedFile:
    """
    resolve(), then read the file. The returned ResolvedFile carries `contents`.

    Raises ReadError (not ResolutionError) when the resolved file cannot be read.
    """
    found = resolve(baseDir, specifier, settings=settings)
    try:
        data = found.path.read_bytes()
    except OSError as err:
        raise ReadError(
            f"Cannot read '{found.path}' (resolved from {specifier!r} under '{found.baseDir}'): "
            f"{err.strerror or err}",
            path=found.path,
            cause=err,
            specifier=specifier,
            baseDir=found.baseDir,
        ) from err
    return found.withContents(data)
