# modresolve/resolution/manifest.py
from __future__ import annotations
import logging
from collections.abc import Mapping
from os import PathLike
from pathlib import Path
from typing import Any

import json5
from pydantic import BaseModel, ConfigDict

from modresolve.config.settings import ResolverSettings, getSettings
from modresolve.core.errors import ManifestError, ResolverIOError
from .locator import absoluteDir, locateItem
from .types import ItemKind, ResolvedFile

logger = logging.getLogger(__name__)

__all__ = [
    "ModuleManifest",
    "findManifest",
    "parseManifest",
    "readManifest",
    "loadManifest",
    "selectEntrySpecifier",
    "resolveMainEntry",
]



class ModuleManifest(BaseModel):
    """
    A module's package.json.

    Only the fields the resolver cares about are declared; everything else is
    kept as extra data. All of them stay untyped: real manifests put objects or
    `false` in `browser`, and numbers in `version`. Only `entryField` looks at types.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    name: Any = None
    version: Any = None
    main: Any = None
    browser: Any = None

    def entryField(self, field: str) -> str | None:
        """Value of `field` when it is a non-empty string, otherwise None."""
        if field in type(self).model_fields:
            value = getattr(self, field)
        else:
            value = (self.model_extra or {}).get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None



def findManifest(
    startDir: str | PathLike[str],
    *,
    settings: ResolverSettings | None = None,
) -> Path:
    """
    Finds the manifest file nearest to `startDir`, looking in `startDir` first
    and then in each parent directory.
    """
    settings = settings or getSettings()
    return locateItem(settings.manifestFileName, ItemKind.FILE, startDir, True, settings=settings).path



def parseManifest(text: str, *, path: str | PathLike[str]) -> ModuleManifest:
    """Parse manifest text (JSON, JSON5 accepted) into a ModuleManifest."""
    try:
        raw = json5.loads(text)
    except ValueError as err:
        raise ManifestError(f"Cannot parse manifest '{path}': {err}", path=path) from err

    if not isinstance(raw, Mapping):
        raise ManifestError(
            f"Manifest '{path}' must contain a JSON object, not '{type(raw).__name__}'",
            path=path,
        )

    return ModuleManifest.model_validate(dict(raw))



def readManifest(path: str | PathLike[str]) -> ModuleManifest:
    manifestPath = Path(path)
    try:
        text = manifestPath.read_text(encoding="utf-8")
    except UnicodeDecodeError as err:
        raise ManifestError(f"Manifest '{manifestPath}' is not valid UTF-8: {err}", path=manifestPath) from err
    except OSError as err:
        raise ResolverIOError(
            f"Cannot read manifest '{manifestPath}': {err.strerror or err}",
            path=manifestPath,
            cause=err,
        ) from err
    return parseManifest(text, path=manifestPath)



def loadManifest(
    startDir: str | PathLike[str],
    *,
    settings: ResolverSettings | None = None,
) -> ModuleManifest:
    """Finds the nearest manifest above `startDir` and parses it."""
    return readManifest(findManifest(startDir, settings=settings))



def selectEntrySpecifier(manifest: ModuleManifest, *, settings: ResolverSettings | None = None) -> str:
    """
    Pick the entry point specifier by priority:
      1) browser field
      2) main field
      3) the default index file (index.js)
    Empty or non-string fields count as absent.
    """
    settings = settings or getSettings()
    for field in settings.entryFields:
        value = manifest.entryField(field)
        if value is not None:
            return value
    return settings.defaultIndexFile



def _moduleManifest(moduleDir: Path, settings: ResolverSettings) -> ModuleManifest:
    manifestPath = moduleDir / settings.manifestFileName
    if not manifestPath.is_file():
        # A module without a manifest falls back to its index file
        logger.debug("resolveMainEntry: no '%s' in '%s'", settings.manifestFileName, moduleDir)
        return ModuleManifest()
    return readManifest(manifestPath)



def resolveMainEntry(
    moduleDir: str | PathLike[str],
    *,
    settings: ResolverSettings | None = None,
) -> ResolvedFile:
    """
    Given a module directory, i.e. /home/bob/project/node_modules/lodash,
    resolve the file its manifest declares as entry point.

    Raises:
        ManifestError    - manifest present but unparseable
        ResolutionError  - the declared entry point does not exist
    """
    from .prober import resolveFile

    settings = settings or getSettings()
    moduleRoot = absoluteDir(moduleDir)
    manifest = _moduleManifest(moduleRoot, settings)
    entry = selectEntrySpecifier(manifest, settings=settings)
    logger.debug("resolveMainEntry: '%s' entry point is '%s'", moduleRoot, entry)
    return resolveFile(moduleRoot, entry, settings=settings)
