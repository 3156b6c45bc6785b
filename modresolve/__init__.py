# modresolve/__init__.py
import logging

from .config.settings import ResolverSettings, getSettings, loadSettings, resetSettings, setSettings
from .core.errors import (
    ModResolveError,
    NotFoundError,
    DependencyNotFoundError,
    ManifestError,
    ResolutionError,
    ResolverIOError,
    ReadError,
)
from .core.logging import configureLogging
from .core.paths import nearestCommonAncestor, hasDependencyDirSegment, moduleNameFromPath
from .resolution.types import ItemKind, FoundItem, ResolvedFile
from .resolution.specifiers import isBareModuleSpecifier, isBareModuleMainSpecifier
from .resolution.locator import locateItem
from .resolution.dependencies import findDependencyDir, findModuleDir
from .resolution.manifest import ModuleManifest, findManifest, loadManifest, resolveMainEntry
from .resolution.prober import candidatePaths, resolve, openResolved

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # resolution
    "locateItem",
    "findDependencyDir",
    "findModuleDir",
    "findManifest",
    "loadManifest",
    "resolveMainEntry",
    "resolve",
    "openResolved",
    "candidatePaths",
    # path / specifier introspection
    "nearestCommonAncestor",
    "hasDependencyDirSegment",
    "moduleNameFromPath",
    "isBareModuleSpecifier",
    "isBareModuleMainSpecifier",
    # types
    "ItemKind",
    "FoundItem",
    "ResolvedFile",
    "ModuleManifest",
    "ResolverSettings",
    # errors
    "ModResolveError",
    "NotFoundError",
    "DependencyNotFoundError",
    "ManifestError",
    "ResolutionError",
    "ResolverIOError",
    "ReadError",
    # config / logging
    "getSettings",
    "loadSettings",
    "setSettings",
    "resetSettings",
    "configureLogging",
]
