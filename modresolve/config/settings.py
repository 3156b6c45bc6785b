# modresolve/config/settings.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from threading import RLock
from typing import Any
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .providers import ConfigProvider, DefaultsProvider, DictProvider, EnvProvider, FileProvider, firstHit

logger = logging.getLogger(__name__)

__all__ = [
    "ResolverSettings", "ENV_VARS", "CONFIG_ENV_VAR",
    "loadSettings", "getSettings", "setSettings", "resetSettings",
]



CONFIG_ENV_VAR = "MODRESOLVE_CONFIG"

# Environment variable -> settings field
ENV_VARS: dict[str, str] = {
    "MODRESOLVE_DEPENDENCY_DIR": "dependencyDirName",
    "MODRESOLVE_MANIFEST_FILE": "manifestFileName",
    "MODRESOLVE_DEFAULT_EXTENSION": "defaultExtension",
    "MODRESOLVE_DEFAULT_INDEX": "defaultIndexFile",
    "MODRESOLVE_MAX_WORKERS": "maxWorkers",
}



class ResolverSettings(BaseModel):
    """Names and limits the resolution engine works with."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    dependencyDirName: str = "node_modules"
    manifestFileName: str = "package.json"
    defaultExtension: str = ".js"
    defaultIndexFile: str = "index.js"
    entryFields: tuple[str, ...] = ("browser", "main")
    maxWorkers: int = Field(default=8, ge=1, le=256)

    @field_validator("dependencyDirName", "manifestFileName", "defaultIndexFile")
    @classmethod
    def checkPlainName(cls, value: str) -> str:
        value = value.strip()
        if not value or value in (".", ".."):
            raise ValueError("must be a non-empty file or directory name")
        if "/" in value or os.sep in value:
            raise ValueError(f"must be a single path segment, got {value!r}")
        return value

    @field_validator("defaultExtension")
    @classmethod
    def checkExtension(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(".") or len(value) < 2 or "/" in value:
            raise ValueError(f"must look like '.js', got {value!r}")
        return value

    @field_validator("entryFields")
    @classmethod
    def checkEntryFields(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not name for name in value):
            raise ValueError("entry field names must be non-empty")
        return value



_DEFAULTS: dict[str, Any] = ResolverSettings().model_dump()



def loadSettings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> ResolverSettings:
    """
    Build settings from layered providers (topmost first):
      1) keyword overrides
      2) MODRESOLVE_* environment variables
      3) json5 file at `path` (or $MODRESOLVE_CONFIG); a missing file is ignored
         unless it was requested explicitly
      4) shipped defaults

    Raises pydantic.ValidationError on invalid values, TypeError on an unparseable file.
    """
    env = os.environ if environ is None else environ
    providers: list[ConfigProvider] = [DictProvider(dict(overrides)), EnvProvider(ENV_VARS, environ=env)]

    filePath = path if path is not None else env.get(CONFIG_ENV_VAR)
    if filePath:
        providers.append(FileProvider(filePath, strict=path is not None))
    providers.append(DefaultsProvider(_DEFAULTS))

    merged: dict[str, Any] = {}
    for key in ResolverSettings.model_fields:
        value = firstHit(providers, key)
        if value is not None:
            merged[key] = value
    # Unknown override keywords reach the model so extra="forbid" rejects them
    merged.update({key: value for key, value in overrides.items() if key not in ResolverSettings.model_fields})

    settings = ResolverSettings.model_validate(merged)
    logger.debug("Resolver settings loaded: %s", settings.model_dump())
    return settings



# ------------------------------------------------------------------ #
# Process-wide settings
# ------------------------------------------------------------------ #

_SETTINGS: ResolverSettings | None = None
_SETTINGS_LOCK = RLock()



def getSettings() -> ResolverSettings:
    """Returns the process-wide settings, loading them on first use."""
    global _SETTINGS
    with _SETTINGS_LOCK:
        if _SETTINGS is None:
            _SETTINGS = loadSettings()
        return _SETTINGS



def setSettings(settings: ResolverSettings) -> None:
    global _SETTINGS
    with _SETTINGS_LOCK:
        _SETTINGS = settings



def resetSettings() -> None:
    """Drop the process-wide settings; the next getSettings() reloads them."""
    global _SETTINGS
    with _SETTINGS_LOCK:
        _SETTINGS = None
