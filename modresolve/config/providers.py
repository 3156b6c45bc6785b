# modresolve/config/providers.py
from __future__ import annotations
import os
import copy
from dataclasses import dataclass, field
from typing import Any, Protocol, cast
from collections.abc import Mapping
from pathlib import Path
import logging

import json5

from modresolve.core.dictpath import getByPath

logger = logging.getLogger(__name__)

__all__ = [
    "ConfigProvider", "DictProvider", "DefaultsProvider",
    "FileProvider", "EnvProvider", "firstHit",
]



class ConfigProvider(Protocol):
    def get(self, key: str) -> Any | None: ...
    def to_dict(self) -> dict[str, Any]: ...



# ----------------------------------------------
#       Read-only dict (explicit overrides)
# ----------------------------------------------

@dataclass
class DictProvider:
    """
    Read-only mapping, e.g. keyword overrides handed to loadSettings().
    """
    data: Mapping[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any | None:
        return getByPath(self.data, key, None)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(dict(self.data))



class DefaultsProvider(DictProvider):
    """
    Shipped defaults. Identical to DictProvider, kept as its own type so a
    layered lookup can tell which layer supplied a value.
    """



# ----------------------------------------------
#        File-backed provider JSON/JSON5
# ----------------------------------------------

class FileProvider:
    """
    Read-only configuration provider backed by a .json or .json5 file.

    Example:
        fp = FileProvider("./modresolve.json5")
        fp.get("maxWorkers")

    Behavior:
        • Missing file → empty dict (strict=False) or FileNotFoundError (strict=True)
        • Parse error → TypeError naming the file
        • Non-object JSON → TypeError
    """
    def __init__(self, path: str | Path, *, strict: bool = False) -> None:
        self.path = Path(path)
        self._data: dict[str, Any] = {}
        self._load(strict=strict)

    def _load(self, *, strict: bool) -> None:
        if not self.path.exists():
            if strict:
                raise FileNotFoundError(f"{type(self).__name__}: config file '{self.path}' not found")
            logger.debug("%s: '%s' is missing → starting as empty dict", type(self).__name__, self.path)
            return

        if not self.path.is_file():
            raise IsADirectoryError(f"{type(self).__name__}: '{self.path}' exists but is not a file")

        try:
            parsed = json5.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as err:
            raise TypeError(f"{type(self).__name__}: failed to parse '{self.path}': {err}") from err

        if parsed is None:
            logger.debug("%s: parsed is None, starting as empty dict", type(self).__name__)
            return

        if not isinstance(parsed, Mapping):
            raise TypeError(
                f"{type(self).__name__}: file content must be a JSON object, not '{type(parsed).__name__}'"
            )

        self._data = dict(cast(Mapping[str, Any], parsed))
        logger.debug("%s: loaded %d keys from '%s'", type(self).__name__, len(self._data), self.path)

    def get(self, key: str) -> Any | None:
        return getByPath(self._data, key, None)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)



# ----------------------------------------------
#          Environment variables
# ----------------------------------------------

class EnvProvider:
    """
    Maps selected environment variables onto config keys.

    Values stay strings; the settings model does the coercion (e.g. "4" → 4).
    """
    def __init__(self, mapping: Mapping[str, str], *, environ: Mapping[str, str] | None = None) -> None:
        self._mapping = dict(mapping)
        self._environ = os.environ if environ is None else environ

    def get(self, key: str) -> Any | None:
        for envName, configKey in self._mapping.items():
            if configKey != key:
                continue
            value = self._environ.get(envName)
            if value is not None and value.strip() != "":
                return value.strip()
        return None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for configKey in self._mapping.values():
            value = self.get(configKey)
            if value is not None:
                out[configKey] = value
        return out



def firstHit(providers: list[ConfigProvider], key: str) -> Any | None:
    """Read `key` from the topmost provider that has it (providers[0] wins)."""
    for provider in providers:
        value = provider.get(key)
        if value is not None:
            return value
    return None
