import json
import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest

from modresolve.config.settings import ENV_VARS, CONFIG_ENV_VAR, ResolverSettings, resetSettings
from modresolve.core.logging import clearLogContext

TreeSpec = Mapping[str, Any]



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



@pytest.fixture(autouse=True)
def isolatedSettings(monkeypatch):
    """Every test starts from shipped defaults, whatever the caller's environment says."""
    for name in (*ENV_VARS, CONFIG_ENV_VAR, "MODRESOLVE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    resetSettings()
    clearLogContext()
    yield
    resetSettings()
    clearLogContext()



@pytest.fixture()
def settings() -> ResolverSettings:
    return ResolverSettings(maxWorkers=4)



def buildTree(root: Path, layout: TreeSpec) -> Path:
    """
    Materialize a directory tree under `root`.

    Keys are relative paths. Values:
      • str / bytes → file contents
      • dict        → JSON document (manifests)
      • None        → empty directory
    """
    for relPath, content in layout.items():
        target = root / relPath
        if content is None:
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        elif isinstance(content, Mapping):
            target.write_text(json.dumps(content, indent=2), encoding="utf-8")
        else:
            target.write_text(content, encoding="utf-8")
    return root



@pytest.fixture()
def makeTree(tmp_path: Path) -> Callable[[TreeSpec], Path]:
    def _make(layout: TreeSpec) -> Path:
        return buildTree(tmp_path, layout)
    return _make
