# tests/modresolve/core/test_dictpath.py
from __future__ import annotations

import pytest

from modresolve.core.dictpath import getByPath


DATA = {
    "resolution": {"maxWorkers": 4, "entryFields": ["browser", "main"]},
    "files": {"package.json": "manifest"},
    "flag": None,
}


def test_getByPath_nested() -> None:
    assert getByPath(DATA, "resolution.maxWorkers") == 4
    assert getByPath(DATA, "resolution.entryFields") == ["browser", "main"]


def test_getByPath_escapedDot() -> None:
    assert getByPath(DATA, "files.package\\.json") == "manifest"
    assert getByPath(DATA, "files.package.json", "fallback") == "fallback"


@pytest.mark.parametrize("path", ["", "a..b", ".a", "a.", "trailing\\"])
def test_getByPath_invalidPathsAreNotFound(path: str) -> None:
    assert getByPath(DATA, path, "default") == "default"


def test_getByPath_storedNoneIsReturned() -> None:
    assert getByPath(DATA, "flag", "default") is None
    assert getByPath(DATA, "resolution.maxWorkers.deeper", "default") == "default"
