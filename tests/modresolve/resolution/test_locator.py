# tests/modresolve/resolution/test_locator.py
from __future__ import annotations
import errno
import os
from pathlib import Path

import pytest

from modresolve.core.errors import NotFoundError, ResolverIOError
from modresolve.resolution import locator
from modresolve.resolution.locator import locateItem
from modresolve.resolution.types import FoundItem, ItemKind

# A name that will not exist anywhere above tmp_path
ABSENT = "modresolve-test-absent-item-7f3a"


def test_locateItem_findsDirectoryInStartDir(makeTree, settings) -> None:
    root = makeTree({"node_modules": None, "src/a.js": "a"})

    found = locateItem("node_modules", ItemKind.DIRECTORY, root, False, settings=settings)
    assert found == FoundItem(path=root / "node_modules", kind=ItemKind.DIRECTORY)


def test_locateItem_kindMustMatch(makeTree, settings) -> None:
    root = makeTree({"thing/inner.txt": "x", "other": "plain file"})

    with pytest.raises(NotFoundError):
        locateItem("thing", "file", root, False, settings=settings)
    with pytest.raises(NotFoundError):
        locateItem("other", "directory", root, False, settings=settings)

    assert locateItem("other", "file", root, False, settings=settings).path == root / "other"


def test_locateItem_nonRecursiveMissNeverInspectsParent(makeTree, settings, monkeypatch) -> None:
    root = makeTree({"package.json": {"name": "top"}, "a/b/c": None})
    start = root / "a" / "b" / "c"

    listed: list[Path] = []
    realListDir = locator._listDir

    def spyListDir(directory: Path) -> list[str]:
        listed.append(directory)
        return realListDir(directory)

    monkeypatch.setattr(locator, "_listDir", spyListDir)

    with pytest.raises(NotFoundError) as excInfo:
        locateItem("package.json", ItemKind.FILE, start, False, settings=settings)

    assert listed == [start]
    assert excInfo.value.searched == (str(start),)
    assert excInfo.value.startDir == str(start)


def test_locateItem_recursiveFindsAncestorMatch(makeTree, settings) -> None:
    root = makeTree({
        "package.json": {"name": "top"},
        "a/unrelated.txt": "x",
        "a/b/also-unrelated": None,
        "a/b/c/d": None,
    })

    found = locateItem("package.json", ItemKind.FILE, root / "a" / "b" / "c" / "d", True, settings=settings)
    assert found.path == root / "package.json"
    assert found.kind is ItemKind.FILE


def test_locateItem_recursivePrefersNearestMatch(makeTree, settings) -> None:
    root = makeTree({"package.json": {}, "pkg/package.json": {}, "pkg/lib": None})

    found = locateItem("package.json", ItemKind.FILE, root / "pkg" / "lib", True, settings=settings)
    assert found.path == root / "pkg" / "package.json"


def test_locateItem_recursiveExhaustsAtRoot(makeTree, settings) -> None:
    root = makeTree({"a/b": None})
    start = root / "a" / "b"

    with pytest.raises(NotFoundError) as excInfo:
        locateItem(ABSENT, ItemKind.DIRECTORY, start, True, settings=settings)

    err = excInfo.value
    assert "root directory" in str(err)
    assert err.name == ABSENT
    assert err.searched[0] == str(start)
    assert err.searched[-1] == os.path.abspath(os.sep)
    assert len(err.searched) == len(start.parts)


def test_locateItem_relativeStartDir(makeTree, settings, monkeypatch) -> None:
    root = makeTree({"proj/node_modules": None, "proj/src": None})
    monkeypatch.chdir(root / "proj")

    found = locateItem("node_modules", "directory", "src", True, settings=settings)
    assert found.path == root / "proj" / "node_modules"
    assert found.path.is_absolute()


def test_locateItem_danglingSymlinkIsNotAMatch(makeTree, settings) -> None:
    root = makeTree({"real.txt": "x"})
    try:
        os.symlink(root / "missing-target", root / "dangling")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks unavailable")

    assert locateItem("real.txt", "file", root, False, settings=settings).path == root / "real.txt"
    with pytest.raises(NotFoundError):
        locateItem("dangling", "file", root, False, settings=settings)


def test_locateItem_symlinkLoopIsNotAMatch(makeTree, settings) -> None:
    root = makeTree({"node_modules": None, "proj/src": None})
    try:
        os.symlink("loop", root / "proj" / "loop")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks unavailable")

    found = locateItem("node_modules", "directory", root / "proj" / "src", True, settings=settings)
    assert found.path == root / "node_modules"
    with pytest.raises(NotFoundError):
        locateItem("loop", "file", root / "proj", False, settings=settings)


def test_locateItem_symlinkedDirectoryCountsAsDirectory(makeTree, settings) -> None:
    root = makeTree({"store/lodash": None})
    try:
        os.symlink(root / "store", root / "node_modules", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks unavailable")

    found = locateItem("node_modules", "directory", root, False, settings=settings)
    assert found.path == root / "node_modules"


def test_locateItem_statFailurePropagatesAsIOError(makeTree, settings, monkeypatch) -> None:
    root = makeTree({"locked": None, "node_modules": None})
    realStat = os.stat

    def fakeStat(path, *args, **kwargs):
        if Path(path).name == "locked":
            raise PermissionError(errno.EACCES, "Permission denied", str(path))
        return realStat(path, *args, **kwargs)

    monkeypatch.setattr(locator.os, "stat", fakeStat)

    # Searching for an absent name forces every entry to be inspected
    with pytest.raises(ResolverIOError) as excInfo:
        locateItem(ABSENT, "directory", root, False, settings=settings)
    assert excInfo.value.errno == errno.EACCES
    assert excInfo.value.path == str(root / "locked")
    assert not isinstance(excInfo.value, NotFoundError)


def test_locateItem_missingStartDirIsIOError(tmp_path: Path, settings) -> None:
    with pytest.raises(ResolverIOError) as excInfo:
        locateItem("x", "file", tmp_path / "does-not-exist", True, settings=settings)
    assert excInfo.value.errno == errno.ENOENT
    assert isinstance(excInfo.value, OSError)


@pytest.mark.parametrize("name", ["", "a/b", ".", ".."])
def test_locateItem_rejectsInvalidNames(tmp_path: Path, settings, name: str) -> None:
    with pytest.raises(ValueError):
        locateItem(name, "file", tmp_path, False, settings=settings)


def test_locateItem_rejectsUnknownKind(tmp_path: Path, settings) -> None:
    with pytest.raises(ValueError):
        locateItem("x", "socket", tmp_path, False, settings=settings)


def test_locateItem_singleWorkerMatchesPool(makeTree) -> None:
    from modresolve.config.settings import ResolverSettings

    root = makeTree({f"entry{idx}": None for idx in range(20)} | {"package.json": {}})
    serial = locateItem("package.json", "file", root, False, settings=ResolverSettings(maxWorkers=1))
    pooled = locateItem("package.json", "file", root, False, settings=ResolverSettings(maxWorkers=16))
    assert serial == pooled
