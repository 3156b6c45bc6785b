# tests/modresolve/resolution/test_dependencies.py
from __future__ import annotations

import pytest

from modresolve.config.settings import ResolverSettings
from modresolve.core.errors import DependencyNotFoundError, NotFoundError
from modresolve.resolution.dependencies import findDependencyDir, findModuleDir


def test_findDependencyDir_walksUp(makeTree, settings) -> None:
    root = makeTree({"node_modules/lodash": None, "src/deep/er": None})

    assert findDependencyDir(root / "src" / "deep" / "er", settings=settings) == root / "node_modules"
    assert findDependencyDir(root, settings=settings) == root / "node_modules"


def test_findDependencyDir_customName(makeTree) -> None:
    root = makeTree({"vendor_mods_x1/lib": None, "app": None})
    settings = ResolverSettings(dependencyDirName="vendor_mods_x1")

    assert findDependencyDir(root / "app", settings=settings) == root / "vendor_mods_x1"


def test_findDependencyDir_absentEverywhere(makeTree) -> None:
    root = makeTree({"app": None})
    settings = ResolverSettings(dependencyDirName="modresolve-no-such-deps-dir")

    with pytest.raises(NotFoundError):
        findDependencyDir(root / "app", settings=settings)


def test_findModuleDir_nearestDependencyDir(makeTree, settings) -> None:
    root = makeTree({"node_modules/lodash/index.js": "", "lib": None})

    assert findModuleDir(root / "lib", "lodash", settings=settings) == root / "node_modules" / "lodash"


def test_findModuleDir_fallsBackToOuterDependencyDir(makeTree, settings) -> None:
    # The inner node_modules lacks jquery; the outer one provides it
    root = makeTree({
        "node_modules/jquery/package.json": {"main": "dist/jquery.js"},
        "packages/app/node_modules/lodash": None,
        "packages/app/src": None,
    })

    start = root / "packages" / "app" / "src"
    assert findModuleDir(start, "lodash", settings=settings) == root / "packages" / "app" / "node_modules" / "lodash"
    assert findModuleDir(start, "jquery", settings=settings) == root / "node_modules" / "jquery"


def test_findModuleDir_innerCopyShadowsOuter(makeTree, settings) -> None:
    root = makeTree({
        "node_modules/lodash": None,
        "node_modules/app/node_modules/lodash": None,
        "node_modules/app/lib": None,
    })

    start = root / "node_modules" / "app" / "lib"
    assert findModuleDir(start, "lodash", settings=settings) == root / "node_modules" / "app" / "node_modules" / "lodash"


def test_findModuleDir_fileWithModuleNameIsNotAModule(makeTree, settings) -> None:
    root = makeTree({"node_modules/lodash": "not a directory"})

    with pytest.raises(DependencyNotFoundError) as excInfo:
        findModuleDir(root, "lodash", settings=settings)
    assert excInfo.value.moduleName == "lodash"
    assert excInfo.value.startDir == str(root)


def test_findModuleDir_missingModuleCarriesContext(makeTree) -> None:
    settings = ResolverSettings(dependencyDirName="modresolve_deps_only_here")
    root = makeTree({"modresolve_deps_only_here/other": None, "a/b": None})

    with pytest.raises(DependencyNotFoundError) as excInfo:
        findModuleDir(root / "a" / "b", "left-pad", settings=settings)

    err = excInfo.value
    assert err.moduleName == "left-pad"
    assert err.startDir == str(root / "a" / "b")
    assert "left-pad" in str(err)
    assert isinstance(err.__cause__, NotFoundError)


def test_findModuleDir_scopedModule(makeTree, settings) -> None:
    root = makeTree({"node_modules/@babel/core/package.json": {}})

    assert findModuleDir(root, "@babel/core", settings=settings) == root / "node_modules" / "@babel" / "core"


@pytest.mark.parametrize("moduleName", ["", "a/b", "..", "@scope/", "@scope/pkg/x", "a\\b", "@scope\\pkg"])
def test_findModuleDir_rejectsInvalidNames(tmp_path, settings, moduleName: str) -> None:
    with pytest.raises(ValueError):
        findModuleDir(tmp_path, moduleName, settings=settings)
