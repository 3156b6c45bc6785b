# modresolve/core/errors.py
from __future__ import annotations

import os
from collections.abc import Sequence

__all__ = [
    "ModResolveError",
    "NotFoundError",
    "DependencyNotFoundError",
    "ManifestError",
    "ResolutionError",
    "ResolverIOError",
    "ReadError",
]



def _fmtPath(path: str | os.PathLike[str] | None) -> str | None:
    if path is None:
        return None
    return os.fspath(path)



class ModResolveError(Exception):
    """Base class for every failure raised by the resolution engine."""



class NotFoundError(ModResolveError):
    """Raised when the item locator exhausts its search without a match."""

    def __init__(
        self,
        message: str,
        *,
        name: str,
        kind: str,
        startDir: str | os.PathLike[str],
        searched: Sequence[str | os.PathLike[str]] = (),
    ) -> None:
        super().__init__(message)
        self.name = name
        self.kind = kind
        self.startDir = _fmtPath(startDir)
        self.searched: tuple[str, ...] = tuple(os.fspath(path) for path in searched)



class DependencyNotFoundError(ModResolveError):
    """Raised when no ancestor dependency directory provides the requested module."""

    def __init__(
        self,
        moduleName: str,
        startDir: str | os.PathLike[str],
        *,
        specifier: str | None = None,
    ) -> None:
        requiredAs = f" (required as {specifier!r})" if specifier and specifier != moduleName else ""
        super().__init__(
            f"Could not find module {moduleName!r}{requiredAs} in any dependency directory "
            f"above {os.fspath(startDir)!r}"
        )
        self.moduleName = moduleName
        self.specifier = specifier or moduleName
        self.startDir = _fmtPath(startDir)
        self.baseDir = self.startDir



class ManifestError(ModResolveError):
    """Raised when a manifest file exists but cannot be parsed into a document."""

    def __init__(
        self,
        message: str,
        *,
        path: str | os.PathLike[str],
        specifier: str | None = None,
        baseDir: str | os.PathLike[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.path = _fmtPath(path)
        self.specifier = specifier
        self.baseDir = _fmtPath(baseDir)



class ResolutionError(ModResolveError):
    """Raised when no candidate path derived from a specifier is a regular file."""

    def __init__(
        self,
        specifier: str,
        baseDir: str | os.PathLike[str],
        *,
        candidates: Sequence[str | os.PathLike[str]] = (),
    ) -> None:
        super().__init__(f"no matching file for {specifier} under {os.fspath(baseDir)}")
        self.specifier = specifier
        self.baseDir = _fmtPath(baseDir)
        self.candidates: tuple[str, ...] = tuple(os.fspath(path) for path in candidates)



class ResolverIOError(ModResolveError, OSError):
    """
    Raised when a filesystem call fails for a reason other than non-existence
    (permissions, I/O faults, a start path that is not a directory).

    Subclasses OSError so callers catching OSError keep working; `errno` and
    `filename` mirror the underlying error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | os.PathLike[str],
        cause: OSError | None = None,
        specifier: str | None = None,
        baseDir: str | os.PathLike[str] | None = None,
    ) -> None:
        errno = cause.errno if cause is not None else None
        super().__init__(message)
        self.errno = errno
        self.filename = _fmtPath(path)
        self.path = self.filename
        self.specifier = specifier
        self.baseDir = _fmtPath(baseDir)

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else super().__str__()



class ReadError(ResolverIOError):
    """Raised when the contents of an already resolved file cannot be read."""
