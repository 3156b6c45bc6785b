# modresolve/resolution/types.py
from __future__ import annotations
import os
import stat
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

__all__ = ["ItemKind", "FoundItem", "ResolvedFile"]



class ItemKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"

    @classmethod
    def coerce(cls, value: ItemKind | str) -> ItemKind:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown item kind {value!r} (expected 'file' or 'directory')") from None

    def matches(self, st: os.stat_result) -> bool:
        if self is ItemKind.FILE:
            return stat.S_ISREG(st.st_mode)
        return stat.S_ISDIR(st.st_mode)



@dataclass(frozen=True, slots=True)
class FoundItem:
    """A locator hit; only ever built from a successful stat."""
    path: Path
    kind: ItemKind



@dataclass(frozen=True, slots=True)
class ResolvedFile:
    """
    Result of a full resolution.

    `size` and `mtime` come from the stat that confirmed `path` is a regular file
    during this call. `contents` is only filled by openResolved().
    """
    path: Path
    specifier: str
    baseDir: Path
    size: int
    mtime: float
    contents: bytes | None = None

    @property
    def kind(self) -> ItemKind:
        return ItemKind.FILE

    @classmethod
    def fromStat(cls, path: Path, st: os.stat_result, *, specifier: str, baseDir: Path) -> ResolvedFile:
        return cls(path=path, specifier=specifier, baseDir=baseDir, size=st.st_size, mtime=st.st_mtime)

    def withContents(self, contents: bytes) -> ResolvedFile:
        return replace(self, contents=contents)

    def text(self, encoding: str = "utf-8") -> str:
        if self.contents is None:
            raise ValueError(f"{self.path} was resolved without reading its contents")
        return self.contents.decode(encoding)
