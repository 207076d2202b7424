"""Directory entry datatypes and the filesystem reader that produces them.

Renderers consume ``ListingEntry`` objects: the name and directory flag are
known up front, while the full ``EntryInfo`` is fetched on demand through
``info()`` and may fail with ``OSError``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlatformMetadata:
    """POSIX-only stat fields; absent on platforms that do not report them."""

    link_count: int
    uid: int
    gid: int
    block_size: int
    allocated_blocks: int = 0


@dataclass(frozen=True)
class EntryInfo:
    name: str
    is_dir: bool
    mode: int
    size: int
    mtime: datetime
    platform: PlatformMetadata | None = None


class ListingEntry(Protocol):
    name: str
    is_dir: bool

    def info(self) -> EntryInfo: ...


class EntryMetadataError(Exception):
    """Raised when an entry's metadata cannot be read; aborts the listing."""

    def __init__(self, name: str, cause: BaseException) -> None:
        super().__init__(f"unable to get file info for {name}: {cause}")
        self.name = name
        self.cause = cause


class DirectoryReadError(Exception):
    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"unable to read directory {path}: {cause}")
        self.path = path
        self.cause = cause


@dataclass(frozen=True)
class StaticEntry:
    """Entry whose metadata is already known."""

    name: str
    is_dir: bool
    entry_info: EntryInfo

    @classmethod
    def from_info(cls, info: EntryInfo) -> StaticEntry:
        return cls(name=info.name, is_dir=info.is_dir, entry_info=info)

    def info(self) -> EntryInfo:
        return self.entry_info


def platform_metadata_from_stat(st: os.stat_result) -> PlatformMetadata | None:
    """Extract ownership/link/block fields, or ``None`` when unsupported."""
    block_size = getattr(st, "st_blksize", None)
    if block_size is None:
        return None
    return PlatformMetadata(
        link_count=int(st.st_nlink),
        uid=int(st.st_uid),
        gid=int(st.st_gid),
        block_size=int(block_size),
        allocated_blocks=int(getattr(st, "st_blocks", 0)),
    )


def info_from_stat(name: str, st: os.stat_result, is_dir: bool) -> EntryInfo:
    return EntryInfo(
        name=name,
        is_dir=is_dir,
        mode=int(st.st_mode),
        size=int(st.st_size),
        mtime=datetime.fromtimestamp(st.st_mtime),
        platform=platform_metadata_from_stat(st),
    )


class ScannedEntry:
    """Entry backed by ``os.DirEntry``; metadata is read lazily."""

    def __init__(self, dir_entry: os.DirEntry) -> None:
        self._dir_entry = dir_entry
        self.name = dir_entry.name
        try:
            self.is_dir = dir_entry.is_dir(follow_symlinks=False)
        except OSError:
            self.is_dir = False

    def info(self) -> EntryInfo:
        st = self._dir_entry.stat(follow_symlinks=False)
        return info_from_stat(self.name, st, self.is_dir)

    def __repr__(self) -> str:
        return f"ScannedEntry({self.name!r}, is_dir={self.is_dir})"


def read_directory(directory: Path) -> list[ScannedEntry]:
    """List ``directory`` sorted by name, including hidden entries.

    Raises ``DirectoryReadError`` when the directory cannot be scanned.
    """
    try:
        with os.scandir(directory) as it:
            entries = [ScannedEntry(child) for child in it]
    except OSError as exc:
        raise DirectoryReadError(directory, exc) from exc
    entries.sort(key=lambda entry: entry.name)
    logger.debug("read %d entries from %s", len(entries), directory)
    return entries
