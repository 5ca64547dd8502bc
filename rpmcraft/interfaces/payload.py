"""Archive payload interface: entries with a metadata header and a content stream."""

from __future__ import annotations

import stat
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Protocol, runtime_checkable


@dataclass(frozen=True)
class EntryHeader:
    """Per-entry metadata block, laid out like a cpio ``newc`` header."""

    mode: int
    file_size: int = 0
    mtime: int = 0
    uid: int = 0
    gid: int = 0
    ino: int = 0
    nlink: int = 1
    dev_major: int = 0
    dev_minor: int = 0
    rdev_major: int = 0
    rdev_minor: int = 0

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)

    @property
    def is_directory(self) -> bool:
        return stat.S_ISDIR(self.mode)


@runtime_checkable
class PayloadEntry(Protocol):
    """A single payload entry.

    ``name`` carries the container's ``./`` prefix. ``open()`` returns a
    fresh stream over the entry content; a short read marks its end.
    """

    name: str
    header: EntryHeader

    def open(self) -> BinaryIO: ...


# Payload readers are plain iterables of entries, consumed once in order.
Payload = Iterable[PayloadEntry]
