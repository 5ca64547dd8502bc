"""Payload over a staging directory on disk (the buildroot of an rpmbuild run)."""

from __future__ import annotations

import io
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator

from rpmcraft.interfaces.payload import EntryHeader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryEntry:
    """One entry below a staging root."""

    name: str
    header: EntryHeader
    path: Path

    def open(self) -> BinaryIO:
        if self.header.is_symlink:
            return io.BytesIO(os.fsencode(os.readlink(self.path)))
        # Directories, FIFOs and device nodes carry no payload content.
        if not stat.S_ISREG(self.header.mode):
            return io.BytesIO(b"")
        return open(self.path, "rb")


def _header_from_stat(st: os.stat_result) -> EntryHeader:
    size = st.st_size
    if not (stat.S_ISREG(st.st_mode) or stat.S_ISLNK(st.st_mode)):
        size = 0
    return EntryHeader(
        mode=st.st_mode,
        file_size=size,
        mtime=int(st.st_mtime),
        uid=st.st_uid,
        gid=st.st_gid,
        ino=st.st_ino,
        nlink=st.st_nlink,
        dev_major=os.major(st.st_dev),
        dev_minor=os.minor(st.st_dev),
        rdev_major=os.major(st.st_rdev),
        rdev_minor=os.minor(st.st_rdev),
    )


class DirectoryPayload:
    """Iterates a staging directory as payload entries, sorted by path.

    Entry names are ``./<relative path>``, matching cpio payload naming.
    Sockets cannot be packaged and are skipped.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)
        if not self.root.is_dir():
            raise NotADirectoryError(f"payload root is not a directory: {self.root}")

    def __iter__(self) -> Iterator[DirectoryEntry]:
        for p in sorted(self.root.rglob("*")):
            st = p.lstat()
            if stat.S_ISSOCK(st.st_mode):
                logger.warning("Skipping socket in payload root: %s", p)
                continue
            rel = p.relative_to(self.root).as_posix()
            yield DirectoryEntry(name=f"./{rel}", header=_header_from_stat(st), path=p)
