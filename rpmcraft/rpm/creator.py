"""Builds per-file RPM metadata from an archive payload."""

from __future__ import annotations

import hashlib
import logging
from typing import TYPE_CHECKING, BinaryIO

from rpmcraft.interfaces.payload import Payload, PayloadEntry
from rpmcraft.rpm.flags import RpmVerifyFlags
from rpmcraft.rpm.models import DIRECTORY_SIZE, RpmFile

if TYPE_CHECKING:
    from rpmcraft.config.models import RpmcraftConfig
    from rpmcraft.interfaces.analyzer import FileAnalyzer
    from rpmcraft.plugins.loader import PluginLoader

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024

# Every payload entry is owned by the superuser.
OWNER = "root"


def _read_entry(stream: BinaryIO, chunk_size: int) -> tuple[bytes, bytes]:
    """Hash *stream* chunk by chunk; return (sha256 digest, first chunk).

    Reading stops at the first chunk shorter than *chunk_size*.
    """
    hasher = hashlib.sha256()
    header: bytes | None = None
    while True:
        chunk = stream.read(chunk_size)
        if header is None:
            header = chunk
        hasher.update(chunk)
        if len(chunk) < chunk_size:
            break
    return hasher.digest(), header or b""


def _normalize_name(entry_name: str) -> str:
    """Drop the single leading '.' the payload puts in front of every path."""
    if entry_name.startswith("."):
        return entry_name[1:]
    return entry_name


def _decode_link_target(buffer: bytes) -> str:
    """Decode a symlink target from the first content chunk.

    Only the first chunk is inspected, so a target longer than the chunk
    size comes back truncated. Bytes that are not valid UTF-8, including a
    multibyte character cut at the chunk boundary, become U+FFFD.
    """
    end = buffer.find(b"\0")
    if end == -1:
        end = len(buffer)
    return buffer[:end].decode("utf-8", errors="replace")


class RpmFileCreator:
    """Turns payload entries into RpmFile records.

    Content-sensitive classification (flags, color, class, per-file
    requires/provides) is delegated to a FileAnalyzer.
    """

    def __init__(
        self,
        analyzer: FileAnalyzer | None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if analyzer is None:
            raise ValueError("RpmFileCreator requires a file analyzer")
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.analyzer = analyzer
        self.chunk_size = chunk_size

    @classmethod
    def from_config(
        cls, config: RpmcraftConfig, loader: PluginLoader | None = None
    ) -> RpmFileCreator:
        """Build a creator from app config, resolving the analyzer plugin."""
        from rpmcraft.plugins.loader import PluginLoader

        loader = loader or PluginLoader(config)
        analyzer_cls = loader.load_analyzer()
        return cls(analyzer_cls(), chunk_size=config.payload.chunk_size)

    def create_file(self, entry: PayloadEntry) -> RpmFile:
        """Read one entry's content and build its RpmFile."""
        with entry.open() as stream:
            digest, buffer = _read_entry(stream, self.chunk_size)

        header = entry.header
        name = _normalize_name(entry.name)
        size = header.file_size
        link_to = ""

        if header.is_symlink:
            link_to = _decode_link_target(buffer)
            digest = b""
        elif header.is_directory:
            size = DIRECTORY_SIZE
            digest = b""

        analysis = self.analyzer.analyze(name, header, buffer)

        logger.debug("payload entry %s: mode=%o size=%d", name, header.mode, size)
        return RpmFile(
            name=name,
            size=size,
            mode=header.mode,
            rdev=header.rdev_major,
            modified_time=header.mtime,
            digest=digest,
            link_to=link_to,
            flags=analysis.flags,
            user_name=OWNER,
            group_name=OWNER,
            verify_flags=RpmVerifyFlags.ALL,
            device=1,
            inode=header.ino,
            lang="",
            color=analysis.color,
            file_class=analysis.file_class,
            requires=list(analysis.requires),
            provides=list(analysis.provides),
        )

    def create_files(self, payload: Payload) -> list[RpmFile]:
        """Build an RpmFile for every entry in *payload*, in payload order."""
        files = [self.create_file(entry) for entry in payload]
        logger.info("Collected metadata for %d payload entries", len(files))
        return files
