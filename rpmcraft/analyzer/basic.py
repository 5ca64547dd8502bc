"""Built-in analyzer that classifies entries by path and mode only."""

from __future__ import annotations

import stat

from rpmcraft.interfaces.analyzer import FileAnalysis
from rpmcraft.interfaces.payload import EntryHeader
from rpmcraft.rpm.flags import RpmFileFlags

ELF_MAGIC = b"\x7fELF"

_DOC_PREFIXES = ("/usr/share/doc/", "/usr/share/man/", "/usr/share/info/")
_LICENSE_PREFIXES = ("/usr/share/licenses/",)
_CONFIG_PREFIXES = ("/etc/",)


class BasicFileAnalyzer:
    """Path-based flags and a coarse file class; no symbol extraction.

    Used when no analyzer plugin is configured. Packages with shared
    libraries need a plugin that reads ELF dynamic sections to get
    per-file requires/provides.
    """

    def analyze(self, name: str, header: EntryHeader, buffer: bytes) -> FileAnalysis:
        return FileAnalysis(
            flags=self._flags(name, header),
            file_class=self._file_class(header, buffer),
        )

    def _flags(self, name: str, header: EntryHeader) -> RpmFileFlags:
        if not stat.S_ISREG(header.mode):
            return RpmFileFlags.NONE
        if name.startswith(_LICENSE_PREFIXES):
            return RpmFileFlags.LICENSE
        if name.startswith(_DOC_PREFIXES):
            return RpmFileFlags.DOC
        if name.startswith(_CONFIG_PREFIXES):
            return RpmFileFlags.CONFIG
        return RpmFileFlags.NONE

    def _file_class(self, header: EntryHeader, buffer: bytes) -> str:
        if header.is_directory:
            return "directory"
        if header.is_symlink:
            target = buffer.split(b"\0", 1)[0].decode("utf-8", errors="replace")
            return f"symbolic link to `{target}'"
        if buffer.startswith(ELF_MAGIC):
            return "ELF"
        return ""
