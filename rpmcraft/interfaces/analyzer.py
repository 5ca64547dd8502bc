"""File analyzer interface and its result model."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from rpmcraft.interfaces.payload import EntryHeader
from rpmcraft.rpm.flags import RpmFileFlags
from rpmcraft.rpm.models import PackageDependency


class FileAnalysis(BaseModel):
    """Classification of one payload entry."""

    model_config = ConfigDict(frozen=True)

    flags: RpmFileFlags = RpmFileFlags.NONE
    color: int = 0
    file_class: str = ""
    requires: tuple[PackageDependency, ...] = ()
    provides: tuple[PackageDependency, ...] = ()


@runtime_checkable
class FileAnalyzer(Protocol):
    """Classifies a payload entry from its name, header and first content chunk.

    Implementations must be deterministic and must not mutate their inputs.
    """

    def analyze(self, name: str, header: EntryHeader, buffer: bytes) -> FileAnalysis: ...
