"""Records describing an RPM package: its files and its dependencies."""

from __future__ import annotations

import stat
from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

from rpmcraft.rpm.flags import RpmFileFlags, RpmSense, RpmVerifyFlags, sense_operator

# Size RPM records for every directory entry, whatever the payload reports.
DIRECTORY_SIZE = 0x1000


@dataclass(frozen=True)
class PackageDependency:
    """A provides/requires declaration: name, sense flags and version."""

    name: str
    flags: RpmSense = RpmSense.ANY
    version: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("dependency name cannot be empty")

    def __str__(self) -> str:
        op = sense_operator(self.flags)
        if op and self.version:
            return f"{self.name} {op} {self.version}"
        return self.name


class RpmFile(BaseModel):
    """Metadata RPM keeps for a single payload entry.

    Mutable: ``requires`` is rewritten transiently by the dependency patcher.
    """

    name: str
    size: int = Field(ge=0)
    mode: int
    rdev: int = 0
    modified_time: int = 0
    digest: bytes = b""
    link_to: str = ""
    flags: RpmFileFlags = RpmFileFlags.NONE
    user_name: str = "root"
    group_name: str = "root"
    verify_flags: RpmVerifyFlags = RpmVerifyFlags.ALL
    device: int = 1
    inode: int = 0
    lang: str = ""
    color: int = 0
    file_class: str = ""
    requires: list[PackageDependency] = Field(default_factory=list)
    provides: list[PackageDependency] = Field(default_factory=list)

    @property
    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)

    @property
    def is_directory(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @property
    def digest_hex(self) -> str:
        return self.digest.hex()


class RpmMetadata(BaseModel):
    """Package-level metadata the header is assembled from.

    Owned by the caller; the dependency patcher only appends to
    ``provides`` and ``dependencies``.
    """

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    release: str = Field(min_length=1)
    arch: str = Field(min_length=1)
    files: list[RpmFile] = Field(default_factory=list)
    provides: list[PackageDependency] = Field(default_factory=list)
    dependencies: list[PackageDependency] = Field(default_factory=list)

    @field_validator("name", "version", "release", "arch")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("value cannot be empty or whitespace")
        return v

    @property
    def evr(self) -> str:
        """``version-release`` as used in self-provides."""
        return f"{self.version}-{self.release}"
