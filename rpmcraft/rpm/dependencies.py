"""Package-level provides and requires that rpmbuild adds on its own.

The three operations must run in order, once each, after the file list is
final. ``DependencyPatcher`` enforces that order; the module-level
functions are the individual steps.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from rpmcraft.rpm.flags import RpmSense
from rpmcraft.rpm.models import PackageDependency, RpmFile, RpmMetadata

logger = logging.getLogger(__name__)

GNU_HASH = "rtld(GNU_HASH)"

_RPMLIB_SENSE = RpmSense.LESS | RpmSense.EQUAL | RpmSense.RPMLIB


def gnu_hash_dependency() -> PackageDependency:
    return PackageDependency(GNU_HASH, RpmSense.FIND_REQUIRES, "")


LD_DEPENDENCIES = (
    PackageDependency("/sbin/ldconfig", RpmSense.INTERP | RpmSense.SCRIPT_POST, ""),
    PackageDependency("/sbin/ldconfig", RpmSense.INTERP | RpmSense.SCRIPT_POSTUN, ""),
)

# rpmbuild emits three rpmlib() requirements, then the file-derived
# rtld(GNU_HASH), then PayloadIsXz. The order is part of the output.
RPM_DEPENDENCIES = (
    PackageDependency("rpmlib(CompressedFileNames)", _RPMLIB_SENSE, "3.0.4-1"),
    PackageDependency("rpmlib(FileDigests)", _RPMLIB_SENSE, "4.6.0-1"),
    PackageDependency("rpmlib(PayloadFilesHavePrefix)", _RPMLIB_SENSE, "4.0-1"),
    gnu_hash_dependency(),
    PackageDependency("rpmlib(PayloadIsXz)", _RPMLIB_SENSE, "5.2-1"),
)


def _normalize_arch(arch: str) -> str:
    return "x86-64" if arch == "x86_64" else arch


def add_package_provides(metadata: RpmMetadata) -> None:
    """Declare that the package provides itself, by name and by name(arch)."""
    evr = metadata.evr
    own = [
        PackageDependency(metadata.name, RpmSense.EQUAL, evr),
        PackageDependency(f"{metadata.name}({_normalize_arch(metadata.arch)})", RpmSense.EQUAL, evr),
    ]
    for dep in own:
        if dep not in metadata.provides:
            metadata.provides.append(dep)


def add_ld_dependencies(metadata: RpmMetadata) -> None:
    """Require /sbin/ldconfig as post-install and post-uninstall interpreter."""
    metadata.dependencies.extend(LD_DEPENDENCIES)


def _hoist_requirement(files: list[RpmFile], name: str) -> list[RpmFile]:
    """Remove requirement *name* from every file that has it; return those files."""
    affected: list[RpmFile] = []
    for f in files:
        matches = [r for r in f.requires if r.name == name]
        if not matches:
            continue
        for r in matches:
            f.requires.remove(r)
        affected.append(f)
    return affected


def _restore_requirement(files: list[RpmFile], dependency: PackageDependency) -> None:
    for f in files:
        f.requires.append(dependency)


def add_rpm_dependencies(metadata: RpmMetadata) -> None:
    """Append the rpmlib() feature requirements with rtld(GNU_HASH) in 4th place.

    rtld(GNU_HASH) is file-derived, so it is taken off the files while the
    package-level list is rebuilt and put back afterwards. The set of files
    requiring it does not change.
    """
    gnu_hash_files = _hoist_requirement(metadata.files, GNU_HASH)

    deps = metadata.dependencies
    if deps and deps[-1].name == GNU_HASH:
        deps.pop()
    deps.extend(RPM_DEPENDENCIES)

    _restore_requirement(gnu_hash_files, gnu_hash_dependency())
    logger.debug(
        "Added rpmlib dependencies; %d file(s) require %s", len(gnu_hash_files), GNU_HASH
    )


class PatchStage(IntEnum):
    """How far a DependencyPatcher has progressed."""

    new = 0
    provides = 1
    ld = 2
    rpmlib = 3


class PatchOrderError(RuntimeError):
    """Raised when a patch stage runs out of order or more than once."""

    def __init__(self, attempted: PatchStage, current: PatchStage) -> None:
        self.attempted = attempted
        self.current = current
        super().__init__(
            f"cannot apply stage {attempted.name!r} after {current.name!r}; "
            "stages run once each, in order provides, ld, rpmlib"
        )


class DependencyPatcher:
    """Applies the package-level dependency patches in their mandated order."""

    def __init__(self, metadata: RpmMetadata) -> None:
        self.metadata = metadata
        self.stage = PatchStage.new

    def _advance(self, target: PatchStage) -> None:
        if self.stage != target - 1:
            raise PatchOrderError(target, self.stage)
        self.stage = target

    def add_package_provides(self) -> DependencyPatcher:
        self._advance(PatchStage.provides)
        add_package_provides(self.metadata)
        return self

    def add_ld_dependencies(self) -> DependencyPatcher:
        self._advance(PatchStage.ld)
        add_ld_dependencies(self.metadata)
        return self

    def add_rpm_dependencies(self) -> DependencyPatcher:
        self._advance(PatchStage.rpmlib)
        add_rpm_dependencies(self.metadata)
        return self

    @property
    def done(self) -> bool:
        return self.stage == PatchStage.rpmlib

    def apply_all(self) -> RpmMetadata:
        """Run every stage not yet applied and return the metadata."""
        steps = (
            (PatchStage.provides, self.add_package_provides),
            (PatchStage.ld, self.add_ld_dependencies),
            (PatchStage.rpmlib, self.add_rpm_dependencies),
        )
        for stage, step in steps:
            if self.stage < stage:
                step()
        logger.info(
            "Patched %s: %d provides, %d requires",
            self.metadata.name,
            len(self.metadata.provides),
            len(self.metadata.dependencies),
        )
        return self.metadata


def patch_dependencies(metadata: RpmMetadata) -> RpmMetadata:
    """Apply all three dependency patches to *metadata*."""
    return DependencyPatcher(metadata).apply_all()
