"""RPM file metadata extraction and package dependency patching."""

from rpmcraft.rpm.flags import RpmFileFlags, RpmSense, RpmVerifyFlags
from rpmcraft.rpm.models import DIRECTORY_SIZE, PackageDependency, RpmFile, RpmMetadata
from rpmcraft.rpm.creator import RpmFileCreator
from rpmcraft.rpm.dependencies import (
    GNU_HASH,
    DependencyPatcher,
    PatchOrderError,
    add_ld_dependencies,
    add_package_provides,
    add_rpm_dependencies,
    patch_dependencies,
)

__all__ = [
    "DIRECTORY_SIZE",
    "DependencyPatcher",
    "GNU_HASH",
    "PackageDependency",
    "PatchOrderError",
    "RpmFile",
    "RpmFileCreator",
    "RpmFileFlags",
    "RpmMetadata",
    "RpmSense",
    "RpmVerifyFlags",
    "add_ld_dependencies",
    "add_package_provides",
    "add_rpm_dependencies",
    "patch_dependencies",
]
