"""rpmcraft - RPM file metadata and dependency assembly from archive payloads."""

from rpmcraft.analyzer import BasicFileAnalyzer
from rpmcraft.config import RpmcraftConfig, load_config
from rpmcraft.interfaces import EntryHeader, FileAnalysis, FileAnalyzer, PayloadEntry
from rpmcraft.payload import DirectoryPayload
from rpmcraft.rpm import (
    DependencyPatcher,
    PackageDependency,
    PatchOrderError,
    RpmFile,
    RpmFileCreator,
    RpmMetadata,
    patch_dependencies,
)

__version__ = "0.1.0"

__all__ = [
    "BasicFileAnalyzer",
    "DependencyPatcher",
    "DirectoryPayload",
    "EntryHeader",
    "FileAnalysis",
    "FileAnalyzer",
    "PackageDependency",
    "PatchOrderError",
    "PayloadEntry",
    "RpmFile",
    "RpmFileCreator",
    "RpmMetadata",
    "RpmcraftConfig",
    "load_config",
    "patch_dependencies",
]
