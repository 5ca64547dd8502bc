"""Interfaces for payload readers and file analyzers."""

from rpmcraft.interfaces.analyzer import FileAnalysis, FileAnalyzer
from rpmcraft.interfaces.payload import EntryHeader, Payload, PayloadEntry

__all__ = [
    "EntryHeader",
    "FileAnalysis",
    "FileAnalyzer",
    "Payload",
    "PayloadEntry",
]
