"""Payload readers."""

from rpmcraft.payload.directory import DirectoryEntry, DirectoryPayload

__all__ = ["DirectoryEntry", "DirectoryPayload"]
