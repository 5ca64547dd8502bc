"""Bit vocabularies shared with the RPM header serializer."""

from __future__ import annotations

from enum import IntFlag


class RpmSense(IntFlag):
    """Dependency sense flags (rpmds.h)."""

    ANY = 0
    LESS = 1 << 1
    GREATER = 1 << 2
    EQUAL = 1 << 3
    POSTTRANS = 1 << 5
    PREREQ = 1 << 6
    PRETRANS = 1 << 7
    INTERP = 1 << 8
    SCRIPT_PRE = 1 << 9
    SCRIPT_POST = 1 << 10
    SCRIPT_PREUN = 1 << 11
    SCRIPT_POSTUN = 1 << 12
    SCRIPT_VERIFY = 1 << 13
    FIND_REQUIRES = 1 << 14
    FIND_PROVIDES = 1 << 15
    TRIGGERIN = 1 << 16
    TRIGGERUN = 1 << 17
    TRIGGERPOSTUN = 1 << 18
    MISSINGOK = 1 << 19
    RPMLIB = 1 << 24
    TRIGGERPREIN = 1 << 25
    KEYRING = 1 << 26
    CONFIG = 1 << 28


class RpmFileFlags(IntFlag):
    """Per-file attribute flags (RPMTAG_FILEFLAGS)."""

    NONE = 0
    CONFIG = 1
    DOC = 1 << 1
    ICON = 1 << 2
    MISSINGOK = 1 << 3
    NOREPLACE = 1 << 4
    SPECFILE = 1 << 5
    GHOST = 1 << 6
    LICENSE = 1 << 7
    README = 1 << 8
    PUBKEY = 1 << 11
    ARTIFACT = 1 << 12


class RpmVerifyFlags(IntFlag):
    """Attributes `rpm --verify` checks for a file (RPMTAG_FILEVERIFYFLAGS)."""

    NONE = 0
    FILEDIGEST = 1
    FILESIZE = 1 << 1
    LINKTO = 1 << 2
    USER = 1 << 3
    GROUP = 1 << 4
    MTIME = 1 << 5
    MODE = 1 << 6
    RDEV = 1 << 7
    CAPS = 1 << 8
    ALL = 0xFFFFFFFF


def sense_operator(flags: RpmSense) -> str:
    """Render the comparison bits of *flags* as ``<``, ``<=``, ``=`` etc."""
    op = ""
    if flags & RpmSense.LESS:
        op += "<"
    if flags & RpmSense.GREATER:
        op += ">"
    if flags & RpmSense.EQUAL:
        op += "="
    return op
