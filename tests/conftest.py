"""Shared test fixtures for rpmcraft."""

from __future__ import annotations

import pytest
from unittest.mock import MagicMock

from rpmcraft.config.models import RpmcraftConfig
from rpmcraft.interfaces.analyzer import FileAnalysis, FileAnalyzer
from rpmcraft.rpm.models import RpmMetadata


@pytest.fixture
def mock_analyzer():
    analyzer = MagicMock(spec=FileAnalyzer)
    analyzer.analyze.return_value = FileAnalysis()
    return analyzer


@pytest.fixture
def sample_metadata():
    return RpmMetadata(name="demo", version="1.0", release="1", arch="x86_64")


@pytest.fixture
def sample_config():
    return RpmcraftConfig()


@pytest.fixture
def staging_dir(tmp_path):
    """A small buildroot with a binary, a doc, a config file and a symlink."""
    root = tmp_path / "buildroot"
    (root / "usr" / "bin").mkdir(parents=True)
    (root / "usr" / "share" / "doc" / "demo").mkdir(parents=True)
    (root / "etc").mkdir()
    (root / "usr" / "bin" / "demo").write_bytes(b"\x7fELF\x02\x01\x01" + b"\0" * 57)
    (root / "usr" / "share" / "doc" / "demo" / "README").write_text("hello")
    (root / "etc" / "demo.conf").write_text("key = value\n")
    (root / "usr" / "bin" / "demo-link").symlink_to("demo")
    return root
