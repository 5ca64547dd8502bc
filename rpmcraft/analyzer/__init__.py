"""File analyzers shipped with rpmcraft."""

from rpmcraft.analyzer.basic import BasicFileAnalyzer

__all__ = ["BasicFileAnalyzer"]
