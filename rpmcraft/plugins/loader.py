"""Dynamic analyzer discovery and loading via entry points."""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING

from rpmcraft.analyzer.basic import BasicFileAnalyzer
from rpmcraft.interfaces.analyzer import FileAnalyzer

if TYPE_CHECKING:
    from rpmcraft.config.models import RpmcraftConfig

logger = logging.getLogger(__name__)


class PluginNotFoundError(Exception):
    """Raised when a requested plugin cannot be found."""

    def __init__(self, plugin_type: str, name: str | None = None):
        self.plugin_type = plugin_type
        self.name = name
        msg = f"No {plugin_type} plugin found"
        if name:
            msg += f" with name '{name}'"
        super().__init__(msg)


class PluginLoader:
    """Discovers and loads file analyzers via entry points or config."""

    GROUP = "rpmcraft.plugins.analyzer"

    def __init__(self, config: RpmcraftConfig):
        self._config = config

    def discover(self) -> list[str]:
        """Names of all analyzers registered under the entry point group."""
        return [ep.name for ep in importlib.metadata.entry_points(group=self.GROUP)]

    def _load_from_entry_point(self, name: str) -> object | None:
        for ep in importlib.metadata.entry_points(group=self.GROUP):
            if ep.name == name:
                return ep.load()
        return None

    def load_analyzer(self, name: str | None = None) -> type[FileAnalyzer]:
        """Resolve an analyzer class: explicit name > config > built-in default.

        A name that is given but not registered raises PluginNotFoundError
        rather than silently falling back.
        """
        resolved = name if name is not None else self._config.plugins.analyzer
        if resolved is None:
            return BasicFileAnalyzer

        plugin_cls = self._load_from_entry_point(resolved)
        if plugin_cls is None:
            raise PluginNotFoundError("analyzer", resolved)
        logger.debug("Loaded analyzer plugin %r", resolved)
        return plugin_cls
