"""Dynamic plugin discovery and loading."""

from rpmcraft.plugins.loader import PluginLoader, PluginNotFoundError

__all__ = ["PluginLoader", "PluginNotFoundError"]
