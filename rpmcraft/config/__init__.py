from .loader import load_config
from .models import (
    PayloadConfig,
    PluginsConfig,
    RpmcraftConfig,
)

__all__ = [
    "PayloadConfig",
    "PluginsConfig",
    "RpmcraftConfig",
    "load_config",
]
