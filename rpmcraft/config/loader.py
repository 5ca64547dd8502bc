"""rpmcraft.yaml discovery and parsing."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import RpmcraftConfig

CONFIG_ENV = "RPMCRAFT_CONFIG"

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def _candidate_paths(cli_path: str | None) -> list[Path]:
    """Config locations in priority order: CLI, $RPMCRAFT_CONFIG, ./, ~/.rpmcraft/."""
    paths: list[Path] = []
    if cli_path:
        paths.append(Path(cli_path))
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        paths.append(Path(env_path))
    paths.append(Path("./rpmcraft.yaml"))
    paths.append(Path.home() / ".rpmcraft" / "config.yaml")
    return paths


def _parse_config(path: Path) -> RpmcraftConfig | None:
    """Parse one config file; an empty file yields None."""
    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping at top level")
    try:
        return RpmcraftConfig(**_expand_env_vars(raw))
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e}") from e


def load_config(cli_path: str | None = None) -> RpmcraftConfig:
    """Return the first non-empty config found, or the defaults."""
    for path in _candidate_paths(cli_path):
        if not path.is_file():
            continue
        config = _parse_config(path)
        if config is not None:
            return config
    return RpmcraftConfig()


def _expand_env_vars(obj: object) -> object:
    """Replace ${VAR} in every string value; unset variables become ''."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Written by `rpmcraft config init`
DEFAULT_CONFIG_TEMPLATE = """\
# rpmcraft.yaml

# Payload scanning
payload:
  chunk_size: 1024             # bytes per read; the first chunk feeds the analyzer

# Plugins
plugins:
  analyzer: null               # entry point name in group rpmcraft.plugins.analyzer

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
