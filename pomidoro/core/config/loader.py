"""Configuration loading utilities.

This module handles YAML config file discovery and loading with
environment variable expansion.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from pomidoro.core.config.models import Config
from pomidoro.core.paths import default_config_path

logger = logging.getLogger(__name__)

_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(data: Any, source: str) -> Any:
    """Replace ${VAR} references in every string of a parsed YAML tree.

    Raises:
        ValueError: If a referenced variable is not set. All missing names
            are reported together, along with `source`.
    """
    missing: set[str] = set()

    def expand(obj: Any) -> Any:
        if isinstance(obj, dict):
            return {key: expand(value) for key, value in obj.items()}
        if isinstance(obj, list):
            return [expand(item) for item in obj]
        if isinstance(obj, str):
            return _VAR_PATTERN.sub(substitute, obj)
        return obj

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in os.environ:
            missing.add(name)
            return match.group(0)
        return os.environ[name]

    expanded = expand(data)
    if missing:
        names = ", ".join(f"${{{name}}}" for name in sorted(missing))
        raise ValueError(f"Unresolved environment variable(s) in {source}: {names}")
    return expanded


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from a YAML file with environment variable expansion.

    Args:
        path: Explicit config file path. When None, the default location is
            used if it exists; otherwise built-in defaults apply.

    Returns:
        Parsed Config object with all ${VAR} patterns expanded.

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist.
        yaml.YAMLError: If the YAML is malformed.
        ValueError: If a ${VAR} reference is unresolved or a value is invalid.
    """
    if path is None:
        config_path = default_config_path()
        if not config_path.exists():
            logger.debug(f"No config file at {config_path}, using defaults")
            return Config()
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open() as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    data = expand_env_vars(data, source=str(config_path))

    logger.debug(f"Loaded config from {config_path}")
    return Config(**data)
