"""Configuration package for pomidoro.

This package provides Pydantic configuration models and loading utilities.
"""

from pomidoro.core.config.loader import expand_env_vars, load_config
from pomidoro.core.config.models import Config, LoggingConfig, SessionConfig

__all__ = [
    # Models
    "Config",
    "LoggingConfig",
    "SessionConfig",
    # Loaders
    "expand_env_vars",
    "load_config",
]
