"""Filesystem locations used by pomidoro.

Single source of truth for the config file, socket directory and log
directory defaults. XDG base directory variables take precedence over
the conventional fallbacks under the home directory.
"""

import os
import tempfile
from pathlib import Path

APP_NAME = "pomidoro"
CONFIG_FILE_NAME = "config.yaml"
LOG_FILE_NAME = f"{APP_NAME}.log"


def _xdg_dir(variable: str, fallback: str) -> Path:
    value = os.environ.get(variable)
    if value:
        return Path(value)
    return Path.home() / fallback


def default_config_path() -> Path:
    """Config file location: $XDG_CONFIG_HOME/pomidoro/config.yaml."""
    return _xdg_dir("XDG_CONFIG_HOME", ".config") / APP_NAME / CONFIG_FILE_NAME


def default_socket_dir() -> Path:
    """Directory holding server and client socket files."""
    return Path(tempfile.gettempdir()) / APP_NAME


def default_log_dir() -> Path:
    """Server log directory: $XDG_STATE_HOME/pomidoro/logs."""
    return _xdg_dir("XDG_STATE_HOME", ".local/state") / APP_NAME / "logs"


def server_socket_path(socket_dir: Path, server_id: int) -> Path:
    """Endpoint path of the server with the given id."""
    return socket_dir / f"server{server_id}.sock"
