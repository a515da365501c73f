"""XDG-compliant path management for dirkit.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage.

XDG defaults:
- Config: ~/.config/dirkit/
- State: ~/.local/state/dirkit/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "dirkit"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/dirkit/ (or XDG_CONFIG_HOME/dirkit/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the key-value store, which should persist
    between runs but is not configuration.

    Returns:
        Path to ~/.local/state/dirkit/ (or XDG_STATE_HOME/dirkit/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/dirkit/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_store_path() -> Path:
    """Get the default key-value store file path.

    Returns:
        Path to ~/.local/state/dirkit/store.json.
    """
    return get_state_dir() / "store.json"
