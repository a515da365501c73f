"""dirkit configuration and settings.

This module provides the configuration model and I/O functions that
decide how entities are resolved and gated: the project root relative
paths resolve against, the trust level, the default search budget and
the key-value store location.

Configuration is stored in ~/.config/dirkit/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dirkit.core.paths import get_config_path, get_store_path
from dirkit.fs.context import IOContext

logger = logging.getLogger(__name__)


class DirkitConfig(BaseModel):
    """Configuration for entity operations.

    Attributes:
        project_root: Root for relative entity paths (None = current directory).
        local_mode: Trust level; False forbids enumeration and mutation.
        search_limit: Default number of directories a search may examine.
        store_path: Key-value store file (None = XDG state default).
    """

    model_config = ConfigDict(extra="forbid")

    project_root: Annotated[
        Path | None,
        Field(description="Root directory for relative paths (None = cwd)"),
    ] = None
    local_mode: Annotated[
        bool,
        Field(description="Allow filesystem enumeration and mutation"),
    ] = True
    search_limit: Annotated[
        int,
        Field(ge=1, description="Default search budget in directories"),
    ] = 1
    store_path: Annotated[
        Path | None,
        Field(description="Key-value store file (None = XDG state default)"),
    ] = None

    @property
    def effective_project_root(self) -> Path:
        """Get the project root, falling back to the current directory."""
        if self.project_root is not None:
            return self.project_root.expanduser()
        return Path.cwd()

    @property
    def effective_store_path(self) -> Path:
        """Get the store file path, falling back to the XDG default."""
        if self.store_path is not None:
            return self.store_path.expanduser()
        return get_store_path()

    def to_context(self) -> IOContext:
        """Build the entity context described by this configuration."""
        return IOContext(project_root=self.effective_project_root, local_mode=self.local_mode)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> DirkitConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated DirkitConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return DirkitConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> DirkitConfig:
    """Load configuration, using defaults when no file exists.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file, using defaults")
        return get_default_config()


def save_config(config: DirkitConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The DirkitConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    # Ensure parent directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: DirkitConfig) -> dict[str, object]:
    """Convert DirkitConfig to a dictionary for TOML serialization.

    TOML has no null, so unset paths are omitted.

    Args:
        config: The DirkitConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {
        "local_mode": config.local_mode,
        "search_limit": config.search_limit,
    }

    if config.project_root is not None:
        result["project_root"] = str(config.project_root)

    if config.store_path is not None:
        result["store_path"] = str(config.store_path)

    return result


def get_default_config() -> DirkitConfig:
    """Create a default DirkitConfig.

    Returns:
        DirkitConfig with default settings.
    """
    return DirkitConfig()


def require_config(path: Path | None = None) -> DirkitConfig:
    """Load configuration or exit with a helpful error message.

    A missing file is not an error: defaults are used instead.

    Args:
        path: Optional custom config path.

    Returns:
        Loaded and validated DirkitConfig.

    Raises:
        typer.Exit: If the config file exists but cannot be loaded.
    """
    import typer

    from dirkit.utils.formatting import print_error, print_info

    try:
        return load_config_or_default(path)
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        print_info("Run 'dirkit config init --force' to reset it.")
        raise typer.Exit(code=1) from e
