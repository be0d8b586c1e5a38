"""Configuration management for goquickfix.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > .goquickfixrc > pyproject.toml > defaults
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from goquickfix.errors import ConfigError

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

logger = logging.getLogger(__name__)

DEFAULT_MAX_TRIES = 10

# Packages imported only for their init side effects. Blank imports of
# these are left alone when reverting quick fixes.
DEFAULT_SIDE_EFFECT_IMPORTS = (
    "embed",
    "expvar",
    "image/gif",
    "image/jpeg",
    "image/png",
    "net/http/pprof",
    "time/tzdata",
    "github.com/go-sql-driver/mysql",
    "github.com/jackc/pgx/v5/stdlib",
    "github.com/lib/pq",
    "github.com/mattn/go-sqlite3",
    "modernc.org/sqlite",
)


@dataclass
class QuickfixConfig:
    """Configuration for goquickfix.

    Attributes:
        max_tries: Maximum number of fix passes before giving up (default: 10).
        side_effect_imports: Import paths whose blank imports are kept when
            reverting quick fixes.
        import_names: Package names for import paths whose name cannot be
            assumed from the path (path -> name).
    """

    max_tries: int = DEFAULT_MAX_TRIES
    side_effect_imports: list[str] = field(
        default_factory=lambda: list(DEFAULT_SIDE_EFFECT_IMPORTS)
    )
    import_names: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigError: If any configuration value is invalid.
        """
        if isinstance(self.max_tries, bool) or not isinstance(self.max_tries, int):
            raise ConfigError("max_tries must be an integer")
        if self.max_tries < 1:
            raise ConfigError("max_tries must be at least 1")

        if not isinstance(self.side_effect_imports, list) or not all(
            isinstance(path, str) and path for path in self.side_effect_imports
        ):
            raise ConfigError("side_effect_imports must be a list of import paths")

        if not isinstance(self.import_names, dict) or not all(
            isinstance(path, str) and isinstance(name, str) and name.isidentifier()
            for path, name in self.import_names.items()
        ):
            raise ConfigError("import_names must map import paths to package names")


def _get_config_field_names() -> set[str]:
    return {f.name for f in fields(QuickfixConfig)}


def find_config_file(filename: str = ".goquickfixrc", start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _load_from_rcfile(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the nearest .goquickfixrc file.

    Returns:
        Configuration from .goquickfixrc, or empty dict if not found or unreadable.
    """
    config_path = find_config_file(".goquickfixrc", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", config_path, e)
        return {}

    valid_fields = _get_config_field_names()
    return {k: v for k, v in data.items() if k in valid_fields}


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from pyproject.toml [tool.goquickfix] section.

    Returns:
        Configuration from pyproject.toml, or empty dict if not found.
    """
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", config_path, e)
        return {}

    section = data.get("tool", {}).get("goquickfix", {})
    valid_fields = _get_config_field_names()
    return {k: v for k, v in section.items() if k in valid_fields}


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables.

    GOQUICKFIX_MAX_TRIES holds an integer; GOQUICKFIX_SIDE_EFFECT_IMPORTS a
    comma-separated list of import paths.

    Raises:
        ConfigError: If GOQUICKFIX_MAX_TRIES is not an integer.
    """
    result: dict[str, Any] = {}

    max_tries = os.environ.get("GOQUICKFIX_MAX_TRIES")
    if max_tries is not None:
        try:
            result["max_tries"] = int(max_tries)
        except ValueError as e:
            raise ConfigError(f"GOQUICKFIX_MAX_TRIES must be an integer, got {max_tries!r}") from e

    side_effect_imports = os.environ.get("GOQUICKFIX_SIDE_EFFECT_IMPORTS")
    if side_effect_imports is not None:
        result["side_effect_imports"] = [
            path.strip() for path in side_effect_imports.split(",") if path.strip()
        ]

    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge configuration dictionaries; later ones take precedence."""
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is not None:
                result[key] = value
    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> QuickfixConfig:
    """Load configuration with full precedence chain.

    Loads configuration from multiple sources and merges them with the following
    precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (GOQUICKFIX_*)
    3. .goquickfixrc file
    4. pyproject.toml [tool.goquickfix] section
    5. Default values

    Args:
        cli_overrides: Configuration overrides from CLI arguments.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved QuickfixConfig instance.

    Raises:
        ConfigError: If the resulting configuration is invalid.
    """
    pyproject_config = _load_from_pyproject(start_dir)
    rcfile_config = _load_from_rcfile(start_dir)
    env_config = _load_from_env()

    valid_fields = _get_config_field_names()
    cli_config = {
        k: v for k, v in (cli_overrides or {}).items() if k in valid_fields and v is not None
    }

    merged = _merge_configs(pyproject_config, rcfile_config, env_config, cli_config)
    logger.debug("Resolved configuration: %s", merged)

    # Defaults are applied by the dataclass
    return QuickfixConfig(**merged)
