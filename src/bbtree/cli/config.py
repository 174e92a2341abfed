#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the bbtree CLI.

Configuration lives in ``.bbtree.toml``, ``.bbtree.yaml``/``.yml``,
``.bbtree.json`` or the ``[tool.bbtree]`` table of ``pyproject.toml``. A
file holds up to two sections that map onto the option dataclasses:

.. code-block:: toml

    [bbcode]
    strict_mode = false
    singular_tags = ["hr", "br"]

    [html]
    strict_mode = true
    direct_tags = ["b", "i", "u"]

"""

import argparse
import json
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from bbtree.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from bbtree.options.bbcode import BBCodeParserOptions
from bbtree.options.html import HtmlRendererOptions

CONFIG_SECTIONS = {"bbcode": BBCodeParserOptions, "html": HtmlRendererOptions}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Return the ``[tool.bbtree]`` table of a pyproject.toml, or an empty dict.

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or any of its parents.

    Each directory is checked for the dedicated config files in
    ``CONFIG_FILENAMES`` order, then for a pyproject.toml carrying a
    ``[tool.bbtree]`` table. The first match wins.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                # An unrelated broken pyproject.toml should not stop discovery
                pass

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Searches from ``start_dir`` (default: cwd) up to the filesystem root, then
    falls back to the dedicated config files in the user's home directory.

    """
    found = find_config_in_parents(start_dir)
    if found:
        return found

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def _read_toml(config_path: Path) -> Any:
    with open(config_path, "rb") as f:
        return tomllib.load(f)


def _read_yaml(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _read_json(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


_READERS = {".toml": _read_toml, ".yaml": _read_yaml, ".yml": _read_yaml, ".json": _read_json}


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    The format is chosen from the file extension; ``pyproject.toml`` yields
    its ``[tool.bbtree]`` table.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or does not hold a mapping

    Examples
    --------
    >>> config = load_config_file(".bbtree.toml")
    >>> config.get("bbcode", {}).get("strict_mode")
    True

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)

    ext = config_path.suffix.lower()
    reader = _READERS.get(ext)
    if reader is None:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")

    try:
        config = reader(config_path)
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Invalid {ext[1:].upper()} in config file {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping at root level, got {type(config).__name__}"
        )
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge two configuration dictionaries; ``override`` wins on conflicts.

    Examples
    --------
    >>> merge_configs({"bbcode": {"strict_mode": True}}, {"bbcode": {"singular_tags": ["br"]}})
    {'bbcode': {'strict_mode': True, 'singular_tags': ['br']}}

    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    env_var_path: Optional[str] = None,
    start_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (BBTREE_CONFIG)
    3. Auto-discovered config file

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file(start_dir)
    if discovered_path:
        return load_config_file(discovered_path)

    return {}


def options_from_config(config: Dict[str, Any]) -> tuple[BBCodeParserOptions, HtmlRendererOptions]:
    """Build parser and renderer options from a loaded configuration.

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration has unknown sections or invalid option values

    """
    unknown = sorted(set(config) - set(CONFIG_SECTIONS))
    if unknown:
        raise argparse.ArgumentTypeError(f"Unknown configuration section(s): {', '.join(unknown)}")

    built: Dict[str, Any] = {}
    for section, options_class in CONFIG_SECTIONS.items():
        values = config.get(section) or {}
        if not isinstance(values, dict):
            raise argparse.ArgumentTypeError(f"[{section}] section must be a table, got {type(values).__name__}")
        try:
            built[section] = options_class.from_dict(values)
        except (TypeError, ValueError) as e:
            raise argparse.ArgumentTypeError(f"Invalid [{section}] configuration: {e}") from e

    return built["bbcode"], built["html"]
