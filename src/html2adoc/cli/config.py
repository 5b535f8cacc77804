#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the html2adoc CLI.

A configuration file holds the same keys as :class:`~html2adoc.options.PipelineOptions`,
with converter settings in a nested ``converter`` table::

    # .html2adoc.toml
    exclude_patterns = ["404.html", "**/_/**", "search.html"]
    max_workers = 4

    [converter]
    default_code_language = "console"

The same content may live in ``[tool.html2adoc]`` of a ``pyproject.toml``.
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

from html2adoc.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.html2adoc]`` table of a pyproject.toml, empty when absent.

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

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` or one of its parents.

    Each directory is checked for the dedicated config files first, then for
    a ``pyproject.toml`` that carries a ``[tool.html2adoc]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for the search, defaults to the current directory

    Returns
    -------
    Path or None
        First config file found

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
                # Unrelated broken pyproject; keep searching
                pass

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in standard locations.

    The directory tree from ``start_dir`` (default: cwd) up to the filesystem
    root is searched first, then the user home directory.
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


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has an unsupported format

    Examples
    --------
    >>> config = load_config_file(".html2adoc.toml")
    >>> config.get("max_workers")
    4

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    ext = config_path.suffix.lower()
    if config_path.name.lower() == "pyproject.toml":
        return _load_pyproject_section(config_path)
    if ext == ".toml":
        return _load_mapping(config_path, "TOML", _read_toml, tomllib.TOMLDecodeError)
    if ext in (".yaml", ".yml"):
        return _load_mapping(config_path, "YAML", _read_yaml, yaml.YAMLError)
    if ext == ".json":
        return _load_mapping(config_path, "JSON", _read_json, json.JSONDecodeError)
    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json")


def _read_toml(config_path: Path) -> Any:
    with open(config_path, "rb") as f:
        return tomllib.load(f)


def _read_yaml(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _read_json(config_path: Path) -> Any:
    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


def _load_mapping(config_path: Path, kind: str, reader: Any, decode_error: type[Exception]) -> Dict[str, Any]:
    try:
        config = reader(config_path)
    except decode_error as e:
        raise argparse.ArgumentTypeError(f"Invalid {kind} in config file {config_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Error reading {kind} config {config_path}: {e}") from e

    # An empty YAML file loads as None
    if config is None and kind == "YAML":
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"{kind} config file must contain a mapping, got {type(config).__name__}")
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries, ``override`` winning.

    Nested dictionaries are merged recursively, not replaced.

    >>> merge_configs({"converter": {"html_parser": "lxml"}, "max_workers": 1},
    ...               {"converter": {"default_code_language": "sh"}, "max_workers": 4})
    {'converter': {'html_parser': 'lxml', 'default_code_language': 'sh'}, 'max_workers': 4}

    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None, start_dir: Optional[Path] = None
) -> Dict[str, Any]:
    """Load configuration with priority handling.

    Priority order (highest to lowest):
    1. Explicit config file path (``--config``)
    2. ``HTML2ADOC_CONFIG`` environment variable
    3. Auto-discovered config file

    Returns
    -------
    dict
        Loaded configuration (empty when no config is found)

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
