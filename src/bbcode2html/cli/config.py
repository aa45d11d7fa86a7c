#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the bbcode2html CLI.

Configuration files hold default values for :class:`BBCodeRendererOptions`
fields, keyed by field name. They are looked up in this order:

1. ``--config PATH`` on the command line
2. The ``BBCODE2HTML_CONFIG`` environment variable
3. The nearest of ``.bbcode2html.toml``, ``.bbcode2html.yaml``,
   ``.bbcode2html.yml``, ``.bbcode2html.json`` or a ``pyproject.toml`` with a
   ``[tool.bbcode2html]`` table, searching from the working directory up to
   the filesystem root
4. The same dedicated files in the user's home directory

Command-line flags always override configuration values.
"""

import argparse
import json
import os
import sys
from dataclasses import fields
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from bbcode2html.options import BBCodeRendererOptions

CONFIG_ENV_VAR = "BBCODE2HTML_CONFIG"
CONFIG_FILENAMES = [".bbcode2html.toml", ".bbcode2html.yaml", ".bbcode2html.yml", ".bbcode2html.json"]
PYPROJECT_SECTION = "bbcode2html"


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.bbcode2html]`` table from a pyproject.toml.

    Returns an empty dict when the table is absent.

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get(PYPROJECT_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file from ``start_dir`` up to the root.

    Dedicated config files take priority over ``pyproject.toml`` within the
    same directory; a pyproject.toml only counts when it has a
    ``[tool.bbcode2html]`` table.

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
                # A broken pyproject.toml that is not ours should not stop the search
                pass

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the parent chain, then the home directory."""
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
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

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
    >>> config = load_config_file(".bbcode2html.toml")
    >>> config.get("dark_mode")
    True

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)

    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
            if config is None:
                config = {}
        elif ext == ".json":
            with open(config_path, encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping at root level, got {type(config).__name__}"
        )

    return config


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Check configuration keys and value types against the renderer options.

    Raises
    ------
    argparse.ArgumentTypeError
        If a key is not an option name or a value has the wrong type

    """
    known = {f.name: f for f in fields(BBCodeRendererOptions)}
    unknown = sorted(set(config) - set(known))
    if unknown:
        raise argparse.ArgumentTypeError(
            f"Unknown configuration key(s): {', '.join(unknown)}. Valid keys: {', '.join(sorted(known))}"
        )

    defaults = BBCodeRendererOptions()
    for key, value in config.items():
        default = getattr(defaults, key)
        if value is None and default is None:
            continue
        expected = type(default) if default is not None else str
        # bool is a subclass of int; keep the two apart
        if isinstance(value, bool) != (expected is bool) or not isinstance(value, expected):
            raise argparse.ArgumentTypeError(
                f"Configuration key '{key}' must be of type {expected.__name__}, got {type(value).__name__}"
            )

    return config


def resolve_config(explicit_path: Optional[str], no_config: bool = False) -> Dict[str, Any]:
    """Load and validate the configuration that applies to this run.

    Parameters
    ----------
    explicit_path : str or None
        Path given with ``--config``
    no_config : bool, default False
        Skip the environment variable and discovery entirely

    Returns
    -------
    dict
        Validated option values; empty when no configuration applies

    """
    if no_config:
        return {}

    path = explicit_path or os.environ.get(CONFIG_ENV_VAR)
    config_path = Path(path) if path else discover_config_file()
    if config_path is None:
        return {}

    return validate_config(load_config_file(config_path))


__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAMES",
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
    "resolve_config",
    "validate_config",
]
