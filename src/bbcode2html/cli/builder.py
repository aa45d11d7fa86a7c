#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Dynamic CLI argument builder for bbcode2html.

Renderer flags are generated from the :class:`BBCodeRendererOptions`
dataclass fields and their metadata, so a new option only needs a field with
a ``help`` entry to appear on the command line.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import MISSING, Field, fields
from typing import Any, Dict, Optional, Type

from bbcode2html.exceptions import OutputWriteError, RenderingError, ValidationError
from bbcode2html.options import BBCodeRendererOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_RENDERING_ERROR = 7

_IMPORTANCE_GROUPS = {
    "core": "Rendering options",
    "security": "Security options",
    "advanced": "Advanced options",
}


class DynamicCLIBuilder:
    """Builds CLI arguments from an options dataclass.

    Every generated argument defaults to ``argparse.SUPPRESS``, so the parsed
    namespace only carries the options the user actually passed. That lets
    configuration-file values sit underneath explicit flags.
    """

    def __init__(self, options_class: Type[Any] = BBCodeRendererOptions) -> None:
        """Initialize the CLI builder."""
        self.options_class = options_class
        self.dest_to_cli_flag: Dict[str, str] = {}

    @staticmethod
    def snake_to_kebab(name: str) -> str:
        return name.replace("_", "-")

    def infer_cli_name(self, field: Field, metadata: Dict[str, Any]) -> str:
        """Infer the CLI flag for a field.

        ``cli_name`` metadata wins; otherwise booleans defaulting to True get
        a ``--no-`` prefix and everything else is the kebab-case field name.
        """
        if "cli_name" in metadata:
            return f"--{metadata['cli_name']}"

        kebab_name = self.snake_to_kebab(field.name)
        if field.default is True and not kebab_name.startswith("no-"):
            kebab_name = f"no-{kebab_name}"
        return f"--{kebab_name}"

    def get_argument_kwargs(self, field: Field, metadata: Dict[str, Any]) -> Dict[str, Any]:
        """Build ``add_argument`` keyword arguments for a field."""
        kwargs: Dict[str, Any] = {
            "dest": field.name,
            "default": argparse.SUPPRESS,
            "help": metadata["help"],
        }

        if isinstance(field.default, bool):
            kwargs["action"] = "store_false" if field.default else "store_true"
            return kwargs

        if "type" in metadata:
            kwargs["type"] = metadata["type"]
        elif isinstance(field.default, int):
            kwargs["type"] = int

        if field.default is not MISSING and field.default is not None:
            kwargs["help"] = f"{metadata['help']} (default: {field.default})"
        kwargs["metavar"] = field.name.upper()
        return kwargs

    def add_options_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add one argument per documented options field, grouped by importance."""
        groups: Dict[str, Any] = {}
        for field in fields(self.options_class):
            metadata = dict(field.metadata)
            if "help" not in metadata:
                continue

            importance = metadata.get("importance", "core")
            if importance not in groups:
                groups[importance] = parser.add_argument_group(_IMPORTANCE_GROUPS.get(importance, importance))

            cli_name = self.infer_cli_name(field, metadata)
            kwargs = self.get_argument_kwargs(field, metadata)
            try:
                groups[importance].add_argument(cli_name, **kwargs)
            except argparse.ArgumentError as e:
                logger.warning(f"Could not add argument {cli_name}: {e}")
                continue
            self.dest_to_cli_flag[field.name] = cli_name

    def map_args_to_options(self, parsed_args: argparse.Namespace, config: Optional[Dict[str, Any]] = None) -> dict:
        """Merge configuration values with the options given on the command line.

        Parameters
        ----------
        parsed_args : argparse.Namespace
            Parsed command-line arguments
        config : dict, optional
            Values from a configuration file

        Returns
        -------
        dict
            Keyword arguments for the options class; flags override config

        """
        options = dict(config or {})
        for dest in self.dest_to_cli_flag:
            if hasattr(parsed_args, dest):
                options[dest] = getattr(parsed_args, dest)
        return options

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the complete argument parser."""
        from bbcode2html import __version__

        parser = argparse.ArgumentParser(
            prog="bbcode2html",
            description="Convert forum BBCode to styled HTML.",
            epilog="Reads standard input when INPUT is omitted or '-'; writes standard output unless --out is given.",
        )

        parser.add_argument("input", nargs="?", default="-", help="BBCode file to convert ('-' for stdin)")
        parser.add_argument("--out", "-o", help="Output file path (default: stdout)")

        self.add_options_arguments(parser)

        config_group = parser.add_argument_group("Configuration")
        config_group.add_argument("--config", help="Path to a configuration file (TOML, YAML or JSON)")
        config_group.add_argument(
            "--no-config", action="store_true", help="Ignore configuration files and BBCODE2HTML_CONFIG"
        )

        output_group = parser.add_argument_group("Output and logging")
        output_group.add_argument(
            "--rich", action="store_true", help="Print syntax-highlighted HTML to the terminal with rich"
        )
        output_group.add_argument(
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            default="WARNING",
            help="Set logging level (default: WARNING)",
        )
        output_group.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output (DEBUG logs)")
        output_group.add_argument("--trace", action="store_true", help="Timestamped trace logging at DEBUG level")
        output_group.add_argument("--log-file", help="Also write log messages to this file")

        parser.add_argument("--version", "-V", action="version", version=f"bbcode2html {__version__}")

        return parser


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the bbcode2html command."""
    return DynamicCLIBuilder().build_parser()


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code."""
    if isinstance(exception, (ValidationError, ValueError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, OutputWriteError):
        return EXIT_FILE_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR

    return EXIT_ERROR


__all__ = [
    "DynamicCLIBuilder",
    "EXIT_ERROR",
    "EXIT_FILE_ERROR",
    "EXIT_RENDERING_ERROR",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "create_parser",
    "get_exit_code_for_exception",
]
