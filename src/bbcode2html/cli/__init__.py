"""Command-line interface for bbcode2html.

Examples
--------
Convert a file to an HTML fragment on stdout::

    $ bbcode2html post.bbcode

Read stdin and write a full preview page::

    $ cat post.bbcode | bbcode2html --standalone --dark -o preview.html

Inspect the output with syntax highlighting::

    $ bbcode2html post.bbcode --rich

Use a configuration file for defaults::

    $ export BBCODE2HTML_CONFIG=~/.config/bbcode2html.toml
    $ bbcode2html post.bbcode

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import sys

from bbcode2html.cli.builder import (
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    DynamicCLIBuilder,
    create_parser,
    get_exit_code_for_exception,
)
from bbcode2html.cli.config import resolve_config
from bbcode2html.exceptions import Bbcode2HtmlError
from bbcode2html.logging_utils import configure_logging
from bbcode2html.options import BBCodeRendererOptions
from bbcode2html.renderer import BBCodeRenderer
from bbcode2html.utils.io_utils import read_text

logger = logging.getLogger(__name__)

__all__ = ["main", "DynamicCLIBuilder", "create_parser"]


def _print_rich(html: str) -> None:
    """Print HTML with rich syntax highlighting."""
    from rich.console import Console
    from rich.syntax import Syntax

    Console().print(Syntax(html, "html", theme="monokai", word_wrap=True))


def main(args: list[str] | None = None) -> int:
    """Execute the bbcode2html command.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments; ``sys.argv[1:]`` when omitted

    Returns
    -------
    int
        Process exit code

    """
    builder = DynamicCLIBuilder()
    parser = builder.build_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(
        parsed_args.log_level,
        verbose=parsed_args.verbose,
        trace=parsed_args.trace,
        log_file=parsed_args.log_file,
    )

    try:
        config = resolve_config(parsed_args.config, no_config=parsed_args.no_config)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        options = BBCodeRendererOptions(**builder.map_args_to_options(parsed_args, config))
    except (TypeError, ValueError) as e:
        print(f"Error: Invalid options: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        source = read_text(parsed_args.input)
    except OSError as e:
        print(f"Error: Cannot read input {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    logger.debug("Read %d characters from %s", len(source), parsed_args.input)

    renderer = BBCodeRenderer(options)
    try:
        if parsed_args.out:
            renderer.render(source, parsed_args.out)
            logger.info("Wrote %s", parsed_args.out)
        else:
            html = renderer.render_to_string(source)
            if parsed_args.rich:
                _print_rich(html)
            else:
                print(html)
    except Bbcode2HtmlError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
