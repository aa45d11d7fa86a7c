#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the dynamic CLI builder."""

import pytest

from bbcode2html.cli.builder import (
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_VALIDATION_ERROR,
    DynamicCLIBuilder,
    create_parser,
    get_exit_code_for_exception,
)
from bbcode2html.exceptions import InvalidOptionsError, OutputWriteError, RenderingError
from bbcode2html.options import BBCodeRendererOptions


@pytest.mark.unit
@pytest.mark.cli
class TestDynamicCLIBuilder:
    """Test flag generation from option metadata."""

    def test_flags_follow_metadata(self) -> None:
        """Test cli_name metadata and --no- prefixes."""
        builder = DynamicCLIBuilder()
        builder.build_parser()
        assert builder.dest_to_cli_flag["link_mentions"] == "--no-mentions"
        assert builder.dest_to_cli_flag["convert_newlines"] == "--no-newlines"
        assert builder.dest_to_cli_flag["dark_mode"] == "--dark"
        assert builder.dest_to_cli_flag["template_file"] == "--template"
        assert builder.dest_to_cli_flag["max_passes"] == "--max-passes"
        assert builder.dest_to_cli_flag["standalone"] == "--standalone"

    def test_unset_options_absent_from_namespace(self) -> None:
        """Test options not given on the command line are not in the namespace."""
        args = create_parser().parse_args([])
        assert not hasattr(args, "link_mentions")
        assert not hasattr(args, "max_passes")
        assert args.input == "-"

    def test_parse_option_flags(self) -> None:
        """Test option flags parse to the field values."""
        args = create_parser().parse_args(
            ["post.txt", "--no-mentions", "--dark", "--max-passes", "3", "--title", "T", "--standalone"]
        )
        assert args.input == "post.txt"
        assert args.link_mentions is False
        assert args.dark_mode is True
        assert args.max_passes == 3
        assert args.title == "T"
        assert args.standalone is True

    def test_invalid_integer(self) -> None:
        """Test argparse rejects non-integer values."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--max-passes", "many"])

    def test_map_args_to_options_merges_config(self) -> None:
        """Test command-line values override configuration values."""
        builder = DynamicCLIBuilder()
        parser = builder.build_parser()
        args = parser.parse_args(["--title", "From CLI"])
        merged = builder.map_args_to_options(args, {"title": "From config", "dark_mode": True})
        assert merged == {"title": "From CLI", "dark_mode": True}
        assert BBCodeRendererOptions(**merged).dark_mode is True

    def test_version(self, capsys) -> None:
        """Test --version prints the version and exits."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "bbcode2html" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestExitCodes:
    """Test exception to exit code mapping."""

    @pytest.mark.parametrize(
        "exception,code",
        [
            (InvalidOptionsError("bbcode", BBCodeRendererOptions, dict), EXIT_VALIDATION_ERROR),
            (ValueError("bad"), EXIT_VALIDATION_ERROR),
            (OutputWriteError("cannot write"), EXIT_FILE_ERROR),
            (RenderingError("template"), EXIT_RENDERING_ERROR),
            (FileNotFoundError("missing"), EXIT_FILE_ERROR),
            (RuntimeError("boom"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, exception: Exception, code: int) -> None:
        """Test each exception family maps to its exit code."""
        assert get_exit_code_for_exception(exception) == code
