#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the BBCode renderer and transform entry point."""

from concurrent.futures import ThreadPoolExecutor
from io import BytesIO, StringIO

import pytest

from bbcode2html import BBCodeRenderer, BBCodeRendererOptions, transform
from bbcode2html.constants import QUOTE_BODY_CLASS, QUOTE_CLASS
from bbcode2html.exceptions import InvalidOptionsError, OutputWriteError
from bbcode2html import renderer as renderer_module
from bbcode2html.renderer import normalize_source
from bbcode2html.rules import get_rule


@pytest.mark.unit
class TestTransform:
    """Test the module-level transform function."""

    def test_bold(self) -> None:
        """Test a basic conversion."""
        assert transform("[b]Hello[/b]") == '<strong class="font-bold">Hello</strong>'

    def test_plain_text_is_escaped(self) -> None:
        """Test user text is escaped once."""
        assert transform('<script>alert("x")</script>') == "&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt;"

    def test_empty_input(self) -> None:
        """Test empty input gives empty output."""
        assert transform("") == ""

    def test_crlf_normalized(self) -> None:
        """Test Windows line endings become single breaks."""
        assert transform("a\r\nb\rc") == "a<br />b<br />c"

    def test_null_removed(self) -> None:
        """Test NUL characters are dropped from the input."""
        assert transform("a\x00b") == "ab"

    def test_mentions_linked_by_default(self) -> None:
        """Test mentions are styled with default options."""
        assert "@someone</span>" in transform("hello @someone")

    def test_breaks_around_blocks(self) -> None:
        """Test break suppression around a quote."""
        assert transform("a\n[quote]q[/quote]\nb") == (
            f'a<blockquote class="{QUOTE_CLASS}"><div class="{QUOTE_BODY_CLASS}">q</div></blockquote>b'
        )


@pytest.mark.unit
class TestNormalizeSource:
    """Test normalize_source."""

    def test_keeps_zero_width_joiners(self) -> None:
        """Test characters needed by emoji sequences survive."""
        assert normalize_source("a\u200db") == "a\u200db"


@pytest.mark.unit
class TestBBCodeRenderer:
    """Test BBCodeRenderer."""

    def test_default_options(self) -> None:
        """Test defaults are used when no options are given."""
        assert BBCodeRenderer().options == BBCodeRendererOptions()

    def test_invalid_options_type(self) -> None:
        """Test a wrong options type is rejected."""
        with pytest.raises(InvalidOptionsError):
            BBCodeRenderer(options=object())  # type: ignore[arg-type]

    def test_pass_ceiling(self) -> None:
        """Test resolution stops at the pass ceiling with best-effort output."""
        renderer = BBCodeRenderer(BBCodeRendererOptions(max_passes=1))
        assert renderer.render_to_string("[b][b]x[/b][/b]") == '[b]<strong class="font-bold">x</strong>[/b]'

    def test_deep_nesting_within_default_ceiling(self, renderer) -> None:
        """Test several levels of same-name nesting resolve fully."""
        html = renderer.render_to_string("[b]" * 5 + "x" + "[/b]" * 5)
        assert html.count("<strong") == 5
        assert "[b]" not in html

    def test_custom_rule_table(self) -> None:
        """Test a renderer can run a subset of rules."""
        renderer = BBCodeRenderer(rules=[get_rule("b")])
        assert renderer.render_to_string("[b]x[/b][i]y[/i]") == '<strong class="font-bold">x</strong>[i]y[/i]'

    def test_resolve_is_reentrant(self, renderer) -> None:
        """Test resolve can be called directly on escaped text."""
        assert renderer.resolve("[i]x[/i]") == '<em class="italic">x</em>'

    def test_standalone(self) -> None:
        """Test standalone output is a full document."""
        renderer = BBCodeRenderer(BBCodeRendererOptions(standalone=True))
        html = renderer.render_to_string("[b]x[/b]")
        assert html.startswith("<!DOCTYPE html>")
        assert '<strong class="font-bold">x</strong>' in html

    def test_render_fragment_ignores_standalone(self) -> None:
        """Test render_fragment never wraps."""
        renderer = BBCodeRenderer(BBCodeRendererOptions(standalone=True))
        assert renderer.render_fragment("x") == "x"


@pytest.mark.unit
class TestRenderOutput:
    """Test BBCodeRenderer.render destinations."""

    def test_render_to_path(self, tmp_path, renderer) -> None:
        """Test writing to a file path."""
        target = tmp_path / "out.html"
        renderer.render("[i]x[/i]", target)
        assert target.read_text(encoding="utf-8") == '<em class="italic">x</em>'

    def test_render_to_text_stream(self, renderer) -> None:
        """Test writing to a text stream."""
        buffer = StringIO()
        renderer.render("[i]x[/i]", buffer)
        assert buffer.getvalue() == '<em class="italic">x</em>'

    def test_render_to_binary_stream(self, renderer) -> None:
        """Test writing UTF-8 bytes to a binary stream."""
        buffer = BytesIO()
        renderer.render("é", buffer)
        assert buffer.getvalue() == "é".encode("utf-8")

    def test_unwritable_destination(self, tmp_path, renderer) -> None:
        """Test write failures surface as OutputWriteError."""
        with pytest.raises(OutputWriteError) as exc_info:
            renderer.render("x", tmp_path)
        assert exc_info.value.output_path == str(tmp_path)

    def test_unsupported_destination(self, renderer) -> None:
        """Test unsupported destination types are rejected."""
        with pytest.raises(OutputWriteError):
            renderer.render("x", 42)  # type: ignore[arg-type]


@pytest.mark.unit
class TestSharedRenderer:
    """Test the module-level renderer behind transform()."""

    def test_transform_does_not_rebind_module_state(self) -> None:
        """Test transform() reuses the renderer built at import time."""
        shared = renderer_module._DEFAULT_RENDERER
        transform("[b]x[/b]")
        assert renderer_module._DEFAULT_RENDERER is shared
        assert shared.options == BBCodeRendererOptions()

    def test_concurrent_calls(self, sample_post) -> None:
        """Test calls from several threads give identical output."""
        expected = transform(sample_post)
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(transform, [sample_post] * 16))
        assert results == [expected] * 16
