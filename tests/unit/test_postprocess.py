#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the finishing passes."""

import pytest

from bbcode2html import transform
from bbcode2html.constants import LIST_ITEM_SENTINEL, MENTION_CLASS
from bbcode2html.literal import LiteralStash
from bbcode2html.options import BBCodeRendererOptions
from bbcode2html.postprocess import convert_newlines, finalize, link_mentions, suppress_block_breaks


def mention(name: str) -> str:
    return f'<span class="{MENTION_CLASS}">@{name}</span>'


@pytest.mark.unit
class TestLinkMentions:
    """Test link_mentions."""

    def test_basic_mention(self) -> None:
        """Test a mention after whitespace."""
        assert link_mentions("hi @bob") == f"hi {mention('bob')}"

    def test_mention_at_start(self) -> None:
        """Test a mention at the start of the text."""
        assert link_mentions("@CoolUser_123 hi") == f"{mention('CoolUser_123')} hi"

    @pytest.mark.parametrize("prefix", ["(", "[", ">"])
    def test_allowed_prefixes(self, prefix: str) -> None:
        """Test punctuation that may precede a mention."""
        assert link_mentions(f"{prefix}@bob") == f"{prefix}{mention('bob')}"

    def test_email_address_is_not_a_mention(self) -> None:
        """Test an @ inside a word is ignored."""
        assert link_mentions("mail me at bob@example.com") == "mail me at bob@example.com"

    def test_too_short(self) -> None:
        """Test single-character names are ignored."""
        assert link_mentions("hi @a") == "hi @a"

    def test_name_length_capped(self) -> None:
        """Test only the first 30 name characters are linked."""
        assert link_mentions("@" + "x" * 35) == mention("x" * 30) + "x" * 5

    def test_not_inside_anchor(self) -> None:
        """Test mentions already inside a link are left alone."""
        html = '<a href="https://example.com">@bob</a>'
        assert link_mentions(html) == html

    def test_not_inside_markup_within_anchor(self) -> None:
        """Test mentions wrapped in inline elements inside a link are left alone."""
        html = '<a href="https://example.com"><strong>@bob</strong></a> @amy'
        assert link_mentions(html) == f'<a href="https://example.com"><strong>@bob</strong></a> {mention("amy")}'

    def test_linked_link_text_with_formatting(self) -> None:
        """Test a bold mention inside [url] is not turned into a mention span."""
        html = transform("[url=example.com][b]@bob[/b][/url]")
        assert MENTION_CLASS not in html
        assert '<strong class="font-bold">@bob</strong></a>' in html

    def test_mention_after_literal_region(self) -> None:
        """Test a mention directly after a [code] block is linked."""
        html = transform("[code]x[/code]@bob")
        assert html.endswith(f"</pre>{mention('bob')}")

    def test_mention_inside_literal_region_untouched(self) -> None:
        """Test mentions inside [code] stay literal."""
        assert MENTION_CLASS not in transform("[code]@bob[/code]")

    def test_not_inside_attribute(self) -> None:
        """Test mentions inside a tag's attributes are left alone."""
        html = '<img alt="hi @bob" />'
        assert link_mentions(html) == html

    def test_inside_element_content(self) -> None:
        """Test mentions inside ordinary elements are linked."""
        assert link_mentions("<strong>@bob</strong>") == f"<strong>{mention('bob')}</strong>"


@pytest.mark.unit
class TestBreaks:
    """Test newline conversion and block break suppression."""

    def test_convert_newlines(self) -> None:
        """Test each newline becomes a break."""
        assert convert_newlines("a\nb\n\nc") == "a<br />b<br /><br />c"

    def test_break_before_and_after_block(self) -> None:
        """Test breaks around a block element are removed."""
        assert suppress_block_breaks('a<br /><div class="x">b</div><br />c') == 'a<div class="x">b</div>c'

    def test_break_as_only_content(self) -> None:
        """Test a break alone inside a block element is removed."""
        assert suppress_block_breaks("<td><br /></td>") == "<td></td>"

    def test_break_before_closing_block(self) -> None:
        """Test a trailing break inside a block is removed."""
        assert suppress_block_breaks("<li>a<br /></li>") == "<li>a</li>"

    def test_only_one_of_several_breaks_removed(self) -> None:
        """Test blank lines before a block keep all but one break."""
        assert suppress_block_breaks("a<br /><br /><hr class=\"x\">") == 'a<br /><hr class="x">'

    def test_inline_elements_keep_breaks(self) -> None:
        """Test breaks next to inline elements are kept."""
        html = "a<br /><strong>b</strong><br />c"
        assert suppress_block_breaks(html) == html

    def test_similar_tag_names_not_treated_as_blocks(self) -> None:
        """Test <table> suppression does not apply to <tablex> or <b>."""
        html = "a<br /><b>x</b>"
        assert suppress_block_breaks(html) == html


@pytest.mark.unit
class TestFinalize:
    """Test the ordered finishing pipeline."""

    def test_sentinels_removed(self) -> None:
        """Test stray sentinels never reach the output."""
        html = finalize(f"a{LIST_ITEM_SENTINEL}b", LiteralStash(), BBCodeRendererOptions())
        assert html == "ab"

    def test_literal_restored_after_newline_conversion(self) -> None:
        """Test restored regions keep their raw newlines."""
        stash = LiteralStash()
        token = stash.add("<pre>x\ny</pre>")
        html = finalize(f"a\n{token}\nb", stash, BBCodeRendererOptions())
        assert html == "a<pre>x\ny</pre>b"

    def test_options_disable_passes(self) -> None:
        """Test mention linking and newline conversion can be turned off."""
        options = BBCodeRendererOptions(link_mentions=False, convert_newlines=False)
        assert finalize("@bob\nx", LiteralStash(), options) == "@bob\nx"
