"""Pytest configuration and shared fixtures for the bbcode2html test suite."""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

from bbcode2html import BBCodeRenderer, BBCodeRendererOptions
from bbcode2html.logging_utils import HANDLER_NAME

# Configure Hypothesis for property-based testing
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "security: Tests for escaping and URL safety")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")


@pytest.fixture
def renderer() -> BBCodeRenderer:
    """Renderer with default options."""
    return BBCodeRenderer()


@pytest.fixture
def plain_renderer() -> BBCodeRenderer:
    """Renderer with mention linking and newline conversion turned off.

    Useful when a test only cares about what a single tag produces.
    """
    return BBCodeRenderer(BBCodeRendererOptions(link_mentions=False, convert_newlines=False))


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run in an empty working directory with no config discovery side effects."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BBCODE2HTML_CONFIG", raising=False)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "home")
    return tmp_path


@pytest.fixture
def sample_post() -> str:
    """A forum post exercising most supported tags."""
    return """[b]Edit your BBCode forum post here[/b]

This editor mimics some of the functionality of [url=https://myanimelist.net/forum/]MyAnimeList.net's forum[/url].
Try out various tags:
[list]
[*] [i]Italics[/i] and [u]underlines[/u], [s]Strikethrough[/s] text. Colors: [color=blue]Blue text[/color]
[*] List Item 2
[center]This text is centered.[/center]
[/list]

[quote=SomeUser message=12345]Quote from SomeUser.
Hey (you) [b]nest[/b] what did you mean by that?
[img]https://picsum.photos/seed/quoteimg/150/50[/img]
[/quote]

[spoiler=Secret Content]
This is hidden content inside a spoiler.
[img width=200 height=100]https://picsum.photos/seed/spoilerimg/200/100[/img]
And even [url=https://example.com]links[/url]!
[/spoiler]

[b]YouTube Video:[/b]
[yt]dQw4w9WgXcQ[/yt]

[code]
function helloWorld() {
  console.log("Hello, BBCode!");
}
// For example, [b]this[/b] is not bold.
[/code]
[hr]
[table]
[tr][td]Header 1[/td][td]Header 2[/td][/tr]
[tr][td]Cell A1[/td][td]Cell A2 with [b]bold[/b] text[/td][/tr]
[/table]
Don't forget to mention @CoolUser_123 or @another_user!
This is some text with [sub]subscript[/sub] and [sup]superscript[/sup].
"""


@pytest.fixture(autouse=True)
def reset_cli_logging():
    """Remove handlers installed by the command so they do not outlive a test."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
