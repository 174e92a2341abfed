"""Pytest configuration and shared fixtures for the bbtree test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os

import pytest

from bbtree.ast import Document, Node, TextNode

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=300, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=100)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests with Hypothesis")


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch, tmp_path):
    """Keep CLI configuration discovery away from the developer's real files."""
    monkeypatch.delenv("BBTREE_CONFIG", raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handler and level changes made by CLI logging setup."""
    saved = []
    for logger in (logging.getLogger(), logging.getLogger("bbtree")):
        saved.append((logger, logger.handlers[:], logger.level))
    yield
    for logger, handlers, level in saved:
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers[:] = handlers
        logger.setLevel(level)


@pytest.fixture
def sample_bbcode() -> str:
    """Provide a forum post exercising nesting, attributes and singular tags.

    Returns
    -------
    str
        BBCode sample used across multiple tests.

    """
    return (
        "[quote=Ann]I said [b]hello[/b][/quote]\n"
        "[hr]\n"
        "See [url=https://example.com]the site[/url] & [i]more[/i]."
    )


@pytest.fixture
def simple_document() -> Document:
    """Build ``[b]Hello[/b] world`` by hand.

    Returns
    -------
    Document
        Document with a bold node followed by a text node.

    """
    doc = Document()
    bold = doc.append_child(Node("b"))
    bold.append_child(TextNode("Hello"))
    doc.append_child(TextNode(" world"))
    return doc
