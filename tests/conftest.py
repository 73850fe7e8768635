"""
Shared Test Configuration and Fixtures

Provides registries, engines and an isolated configuration environment for
the whole test suite.
"""

import os
import pytest

from sitefilters.core.registry import FilterRegistry, register_filters
from sitefilters.core.templates import TemplateEngine


@pytest.fixture
def registry():
    """An empty filter registry."""
    return FilterRegistry()


@pytest.fixture
def populated_registry():
    """A registry with the built-in filters registered."""
    reg = FilterRegistry()
    register_filters(reg)
    return reg


@pytest.fixture
def engine(populated_registry):
    """A template engine with the built-in filters installed."""
    return TemplateEngine(populated_registry)


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run in an empty directory with no SITEFILTERS_* variables set."""
    for key in list(os.environ):
        if key.startswith("SITEFILTERS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sample_titles():
    """Inputs and expected outputs for the title-case filter."""
    return [
        ("", ""),
        ("   ", ""),
        ("hello world", "Hello World"),
        ("HELLO WORLD", "Hello World"),
        ("hello-world", "Hello-world"),
        ("  hello   world  ", "Hello World"),
        ("a", "A"),
        ("the quick brown fox", "The Quick Brown Fox"),
        ("mc'DONALD farm-house", "Mc'donald Farm-house"),
        ("  multiple   spaces ", "Multiple Spaces"),
    ]
