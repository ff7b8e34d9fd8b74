"""Shared test fixtures for Cycle Finder test suite."""

from pathlib import Path

import pytest

SAMPLE_WHITELIST = """\
field com.foo.Bar.baz
field com.foo.Bar.qux com.foo.Other
type com.foo.Excluded
namespace com.foo.sub
outer com.foo.Bar
"""


@pytest.fixture
def write_whitelist(tmp_path):
    """Factory writing whitelist content to a file under tmp_path."""

    def _write(content: str, name: str = "whitelist.txt") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_whitelist_file(write_whitelist):
    """A whitelist file holding one rule of each kind."""
    return write_whitelist(SAMPLE_WHITELIST)


@pytest.fixture
def sample_lines():
    """Lines of the sample whitelist."""
    return SAMPLE_WHITELIST.splitlines()
