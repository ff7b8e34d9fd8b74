"""
Unit tests for whitelist file loading.

Tests multi-file unions, fail-fast errors and file access failures.
"""

import pytest

from cyclefinder.shared.domain.exceptions import (
    FileAccessError,
    MalformedRuleError,
    WhitelistError,
)
import cyclefinder.whitelist.loader as loader
from cyclefinder.whitelist.loader import load_whitelist, load_whitelist_file
from cyclefinder.whitelist.registry import Whitelist, WhitelistBuilder


class TestLoadWhitelist:
    """Test load_whitelist()."""

    def test_sample_file(self, sample_whitelist_file):
        """Test the sample scenario loaded from disk."""
        whitelist = load_whitelist([sample_whitelist_file])

        assert whitelist.contains_field("com.foo.Bar.baz") is True
        assert whitelist.is_whitelisted_type_for_field("com.foo.Bar.qux", "com.foo.Other") is True
        assert whitelist.is_whitelisted_type_for_field("com.foo.Bar.qux", "com.foo.Else") is False
        assert whitelist.contains_type("com.foo.Excluded") is True
        assert whitelist.contains_type("com.foo.sub.Inner") is True
        assert whitelist.contains_type("com.foo.subother.Inner") is False
        assert whitelist.has_outer_for_type("com.foo.Bar") is True

    def test_accepts_string_paths(self, sample_whitelist_file):
        whitelist = load_whitelist([str(sample_whitelist_file)])

        assert len(whitelist) == 5

    def test_no_files(self):
        assert load_whitelist([]) == Whitelist.empty()

    def test_comments_and_blank_lines(self, write_whitelist):
        path = write_whitelist(
            "# Whitelist for the core library\n"
            "\n"
            "   \n"
            "type com.foo.Bar # allowed because X\n"
            "\tNAMESPACE   com.foo.internal\t\n"
        )

        whitelist = load_whitelist([path])

        assert whitelist == Whitelist.from_entries(["type com.foo.Bar", "namespace com.foo.internal"])

    def test_loading_a_file_twice_is_idempotent(self, sample_whitelist_file):
        once = load_whitelist([sample_whitelist_file])
        twice = load_whitelist([sample_whitelist_file, sample_whitelist_file])

        assert once == twice

    def test_file_order_does_not_matter(self, write_whitelist):
        a = write_whitelist("type a.B\nfield a.B.f a.X\n", name="a.txt")
        b = write_whitelist("namespace a\nfield a.B.f a.Y\nfield a.B.g\n", name="b.txt")

        assert load_whitelist([a, b]) == load_whitelist([b, a])

    def test_later_files_only_add(self, write_whitelist):
        a = write_whitelist("field a.B.f a.X\n", name="a.txt")
        b = write_whitelist("field a.B.f a.Y\n", name="b.txt")

        whitelist = load_whitelist([a, b])

        assert whitelist.is_whitelisted_type_for_field("a.B.f", "a.X") is True
        assert whitelist.is_whitelisted_type_for_field("a.B.f", "a.Y") is True

    def test_custom_encoding(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes("type com.caf\xe9.Bar\n".encode("latin-1"))

        whitelist = load_whitelist([path], encoding="latin-1")

        assert whitelist.contains_type("com.caf\xe9.Bar") is True


class TestLoadErrors:
    """Test fail-fast error handling."""

    def test_malformed_line_aborts_load(self, write_whitelist):
        path = write_whitelist("type a.B\n\nbogus x y\ntype a.C\n")

        with pytest.raises(MalformedRuleError) as exc_info:
            load_whitelist([path])

        error = exc_info.value
        assert error.entry == "bogus x y"
        assert error.path == str(path)
        assert error.line == 3
        assert "Invalid whitelist entry: bogus x y" in str(error)

    def test_malformed_line_stops_later_files(self, write_whitelist, monkeypatch):
        bad = write_whitelist("type a b\n", name="bad.txt")
        good = write_whitelist("type a.B\n", name="good.txt")
        opened = []

        real_load_file = loader.load_whitelist_file

        def _tracking(builder, path, encoding=None):
            opened.append(path)
            return real_load_file(builder, path, encoding=encoding)

        monkeypatch.setattr(loader, "load_whitelist_file", _tracking)

        with pytest.raises(MalformedRuleError):
            loader.load_whitelist([bad, good])

        assert opened == [bad]

    def test_missing_file(self, tmp_path, sample_whitelist_file):
        missing = tmp_path / "missing.txt"

        with pytest.raises(FileAccessError) as exc_info:
            load_whitelist([sample_whitelist_file, missing])

        assert exc_info.value.path == str(missing)
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert str(missing) in str(exc_info.value)

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(FileAccessError):
            load_whitelist([tmp_path])

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"type a.\xff\xfe\n")

        with pytest.raises(FileAccessError) as exc_info:
            load_whitelist([path], encoding="utf-8")

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_errors_share_a_base_class(self, tmp_path):
        """Test that callers can catch every load failure at once."""
        with pytest.raises(WhitelistError):
            load_whitelist([tmp_path / "missing.txt"])

    def test_file_access_error_is_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load_whitelist([tmp_path / "missing.txt"])


class TestLoadWhitelistFile:
    """Test load_whitelist_file() with a shared builder."""

    def test_returns_rule_count(self, sample_whitelist_file):
        builder = WhitelistBuilder()

        assert load_whitelist_file(builder, sample_whitelist_file) == 5
        assert builder.build().contains_type("com.foo.Excluded") is True

    def test_rules_before_error_stay_in_builder(self, write_whitelist):
        """Test that the builder is not rolled back; load_whitelist discards it."""
        path = write_whitelist("type a.B\nfield\n")
        builder = WhitelistBuilder()

        with pytest.raises(MalformedRuleError):
            load_whitelist_file(builder, path)

        assert builder.build().contains_type("a.B") is True
