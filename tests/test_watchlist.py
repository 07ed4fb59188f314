"""Tests for watchlist loading."""

import pytest

from lock_guard.core.watchlist import WatchlistEntry, load_watchlist, parse_watchlist
from lock_guard.errors import UsageError, WatchlistNotFoundError


class TestWatchlistEntry:
    """Test the WatchlistEntry model."""

    def test_parse(self):
        entry = WatchlistEntry.parse("debug@4.4.2")
        assert entry == WatchlistEntry("debug", "4.4.2")
        assert str(entry) == "debug@4.4.2"

    def test_parse_scoped_name_splits_on_last_at(self):
        entry = WatchlistEntry.parse("@ctrl/tinycolor@4.1.1")
        assert entry.name == "@ctrl/tinycolor"
        assert entry.version == "4.1.1"

    @pytest.mark.parametrize("item", ["debug", "debug@", "@4.4.2", "a@b@1.0.0", "@"])
    def test_parse_malformed(self, item):
        assert WatchlistEntry.parse(item) is None

    def test_empty_fields_rejected(self):
        with pytest.raises(ValueError):
            WatchlistEntry("", "1.0.0")

    def test_entries_are_hashable_and_ordered(self):
        entries = {WatchlistEntry("b", "1"), WatchlistEntry("a", "2"), WatchlistEntry("b", "1")}
        assert sorted(entries) == [WatchlistEntry("a", "2"), WatchlistEntry("b", "1")]


class TestParseWatchlist:
    """Test parsing of watchlist text."""

    def test_dedup_and_sort(self):
        watchlist = parse_watchlist([
            "chalk@5.6.1",
            "debug@4.4.2",
            "  chalk@5.6.1  ",
            "ansi-regex@6.2.1",
        ])
        assert [str(entry) for entry in watchlist] == [
            "ansi-regex@6.2.1",
            "chalk@5.6.1",
            "debug@4.4.2",
        ]

    def test_comments_and_blanks_only(self):
        watchlist = parse_watchlist(["", "   ", "# comment", "   # indented comment"])
        assert watchlist == ()

    def test_malformed_lines_are_skipped(self):
        watchlist = parse_watchlist(["not-an-entry", "debug@4.4.2", "trailing@"])
        assert watchlist == (WatchlistEntry("debug", "4.4.2"),)

    def test_same_package_multiple_versions(self):
        watchlist = parse_watchlist(["chalk@5.6.1", "chalk@5.6.0"])
        assert len(watchlist) == 2


class TestLoadWatchlist:
    """Test loading watchlists from the embedded list and files."""

    def test_embedded_default(self):
        watchlist = load_watchlist()
        assert len(watchlist) == 18
        assert WatchlistEntry("debug", "4.4.2") in watchlist
        assert WatchlistEntry("chalk", "5.6.1") in watchlist
        assert list(watchlist) == sorted(watchlist)

    def test_load_from_file(self, tmp_path):
        list_file = tmp_path / "list.txt"
        list_file.write_text(
            "# compromised\n"
            "foo@1.0.0\n"
            "\n"
            "foo@1.0.0\n"
            "bar@2.0.0\n"
        )
        watchlist = load_watchlist(list_file)
        assert watchlist == (WatchlistEntry("bar", "2.0.0"), WatchlistEntry("foo", "1.0.0"))

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.txt"
        with pytest.raises(WatchlistNotFoundError) as excinfo:
            load_watchlist(missing)
        assert isinstance(excinfo.value, UsageError)
        assert str(missing) in str(excinfo.value)

    def test_directory_is_not_a_list_file(self, tmp_path):
        with pytest.raises(WatchlistNotFoundError):
            load_watchlist(tmp_path)
