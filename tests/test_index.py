"""Tests for the index line codec and the cached index."""

import logging

import pytest

from replaydict.exceptions import DictionaryIOError
from replaydict.kernel.index import (
    DictionaryIndex,
    append_entry,
    escape_key,
    fingerprint,
    format_entry,
    parse_index,
    read_index,
    split_entry,
    unescape_key,
)


class TestEscaping:
    """Tests for escape_key / unescape_key."""

    def test_plain_text_unchanged(self):
        assert escape_key("ping") == "ping"

    def test_delimiters_escaped(self):
        assert escape_key("a=b:c") == "a\\=b\\:c"

    def test_backslash_escaped(self):
        assert escape_key("C:\\dir") == "C\\:\\\\dir"

    def test_line_breaks_escaped(self):
        escaped = escape_key("line1\r\nline2")
        assert "\n" not in escaped
        assert "\r" not in escaped
        assert escaped == "line1\\r\\nline2"

    @pytest.mark.parametrize("text", [
        "",
        "ping",
        "key=value",
        "http://host:8080/path?a=b",
        "\\=",
        "ends with backslash\\",
        "multi\nline\r\ntext",
        "üñí:çødé=",
    ])
    def test_unescape_inverts_escape(self, text):
        assert unescape_key(escape_key(text)) == text

    def test_injective_on_lookalikes(self):
        """Texts that differ only by a backslash or delimiter get distinct keys."""
        assert escape_key("a\\=b") != escape_key("a=b")
        assert escape_key("a\\:b") != escape_key("a:b")

    def test_fingerprint_is_escaped_text(self):
        assert fingerprint("x=1") == "x\\=1"


class TestLineCodec:

    def test_format_entry(self):
        assert format_entry("ping", "abc") == "ping=abc\n"

    def test_split_at_first_unescaped_equals(self):
        assert split_entry("a\\=b=hash") == ("a\\=b", "hash")

    def test_split_empty_key(self):
        assert split_entry("=hash") == ("", "hash")

    def test_split_malformed(self):
        assert split_entry("no separator here") is None
        assert split_entry("only\\=escaped") is None

    def test_parse_skips_blank_lines_and_crlf(self):
        entries = parse_index("a=1\r\n\r\n  \nb=2\n")
        assert entries == {"a": "1", "b": "2"}

    def test_parse_last_duplicate_wins(self):
        assert parse_index("a=1\na=2\n") == {"a": "2"}

    def test_parse_logs_malformed_line(self, caplog):
        with caplog.at_level(logging.WARNING, logger="replaydict.kernel.index"):
            entries = parse_index("good=1\nbroken\n", source="idx")
        assert entries == {"good": "1"}
        assert any("malformed index line 2" in r.getMessage() for r in caplog.records)


class TestFileIO:

    def test_append_creates_and_appends(self, tmp_path):
        path = tmp_path / "index"
        append_entry(path, "a", "1")
        append_entry(path, "b", "2")
        assert path.read_text(encoding="utf-8") == "a=1\nb=2\n"

    def test_append_never_rewrites(self, tmp_path):
        path = tmp_path / "index"
        path.write_text("existing=0\n", encoding="utf-8")
        append_entry(path, "new", "1")
        assert path.read_text(encoding="utf-8") == "existing=0\nnew=1\n"

    def test_read_missing_index_raises(self, tmp_path):
        with pytest.raises(DictionaryIOError) as excinfo:
            read_index(tmp_path / "missing")
        assert excinfo.value.path == str(tmp_path / "missing")

    def test_append_into_missing_directory_raises(self, tmp_path):
        with pytest.raises(DictionaryIOError):
            append_entry(tmp_path / "nope" / "index", "a", "1")


class TestDictionaryIndex:

    def test_lazy_load(self, tmp_path):
        path = tmp_path / "index"
        path.write_text("a=1\n", encoding="utf-8")
        index = DictionaryIndex(path)
        assert not index.loaded
        assert index.get("a") == "1"
        assert index.loaded

    def test_cache_not_refreshed_automatically(self, tmp_path):
        path = tmp_path / "index"
        path.write_text("a=1\n", encoding="utf-8")
        index = DictionaryIndex(path)
        assert index.get("b") is None
        append_entry(path, "b", "2")
        assert index.get("b") is None
        assert len(index) == 1

    def test_reload_picks_up_new_entries(self, tmp_path):
        path = tmp_path / "index"
        path.write_text("a=1\n", encoding="utf-8")
        index = DictionaryIndex(path)
        index.get("a")
        append_entry(path, "b", "2")
        index.reload()
        assert index.get("b") == "2"

    def test_failed_load_is_not_cached(self, tmp_path):
        path = tmp_path / "index"
        index = DictionaryIndex(path)
        with pytest.raises(DictionaryIOError):
            index.get("a")
        assert not index.loaded
        path.write_text("a=1\n", encoding="utf-8")
        assert index.get("a") == "1"

    def test_entries_returns_copy(self, tmp_path):
        path = tmp_path / "index"
        path.write_text("a=1\n", encoding="utf-8")
        index = DictionaryIndex(path)
        entries = index.entries()
        entries["x"] = "y"
        assert index.get("x") is None
