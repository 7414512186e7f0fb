"""
Tests for the in-memory string sink.
"""

import pytest

from recordfmt.formatters import StringSinkWriter


class TestStringSinkWriter:
    """Test accumulation of text in the sink."""

    def test_write_appends_verbatim(self):
        """Text is stored exactly as written, without escaping."""
        sink = StringSinkWriter()
        sink.write("<a>")
        sink.write("&")
        assert sink.getvalue() == "<a>&"

    def test_write_single_character_and_code_point(self):
        """Single characters and integer code points are accepted."""
        sink = StringSinkWriter()
        sink.write("x")
        sink.write(ord("y"))
        assert str(sink) == "xy"

    def test_write_character_sequence(self):
        """A sequence of characters is joined."""
        sink = StringSinkWriter()
        count = sink.write(["a", "b", "c"])
        assert count == 3
        assert sink.getvalue() == "abc"

    def test_write_slice(self):
        """Offset and length select part of the text."""
        sink = StringSinkWriter()
        sink.write("hello world", 6, 5)
        assert sink.getvalue() == "world"

    def test_write_invalid_slice(self):
        """Out-of-range slices are rejected."""
        sink = StringSinkWriter()
        with pytest.raises(IndexError):
            sink.write("abc", 2, 5)

    @pytest.mark.parametrize("start,end", [(2, 10), (-1, 2), (2, 1)])
    def test_append_invalid_slice(self, start, end):
        """Append rejects the same out-of-range slices as write."""
        sink = StringSinkWriter()
        with pytest.raises(IndexError):
            sink.append("abc", start, end)
        assert sink.getvalue() == ""

    def test_append_returns_writer(self):
        """Append supports chaining and half-open slices."""
        sink = StringSinkWriter()
        result = sink.append("a").append("xbcx", 1, 3).append("d")
        assert result is sink
        assert sink.getvalue() == "abcd"

    def test_getvalue_does_not_consume(self):
        """Reading the contents leaves them in place."""
        sink = StringSinkWriter()
        sink.write("abc")
        assert sink.getvalue() == "abc"
        sink.write("def")
        assert sink.getvalue() == "abcdef"
        assert len(sink) == 6

    def test_flush_and_close_are_noops(self):
        """The sink keeps working after flush and close."""
        sink = StringSinkWriter(initial_size=1)
        sink.write("a")
        sink.flush()
        sink.close()
        sink.write("b")
        assert sink.getvalue() == "ab"

    def test_empty_sink(self):
        assert StringSinkWriter().getvalue() == ""
