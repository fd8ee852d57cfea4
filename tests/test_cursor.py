"""Cursor: advance, line counting, trace sink and Trace flag parsing."""

from __future__ import annotations

import io

import pytest

from grammatch.errors import InternalError
from grammatch.peg.cursor import Cursor, Trace, escape_chars


class TestAdvance:
    def test_advance_moves_offset(self) -> None:
        c = Cursor("abcdef")
        c.advance(3)
        assert c.pos == 3
        assert c.line == 1
        assert c.remaining == 3

    def test_zero_advance_is_noop(self) -> None:
        c = Cursor("")
        c.advance(0)
        assert c.pos == 0
        assert c.at_end

    def test_counts_each_newline_once(self) -> None:
        c = Cursor("a\nb\n\nc")
        c.advance(2)
        assert c.line == 2
        c.advance(3)
        assert c.line == 4
        c.advance(1)
        assert c.line == 4
        assert c.at_end

    def test_beyond_end_is_internal_error(self) -> None:
        c = Cursor("ab", filename="f.txt")
        c.advance(2)
        with pytest.raises(InternalError, match="moved beyond end of input") as exc:
            c.advance(1)
        assert exc.value.filename == "f.txt"
        assert exc.value.line == 1


class TestTrace:
    def test_disabled_without_flags(self, log: io.StringIO) -> None:
        c = Cursor("abcd", log=log)
        c.advance(2)
        assert log.getvalue() == ""
        assert c.flags == Trace.NONE

    def test_disabled_without_sink(self) -> None:
        c = Cursor("abcd", flags=Trace.ALL)
        assert c.flags == Trace.NONE
        assert c.log is None
        c.advance(2)

    def test_advance_window(self, log: io.StringIO) -> None:
        c = Cursor("abcd", log=log, flags=Trace.ADVANCE)
        c.advance(2)
        out = log.getvalue()
        assert out.startswith("A   2 ")
        assert "<ab|=|cd" in out
        assert out.rstrip("\n").endswith(">")

    def test_advance_window_escapes_newlines(self, log: io.StringIO) -> None:
        c = Cursor("x\ny", log=log, flags=Trace.ADVANCE)
        c.advance(2)
        assert "x\\n|=|y" in log.getvalue()

    def test_window_is_bounded(self, log: io.StringIO) -> None:
        text = "0123456789" * 10
        c = Cursor(text, log=log, flags=Trace.ADVANCE)
        c.advance(50)
        line = log.getvalue().rstrip("\n")
        before, after = line.split("|=|")
        assert before.endswith(text[22:50])
        assert after.startswith(text[50:70])


    def test_wide_escaped_window_drops_padding(self, log: io.StringIO) -> None:
        c = Cursor("\n" * 30 + "x", log=log, flags=Trace.ADVANCE)
        c.advance(30)
        line = log.getvalue().rstrip("\n")
        assert "<" not in line
        assert line.startswith("A  30 " + "\\n" * 28 + "|=|x")


class TestTraceParse:
    def test_list(self) -> None:
        assert Trace.parse("advance,match") == Trace.ADVANCE | Trace.MATCH

    def test_all_and_spaces(self) -> None:
        assert Trace.parse(" all ") == Trace.ALL
        assert Trace.parse("token, rule") == Trace.TOKEN | Trace.RULE

    def test_empty(self) -> None:
        assert Trace.parse("") == Trace.NONE

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="unknown trace category") as exc:
            Trace.parse("match,bogus")
        assert exc.value.__cause__ is None
        assert exc.value.__suppress_context__


def test_report_tags_filename_and_line() -> None:
    c = Cursor("a\nb", filename="x.conf")
    c.advance(2)
    d = c.report("match did not apply")
    assert str(d) == "x.conf:2: match did not apply"
    assert c.diagnostics == [d]


def test_escape_chars() -> None:
    assert escape_chars("a\tb\n\x01") == "a\\tb\\n\\x01"
