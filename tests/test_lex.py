"""Literal matcher: anchored matching, no-match sentinel, match trace."""

from __future__ import annotations

import io

from grammatch.grammar.ast import Literal
from grammatch.lex import NO_MATCH, lex
from grammatch.peg.cursor import Cursor, Trace


def test_match_returns_length() -> None:
    c = Cursor("abcdef")
    assert lex(Literal("abc"), c) == 3
    assert c.pos == 0


def test_no_match() -> None:
    c = Cursor("xyz")
    assert lex(Literal("abc"), c) is NO_MATCH
    assert c.pos == 0


def test_anchored_at_cursor() -> None:
    c = Cursor("xxabc")
    assert lex(Literal("abc"), c) is NO_MATCH
    c.advance(2)
    assert lex(Literal("abc"), c) == 3


def test_zero_length_match() -> None:
    assert lex(Literal("x*"), Cursor("abc")) == 0


def test_flags() -> None:
    assert lex(Literal("abc", "i"), Cursor("ABC")) == 3


def test_match_trace(log: io.StringIO) -> None:
    c = Cursor("abcdef", log=log, flags=Trace.MATCH)
    c.advance(1)
    lex(Literal("bc"), c)
    lex(Literal("zz"), c)
    assert log.getvalue().splitlines() == ["M 1 /bc/ 1..3", "M 1 /zz/ -1..-1"]


class _LateMatch:
    def __init__(self, start: int, end: int) -> None:
        self._span = (start, end)

    def start(self) -> int:
        return self._span[0]

    def end(self) -> int:
        return self._span[1]

    def span(self):
        return self._span


class _SkippingPattern:
    def match(self, text, pos):
        return _LateMatch(pos + 2, pos + 5)


def test_late_match_reports_skipped_characters() -> None:
    literal = Literal("abc")
    object.__setattr__(literal, "compiled", _SkippingPattern())
    c = Cursor("xxabc", filename="in.txt")
    assert lex(literal, c) == 3
    assert [str(d) for d in c.diagnostics] == ["in.txt:1: Skipped 2 characters"]
