# grammatch/lex/__init__.py
"""Literal matcher.

`lex(literal, cursor)` tries the literal's compiled `regex` pattern anchored at
the cursor's current offset. It never moves the cursor; consuming is the
dispatcher's job.

Trace (Trace.MATCH):
    M <offset> /<pattern>/<flags> <start>..<end>
with `-1..-1` when nothing matched.
"""

from __future__ import annotations
from typing import Optional

from ..grammar.ast import Literal
from ..peg.cursor import Cursor, Trace

# returned by lex() when the literal does not match at the cursor
NO_MATCH = None


def lex(literal: Literal, cursor: Cursor) -> Optional[int]:
    offset = cursor.pos
    m = literal.compiled.match(cursor.text, offset)
    if cursor.tracing(Trace.MATCH):
        start, end = m.span() if m else (-1, -1)
        cursor.trace(f"M {offset} {literal} {start}..{end}")
    if m is None:
        return NO_MATCH
    if m.start() != offset:
        cursor.report(f"Skipped {m.start() - offset} characters")
    return m.end() - m.start()
