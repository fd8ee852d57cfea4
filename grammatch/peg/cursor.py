# grammatch/peg/cursor.py
"""Per-call matching state: position, line counter, applied flag, trace sink.

A `Cursor` is created fresh for every parse call and discarded afterwards.
It is the only mutable state the engine touches.
"""

from __future__ import annotations
import enum
from typing import List, Optional, TextIO

from ..errors import Diagnostic, InternalError

# advance trace: context shown before / after the new position
_WINDOW = 28
_AHEAD = 20

_ESCAPES = {"\n": "\\n", "\t": "\\t", "\r": "\\r", "\f": "\\f", "\v": "\\v", "\\": "\\\\"}


class Trace(enum.IntFlag):
    NONE    = 0
    ADVANCE = 1
    MATCH   = 2
    TOKEN   = 4
    RULE    = 8
    ALL     = ADVANCE | MATCH | TOKEN | RULE

    @classmethod
    def parse(cls, spec: str) -> "Trace":
        """`"advance,match"` -> Trace.ADVANCE | Trace.MATCH"""
        flags = cls.NONE
        for part in spec.split(","):
            name = part.strip()
            if not name:
                continue
            try:
                flags |= cls[name.upper()]
            except KeyError:
                names = ", ".join(m.name.lower() for m in cls if m.name not in ("NONE", "ALL"))
                raise ValueError(f"unknown trace category {name!r} (expected: {names}, all)") from None
        return flags


def escape_chars(s: str) -> str:
    out = []
    for ch in s:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch < " " or ch == "\x7f":
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    return "".join(out)


class Cursor:
    def __init__(self, text: str, filename: str = "<input>",
                 log: Optional[TextIO] = None, flags: Trace = Trace.NONE):
        self.text = text
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.applied = False
        if flags and log is not None:
            self.flags = Trace(flags)
            self.log = log
        else:
            self.flags = Trace.NONE
            self.log = None
        self.diagnostics: List[Diagnostic] = []

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    @property
    def remaining(self) -> int:
        return len(self.text) - self.pos

    def tracing(self, flag: Trace) -> bool:
        return bool(self.flags & flag)

    def trace(self, line: str) -> None:
        print(line, file=self.log)

    def report(self, message: str) -> Diagnostic:
        """Record a grammar-input mismatch at the current line."""
        d = Diagnostic(self.filename, self.line, message)
        self.diagnostics.append(d)
        return d

    def fatal(self, message: str) -> InternalError:
        return InternalError(message, self.filename, self.line)

    def advance(self, n: int) -> None:
        if n == 0:
            return
        if n < 0 or self.pos + n > len(self.text):
            raise self.fatal("moved beyond end of input")
        self.line += self.text.count("\n", self.pos, self.pos + n)
        self.pos += n
        if self.tracing(Trace.ADVANCE):
            self._trace_advance(n)

    def _trace_advance(self, n: int) -> None:
        before = min(self.pos, _WINDOW)
        left = escape_chars(self.text[self.pos - before:self.pos])
        right = escape_chars(self.text[self.pos:self.pos + _AHEAD])
        pad = "<".rjust(_WINDOW + 10 - len(left)) if len(left) < _WINDOW + 10 else ""
        self.trace(f"A {n:3d} " + pad + left
                   + "|=|" + right + ">".rjust(_WINDOW - len(right)))
