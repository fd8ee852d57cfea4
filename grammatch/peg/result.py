# grammatch/peg/result.py
"""Structured outcome of one parse call."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import Diagnostic, MatchFailure
from .cursor import Cursor


def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end


def caret_snippet(src: str, pos: int) -> str:
    """Line containing `pos` with a caret (^) under it."""
    start, end = _line_bounds(src, pos)
    line = src[start:end]
    col = (pos - start) + 1
    return f"{line}\n" + " " * (col - 1) + "^"


@dataclass(frozen=True)
class ParseResult:
    ok: bool
    filename: str
    line: int       # line the cursor stopped on (1-based)
    offset: int     # characters consumed
    length: int     # length of the input text
    diagnostics: Tuple[Diagnostic, ...] = ()

    @classmethod
    def from_cursor(cls, ok: bool, cursor: Cursor) -> "ParseResult":
        return cls(ok, cursor.filename, cursor.line, cursor.pos, len(cursor.text),
                   tuple(cursor.diagnostics))

    def __bool__(self) -> bool:
        return self.ok

    @property
    def message(self) -> Optional[str]:
        """Most recent diagnostic, or None when there is nothing to report."""
        if not self.diagnostics:
            return None
        return self.diagnostics[-1].message

    def column(self, text: str) -> int:
        start, _ = _line_bounds(text, self.offset)
        return (self.offset - start) + 1

    def raise_for_failure(self, text: Optional[str] = None) -> None:
        if self.ok:
            return
        where = f"{self.filename}:{self.line}"
        if text is not None:
            where += f":{self.column(text)}"
        msg = f"Parse error at {where}: {self.message or 'parse failed'}"
        earlier = [str(d) for d in self.diagnostics[:-1]]
        if earlier:
            msg += "\n" + "\n".join(earlier)
        if text is not None:
            msg += "\n" + caret_snippet(text, self.offset)
        raise MatchFailure(msg)
