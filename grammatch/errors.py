# grammatch/errors.py
"""Error taxonomy.

- `Diagnostic`    : grammar-input mismatch (the text does not conform).
                    Recorded on the cursor, never raised by the engine.
- `InternalError` : the grammar tree or the engine bookkeeping is broken.
                    Terminates the parse call; never retry on it.
- `GrammarError`  : defect found while building a grammar.
- `MatchFailure`  : raised on request by `ParseResult.raise_for_failure()`.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Diagnostic:
    filename: str
    line: int
    message: str

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}: {self.message}"


class InternalError(RuntimeError):
    def __init__(self, message: str, filename: Optional[str] = None, line: Optional[int] = None):
        self.message = message
        self.filename = filename
        self.line = line
        where = ""
        if filename is not None:
            where = f"{filename}:{line}: " if line is not None else f"{filename}: "
        elif line is not None:
            where = f"line {line}: "
        super().__init__(f"{where}{message}")


class GrammarError(InternalError):
    pass


class MatchFailure(SyntaxError):
    pass
