# grammatch/peg/__init__.py
"""Grammar-driven matching engine.

This package provides:
- `Cursor` and the `Trace` categories (per-call state and debug output)
- `Matcher` / `parse`: lookahead, quantifiers, dispatch and rule invocation
- `ParseResult` and `GrammarRunner`
"""

from .cursor import Cursor, Trace
from .result import ParseResult
from .engine import Matcher, parse
from .runtime import GrammarRunner
