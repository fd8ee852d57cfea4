# grammatch/__init__.py
"""grammatch: check that a text conforms to a precompiled grammar."""

from .errors import Diagnostic, InternalError, GrammarError, MatchFailure
from .peg import Cursor, Trace, ParseResult, Matcher, GrammarRunner, parse
from .grammar import (
    Literal, Abbrev, Quant, Grammar, Rule, GrammarBuilder,
    lit, any_, seq, alt, ref, abbrev, field, labeled,
)

__version__ = "0.1.0"
