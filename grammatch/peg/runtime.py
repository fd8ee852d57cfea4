# grammatch/peg/runtime.py
from __future__ import annotations
from typing import Optional, TextIO

from ..grammar.ast import Grammar
from ..grammar.loader import load_text
from .cursor import Trace
from .engine import Matcher
from .result import ParseResult


class GrammarRunner:
    """Run one grammar over many inputs with a fixed trace configuration."""
    def __init__(self, grammar: Grammar, flags: Trace = Trace.NONE,
                 log: Optional[TextIO] = None, strict_alternatives: bool = False):
        self.matcher = Matcher(grammar, strict_alternatives)
        self.flags = flags
        self.log = log

    @property
    def grammar(self) -> Grammar:
        return self.matcher.grammar

    def run(self, text: str, filename: str = "<input>") -> ParseResult:
        return self.matcher.parse(filename, text, self.log, self.flags)

    def run_file(self, path: str) -> ParseResult:
        return self.run(load_text(path), path)
