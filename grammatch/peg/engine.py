# grammatch/peg/engine.py
from __future__ import annotations
from typing import Callable, Optional, TextIO

from ..grammar.ast import (
    Grammar, Rule, Match, Quant, Literal,
    LiteralMatch, AnyMatch, FieldRef, Alternative, Sequence, RuleRef, AbbrevRef,
)
from ..lex import lex
from .cursor import Cursor, Trace, escape_chars
from .result import ParseResult

# Interpreted matcher:
# - One pass, left to right, over a fully resident text.
# - No backtracking: once an alternative branch is chosen, or a sequence
#   element has consumed input, that input stays consumed.
# - `cursor.applied` is the outcome of the most recent step.

MatchFunc = Callable[[Match, Cursor], None]


class Matcher:
    """Walks a read-only grammar. Holds no per-call state, so one instance may
    serve concurrent parse calls, each with its own Cursor.

    strict_alternatives=False keeps the historical behaviour of reporting an
    alternative as applied once a branch is selected, whatever that branch
    did. With True the selected branch's own outcome is propagated.
    """

    def __init__(self, grammar: Grammar, strict_alternatives: bool = False):
        self.grammar = grammar
        self.strict_alternatives = strict_alternatives

    # ---- Lookahead ----
    def approximate_applies(self, node: Match, cursor: Cursor) -> bool:
        """Could `node` begin at the cursor? Only the node's first-set is
        consulted; later elements and follow sets are not. Consumes nothing.
        """
        for literal in node.first:
            n = lex(literal, cursor)
            if n is not None and n > 0:
                return True
        return False

    # ---- Quantifiers ----
    def apply_quant(self, func: MatchFunc, node: Match, cursor: Cursor) -> bool:
        quant = node.quant
        if quant == Quant.ONCE:
            func(node, cursor)
        elif quant == Quant.MAYBE:
            if self.approximate_applies(node, cursor):
                func(node, cursor)
            cursor.applied = True
        elif quant == Quant.PLUS:
            func(node, cursor)
            if not cursor.applied:
                cursor.report("match did not apply")
            while cursor.applied:
                pos = cursor.pos
                func(node, cursor)
                if cursor.pos == pos:
                    break
            cursor.applied = True
        elif quant == Quant.STAR:
            while self.approximate_applies(node, cursor):
                pos = cursor.pos
                func(node, cursor)
                if cursor.pos == pos:
                    break
            cursor.applied = True
        else:
            raise cursor.fatal(f"illegal quant type {quant!r}")
        return cursor.applied

    # ---- Dispatch ----
    def match(self, node: Match, cursor: Cursor) -> bool:
        if isinstance(node, LiteralMatch):
            if node.quant == Quant.ONCE:
                self._match_literal(node.literal, cursor)
            else:
                self.apply_quant(self._match_literal_node, node, cursor)
        elif isinstance(node, AnyMatch):
            self._match_literal(node.literal, cursor)
        elif isinstance(node, FieldRef):
            self._match_field(node, cursor)
        elif isinstance(node, Alternative):
            self.apply_quant(self._match_alternative, node, cursor)
        elif isinstance(node, Sequence):
            self.apply_quant(self._match_sequence, node, cursor)
        elif isinstance(node, RuleRef):
            self.apply_quant(self._match_rule_ref, node, cursor)
        elif isinstance(node, AbbrevRef):
            self._match_literal(node.abbrev.literal, cursor)
        else:
            raise cursor.fatal(f"illegal match type {type(node).__name__}")
        return cursor.applied

    def _match_literal(self, literal: Literal, cursor: Cursor) -> None:
        n = lex(literal, cursor)
        if n is None:
            cursor.applied = False
            return
        if cursor.tracing(Trace.TOKEN):
            cursor.trace(f"T literal:{escape_chars(cursor.text[cursor.pos:cursor.pos + n])}:")
        cursor.advance(n)
        cursor.applied = True

    def _match_literal_node(self, node: LiteralMatch, cursor: Cursor) -> None:
        self._match_literal(node.literal, cursor)

    def _match_field(self, node: FieldRef, cursor: Cursor) -> None:
        target = self.grammar.find_field(node.owner, node.name)
        if target is None:
            raise cursor.fatal(f"unresolved field '{node.name}'")
        self.match(target, cursor)

    def _match_alternative(self, node: Alternative, cursor: Cursor) -> None:
        cursor.applied = False
        for branch in node.matches:
            if self.approximate_applies(branch, cursor):
                self.match(branch, cursor)
                if not self.strict_alternatives:
                    cursor.applied = True
                return

    def _match_sequence(self, node: Sequence, cursor: Cursor) -> None:
        cursor.applied = True
        for sub in node.matches:
            self.match(sub, cursor)
            if not cursor.applied:
                return

    def _match_rule_ref(self, node: RuleRef, cursor: Cursor) -> None:
        self.invoke_rule(self.grammar.rule(node.index), cursor)

    # ---- Rules ----
    def invoke_rule(self, rule: Rule, cursor: Cursor) -> bool:
        if cursor.tracing(Trace.RULE):
            cursor.trace(f"R {rule.name}:")
        return self.match(rule.body, cursor)

    def parse(self, filename: str, text: str, log: Optional[TextIO] = None,
              flags: Trace = Trace.NONE) -> ParseResult:
        cursor = Cursor(text, filename, log, flags)
        try:
            self.invoke_rule(self.grammar.root_rule, cursor)
        except RecursionError:
            cursor.report("parse failed, rule nesting too deep")
            return ParseResult.from_cursor(False, cursor)
        ok = cursor.applied and cursor.at_end
        if not ok:
            if cursor.applied:
                cursor.report(f"parse failed, trailing input remains ({cursor.remaining} characters)")
            else:
                cursor.report(f"parse failed, rule '{self.grammar.root_rule.name}' did not apply")
        return ParseResult.from_cursor(ok, cursor)


def parse(grammar: Grammar, filename: str, text: str, log: Optional[TextIO] = None,
          flags: Trace = Trace.NONE, *, strict_alternatives: bool = False) -> ParseResult:
    """Match `text` against `grammar`, starting at its root rule.

    Success requires the root rule to apply *and* the whole text to be
    consumed. Mismatches, and nesting deeper than the interpreter stack
    allows, come back as a failed `ParseResult`; a broken grammar raises
    `InternalError`.
    """
    return Matcher(grammar, strict_alternatives).parse(filename, text, log, flags)
