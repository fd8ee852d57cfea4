# grammatch/grammar/builder.py
"""Programmatic construction of an immutable `Grammar`.

Usage:
    b = GrammarBuilder()
    word = b.abbrev("word", r"[a-z]+")
    b.rule("entry", seq(abbrev(word), lit(r"\\s*=\\s*"), any_(), lit(r"\\n")))
    b.rule("file", ref("entry", Quant.STAR))
    g = b.build(root="file")

`build()` resolves rule names to arena indices, binds field references to the
rule that owns them, checks every field resolves and fills in first-sets.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Dict, List, Optional, Union

from .ast import (
    Literal, Abbrev, Quant, Match, Rule, Grammar,
    LiteralMatch, AnyMatch, FieldRef, Alternative, Sequence, RuleRef, AbbrevRef,
    walk,
)
from .first import compute_first
from ..errors import GrammarError

# rest of the line
DEFAULT_ANY = r"[^\n]*"


def _check_quant(quant: str) -> str:
    if quant not in Quant.ALL:
        raise GrammarError(f"illegal quant type {quant!r}")
    return quant


def lit(pattern: Union[str, Literal], flags: str = "", quant: str = Quant.ONCE,
        label: Optional[str] = None) -> LiteralMatch:
    literal = pattern if isinstance(pattern, Literal) else Literal(pattern, flags)
    return LiteralMatch(literal, _check_quant(quant), label)


def any_(pattern: str = DEFAULT_ANY, flags: str = "", label: Optional[str] = None) -> AnyMatch:
    return AnyMatch(Literal(pattern, flags), label)


def seq(*matches: Match, quant: str = Quant.ONCE, label: Optional[str] = None) -> Sequence:
    if not matches:
        raise GrammarError("empty sequence")
    return Sequence(tuple(matches), _check_quant(quant), label)


def alt(*matches: Match, quant: str = Quant.ONCE, label: Optional[str] = None) -> Alternative:
    if not matches:
        raise GrammarError("empty alternative")
    return Alternative(tuple(matches), _check_quant(quant), label)


def ref(name: str, quant: str = Quant.ONCE, label: Optional[str] = None) -> RuleRef:
    return RuleRef(name, quant=_check_quant(quant), label=label)


def abbrev(a: Abbrev, label: Optional[str] = None) -> AbbrevRef:
    return AbbrevRef(a, label)


def field(name: str, label: Optional[str] = None) -> FieldRef:
    return FieldRef(name, label=label)


def labeled(label: str, node: Match) -> Match:
    return replace(node, label=label)


class GrammarBuilder:
    def __init__(self):
        self._rules: List[Rule] = []
        self._abbrevs: Dict[str, Abbrev] = {}

    def abbrev(self, name: str, pattern: str, flags: str = "") -> Abbrev:
        if name in self._abbrevs:
            raise GrammarError(f"duplicate abbreviation '{name}'")
        a = Abbrev(name, Literal(pattern, flags))
        self._abbrevs[name] = a
        return a

    def rule(self, name: str, body: Match) -> "GrammarBuilder":
        if any(r.name == name for r in self._rules):
            raise GrammarError(f"duplicate rule '{name}'")
        self._rules.append(Rule(name, body))
        return self

    def build(self, root: Optional[str] = None) -> Grammar:
        if not self._rules:
            raise GrammarError("grammar has no rules")
        index = {r.name: i for i, r in enumerate(self._rules)}

        resolved = tuple(
            Rule(r.name, self._resolve(r.body, i, index, r.name))
            for i, r in enumerate(self._rules)
        )
        for r in resolved:
            self._check_fields(r)

        if root is None:
            root_index = 0
        elif root in index:
            root_index = index[root]
        else:
            raise GrammarError(f"undefined root rule '{root}'")

        return Grammar(compute_first(resolved), dict(self._abbrevs), root_index)

    # ---- Internals ----
    def _resolve(self, node: Match, owner: int, index: Dict[str, int], rule_name: str) -> Match:
        if isinstance(node, RuleRef):
            if node.name not in index:
                raise GrammarError(f"rule '{rule_name}': undefined rule '{node.name}'")
            return replace(node, index=index[node.name])
        if isinstance(node, FieldRef):
            return replace(node, owner=owner)
        if isinstance(node, (Sequence, Alternative)):
            subs = tuple(self._resolve(s, owner, index, rule_name) for s in node.matches)
            return replace(node, matches=subs)
        if isinstance(node, AbbrevRef):
            known = self._abbrevs.get(node.abbrev.name)
            if known is None or known != node.abbrev:
                raise GrammarError(f"rule '{rule_name}': unknown abbreviation '{node.abbrev.name}'")
            return node
        if isinstance(node, (LiteralMatch, AnyMatch)):
            return node
        raise GrammarError(f"rule '{rule_name}': illegal match type {type(node).__name__}")

    def _check_fields(self, r: Rule) -> None:
        labels: Dict[str, Match] = {}
        for node in walk(r.body):
            if node.label is None:
                continue
            if node.label in labels:
                raise GrammarError(f"rule '{r.name}': duplicate field '{node.label}'")
            labels[node.label] = node
        for node in walk(r.body):
            if not isinstance(node, FieldRef):
                continue
            target = labels.get(node.name)
            if target is None:
                raise GrammarError(f"rule '{r.name}': unresolved field '{node.name}'")
            if target is node:
                raise GrammarError(f"rule '{r.name}': field '{node.name}' refers to itself")
