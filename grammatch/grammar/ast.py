# grammatch/grammar/ast.py
"""Grammar tree consumed by the matcher.

- Literal / Abbrev : compiled pattern and its named alias
- Match nodes      : LiteralMatch, AnyMatch, FieldRef, Alternative, Sequence, RuleRef, AbbrevRef
- Rule / Grammar   : rules live in an arena (tuple) addressed by index

Everything here is immutable once `GrammarBuilder.build()` returns it, so one
grammar may be shared by any number of parse calls.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple, Union
import regex as re

_FLAG_MAP = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    'x': re.VERBOSE,
    'A': re.ASCII,
}


def compile_pattern(pattern: str, flags: str = ""):
    f = 0
    for ch in flags:
        if ch not in _FLAG_MAP:
            raise ValueError(f"unknown regex flag {ch!r} in /{pattern}/{flags}")
        f |= _FLAG_MAP[ch]
    return re.compile(pattern, f)


@dataclass(frozen=True)
class Literal:
    pattern: str
    flags: str = ""
    compiled: "re.Pattern" = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "compiled", compile_pattern(self.pattern, self.flags))

    def __str__(self) -> str:
        return f"/{self.pattern}/{self.flags}"


@dataclass(frozen=True)
class Abbrev:
    name: str
    literal: Literal


class Quant:
    ONCE  = "once"
    MAYBE = "?"
    STAR  = "*"
    PLUS  = "+"

    ALL = (ONCE, MAYBE, STAR, PLUS)


# ---- Match nodes ----
# `label`: name under which a FieldRef in the same rule can reach this node.
# `first`: literals that may begin this node (filled in by the builder).

@dataclass(frozen=True)
class LiteralMatch:
    literal: Literal
    quant: str = Quant.ONCE
    label: Optional[str] = None
    first: Tuple[Literal, ...] = ()

@dataclass(frozen=True)
class AnyMatch:
    literal: Literal
    label: Optional[str] = None
    first: Tuple[Literal, ...] = ()

@dataclass(frozen=True)
class FieldRef:
    name: str
    owner: int = -1     # index of the owning rule
    label: Optional[str] = None
    first: Tuple[Literal, ...] = ()

@dataclass(frozen=True)
class Alternative:
    matches: Tuple["Match", ...]
    quant: str = Quant.ONCE
    label: Optional[str] = None
    first: Tuple[Literal, ...] = ()

@dataclass(frozen=True)
class Sequence:
    matches: Tuple["Match", ...]
    quant: str = Quant.ONCE
    label: Optional[str] = None
    first: Tuple[Literal, ...] = ()

@dataclass(frozen=True)
class RuleRef:
    name: str
    index: int = -1     # arena index, resolved by the builder
    quant: str = Quant.ONCE
    label: Optional[str] = None
    first: Tuple[Literal, ...] = ()

@dataclass(frozen=True)
class AbbrevRef:
    abbrev: Abbrev
    label: Optional[str] = None
    first: Tuple[Literal, ...] = ()

Match = Union[LiteralMatch, AnyMatch, FieldRef, Alternative, Sequence, RuleRef, AbbrevRef]


def children(node: Match) -> Tuple[Match, ...]:
    if isinstance(node, (Alternative, Sequence)):
        return node.matches
    return ()


def walk(node: Match) -> Iterator[Match]:
    """Pre-order walk of one rule body. Does not follow RuleRefs."""
    yield node
    for sub in children(node):
        yield from walk(sub)


@dataclass(frozen=True)
class Rule:
    name: str
    body: Match


@dataclass(frozen=True)
class Grammar:
    rules: Tuple[Rule, ...]
    abbrevs: Dict[str, Abbrev] = field(default_factory=dict, compare=False)
    root: int = 0

    def rule(self, index: int) -> Rule:
        return self.rules[index]

    @property
    def root_rule(self) -> Rule:
        return self.rules[self.root]

    def index_of(self, name: str) -> Optional[int]:
        for i, r in enumerate(self.rules):
            if r.name == name:
                return i
        return None

    def require_rule(self, name: str) -> Rule:
        i = self.index_of(name)
        if i is None:
            raise KeyError(f"undefined rule '{name}'")
        return self.rules[i]

    def find_field(self, owner: int, name: str) -> Optional[Match]:
        """Labeled node `name` inside the body of rule `owner`, or None."""
        if not 0 <= owner < len(self.rules):
            return None
        for node in walk(self.rules[owner].body):
            if node.label == name:
                return node
        return None
