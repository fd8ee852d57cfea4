# grammatch/grammar/__init__.py
"""Immutable grammar tree, its builder and first-set computation."""

from .ast import (
    Literal, Abbrev, Quant,
    LiteralMatch, AnyMatch, FieldRef, Alternative, Sequence, RuleRef, AbbrevRef,
    Match, Rule, Grammar,
)
from .builder import GrammarBuilder, lit, any_, seq, alt, ref, abbrev, field, labeled
