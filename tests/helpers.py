"""Shared test helpers."""

from __future__ import annotations

from grammatch.grammar import Grammar, GrammarBuilder
from grammatch.grammar.ast import Match


def single_rule(body: Match, name: str = "top") -> Grammar:
    """Grammar whose root rule is `body`."""
    return GrammarBuilder().rule(name, body).build()
