# grammatch/grammar/first.py
"""FIRST/NULLABLE 계산 (매치 트리용).

룰 아레나 전체에 대해 고정점 반복으로
- first[i]    : 룰 i 본문을 시작할 수 있는 리터럴들 (발견 순서 유지, 중복 제거)
- nullable[i] : 룰 i 본문이 아무것도 소비하지 않고 적용될 수 있는지
를 구한 뒤, 모든 노드에 `first` 튜플을 채워 넣은 새 룰들을 돌려줍니다.

규칙
----
- LiteralMatch / AnyMatch / AbbrevRef : { 자기 리터럴 }
- Sequence    : 앞에서부터 원소의 FIRST를 합치다가 nullable이 아닌 원소에서 중단
- Alternative : 모든 분기의 FIRST 합집합
- RuleRef     : 참조된 룰 본문의 FIRST
- FieldRef    : 같은 룰 안에서 이름으로 찾은 형제 노드의 FIRST
- 수량자 `?`, `*` 는 노드를 nullable로 만듭니다.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Dict, List, Sequence as Seq, Set, Tuple

from .ast import (
    Literal, Quant, Match, Rule,
    LiteralMatch, AnyMatch, FieldRef, Alternative, Sequence, RuleRef, AbbrevRef,
    walk,
)
from ..errors import GrammarError

# 순서를 보존하는 집합 대용
LitSet = Dict[Literal, None]


def _optional(quant: str) -> bool:
    return quant in (Quant.MAYBE, Quant.STAR)


class _FirstSets:
    def __init__(self, rules: Seq[Rule]):
        self.rules = list(rules)
        self.first: List[LitSet] = [{} for _ in self.rules]
        self.nullable: List[bool] = [False] * len(self.rules)

    def solve(self) -> None:
        changed = True
        while changed:
            changed = False
            for i, r in enumerate(self.rules):
                f, n = self.first_of(r.body, i, set())
                before = len(self.first[i])
                self.first[i].update(f)
                if len(self.first[i]) != before:
                    changed = True
                if n and not self.nullable[i]:
                    self.nullable[i] = True
                    changed = True

    def first_of(self, node: Match, owner: int, fields: Set[str]) -> Tuple[LitSet, bool]:
        if isinstance(node, LiteralMatch):
            return {node.literal: None}, _optional(node.quant)
        if isinstance(node, AnyMatch):
            return {node.literal: None}, False
        if isinstance(node, AbbrevRef):
            return {node.abbrev.literal: None}, False
        if isinstance(node, RuleRef):
            return dict(self.first[node.index]), self.nullable[node.index] or _optional(node.quant)
        if isinstance(node, FieldRef):
            if node.name in fields:
                # 자기 자신을 감싸는 필드 참조: 더 들어가지 않음
                return {}, False
            target = _lookup_field(self.rules[owner], node.name)
            return self.first_of(target, owner, fields | {node.name})
        if isinstance(node, Sequence):
            out: LitSet = {}
            all_null = True
            for sub in node.matches:
                f, n = self.first_of(sub, owner, fields)
                out.update(f)
                if not n:
                    all_null = False
                    break
            return out, all_null or _optional(node.quant)
        if isinstance(node, Alternative):
            out = {}
            any_null = False
            for sub in node.matches:
                f, n = self.first_of(sub, owner, fields)
                out.update(f)
                any_null = any_null or n
            return out, any_null or _optional(node.quant)
        raise GrammarError(f"illegal match type {type(node).__name__}")

    def annotate(self, node: Match, owner: int) -> Match:
        f, _ = self.first_of(node, owner, set())
        if isinstance(node, (Sequence, Alternative)):
            subs = tuple(self.annotate(sub, owner) for sub in node.matches)
            return replace(node, matches=subs, first=tuple(f))
        return replace(node, first=tuple(f))


def _lookup_field(rule: Rule, name: str) -> Match:
    for node in walk(rule.body):
        if node.label == name:
            return node
    raise GrammarError(f"rule '{rule.name}': unresolved field '{name}'")


def compute_first(rules: Seq[Rule]) -> Tuple[Rule, ...]:
    """모든 노드의 `first`를 채운 룰 튜플을 반환합니다.

    RuleRef.index 와 FieldRef.owner 는 이미 해석되어 있어야 합니다.
    """
    ff = _FirstSets(rules)
    ff.solve()
    return tuple(Rule(r.name, ff.annotate(r.body, i)) for i, r in enumerate(ff.rules))


def nullable_rules(rules: Seq[Rule]) -> List[str]:
    """빈 입력에도 적용될 수 있는 룰 이름들 (디버그 출력용)."""
    ff = _FirstSets(rules)
    ff.solve()
    return [r.name for i, r in enumerate(ff.rules) if ff.nullable[i]]
