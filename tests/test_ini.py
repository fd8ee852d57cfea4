"""The bundled INI grammar, end to end."""

from __future__ import annotations

import io

import pytest

from grammatch import Trace, parse
from grammatch.examples.ini import GRAMMAR, build_grammar

GOOD = """\
; global settings
top = 1

[main]
name = demo
  # indented comment
path=/srv/app

[empty]
"""


def test_accepts_well_formed_file() -> None:
    res = parse(GRAMMAR, "good.ini", GOOD)
    assert res.ok, res.diagnostics
    assert res.line == GOOD.count("\n") + 1


def test_empty_file() -> None:
    assert parse(GRAMMAR, "empty.ini", "").ok


@pytest.mark.parametrize("text, line", [
    ("[main]\nkey value\n", 2),
    ("[main\nkey = v\n", 1),
    ("key = v\n[s]\nno equals\n", 3),
    ("key = v", 1),
])
def test_rejects_malformed_file(text: str, line: int) -> None:
    res = parse(GRAMMAR, "bad.ini", text)
    assert not res.ok
    assert res.line == line


def test_missing_final_newline_stops_before_value() -> None:
    for strict in (False, True):
        res = parse(GRAMMAR, "t.ini", "key = v", strict_alternatives=strict)
        assert not res.ok
        assert res.offset == len("key = ")
        assert "trailing input remains" in res.message


def test_build_grammar_is_fresh_and_equal() -> None:
    g = build_grammar()
    assert g is not GRAMMAR
    assert g == GRAMMAR


def test_full_trace() -> None:
    log = io.StringIO()
    parse(GRAMMAR, "t.ini", "[s]\nk = v\n", log, Trace.ALL)
    lines = log.getvalue().splitlines()
    assert lines[0] == "R file:"
    assert "R section:" in lines
    assert "R entry:" in lines
    assert "T literal:k:" in lines
    assert any(line.startswith("A ") for line in lines)
    assert any(line.startswith("M ") for line in lines)
