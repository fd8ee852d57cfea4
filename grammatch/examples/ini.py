# grammatch/examples/ini.py
"""INI-style configuration files.

    ; comment
    top = 1

    [section]
    key = value
    # another comment

Every line, including the last, ends with a newline.
"""

from __future__ import annotations

from ..grammar import GrammarBuilder, Quant, Grammar, lit, any_, seq, alt, ref, abbrev, labeled

# a key only starts an entry when the "=" follows
KEY = r"[A-Za-z0-9_.-]+(?=[ \t]*=)"


def build_grammar() -> Grammar:
    b = GrammarBuilder()
    eol = b.abbrev("eol", r"[ \t]*\n")

    b.rule("comment", seq(lit(r"[ \t]*[;#]"), any_(), abbrev(eol)))
    b.rule("blank", lit(r"[ \t]*\n"))
    b.rule("entry", seq(
        labeled("key", lit(KEY)),
        lit(r"[ \t]*=[ \t]*"),
        labeled("value", any_(r"[^\n]*?(?=[ \t]*\n)")),
        abbrev(eol),
    ))
    b.rule("section", seq(
        lit(r"\["), labeled("name", lit(r"[^\]\n]+")), lit(r"\]"), abbrev(eol),
        alt(ref("comment"), ref("blank"), ref("entry"), quant=Quant.STAR),
    ))
    b.rule("file", seq(
        alt(ref("comment"), ref("blank"), ref("entry"), quant=Quant.STAR),
        ref("section", quant=Quant.STAR),
    ))
    return b.build(root="file")


GRAMMAR = build_grammar()
