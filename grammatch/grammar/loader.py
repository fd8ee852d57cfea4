"""입력 텍스트 / 문법 객체 로더"""

from __future__ import annotations
import importlib
from pathlib    import Path

from .ast import Grammar


def load_text(path: str) -> str:
    """
    Load Input Text
    """
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_grammar_object(spec: str) -> Grammar:
    """`package.module:attr` 형식으로 지정된 Grammar를 가져온다.

    attr가 호출 가능하면 인자 없이 호출한 결과를 사용한다.
    """
    mod_name, sep, attr = spec.partition(":")
    if not sep or not mod_name or not attr:
        raise ValueError(f"grammar must be given as 'module:attr', got {spec!r}")
    mod = importlib.import_module(mod_name)
    try:
        obj = getattr(mod, attr)
    except AttributeError:
        raise ValueError(f"module {mod_name!r} has no attribute {attr!r}")
    if callable(obj) and not isinstance(obj, Grammar):
        obj = obj()
    if not isinstance(obj, Grammar):
        raise TypeError(f"{spec} is not a Grammar (got {type(obj).__name__})")
    return obj
