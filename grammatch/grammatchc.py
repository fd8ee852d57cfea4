# grammatch/grammatchc.py
"""grammatchc – grammatch CLI

사용 예)
    $ python -m grammatch.grammatchc check grammatch.examples.ini:GRAMMAR tests/data/sample.ini
    $ python -m grammatch.grammatchc check grammatch.examples.ini:build_grammar a.ini b.ini -T rule,token
    $ python -m grammatch.grammatchc rules grammatch.examples.ini:GRAMMAR

기능
----
- check : 입력 파일들이 문법에 맞는지 판정하고 실패 위치(줄)와 진단을 출력
- rules : 문법의 룰 목록과 각 룰의 FIRST 리터럴을 출력

문법은 `module:attr` 로 지정합니다. attr가 함수이면 호출 결과(Grammar)를 사용합니다.
-T/--trace 로 advance,match,token,rule 트레이스를 stdout에 출력합니다.
"""

from __future__ import annotations
import argparse
import sys
from typing import Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _load(spec: str, debug: bool):
    from .grammar.loader import load_grammar_object
    g = load_grammar_object(spec)
    if debug: _eprint("[DEBUG] grammar ready | rules=%d abbrevs=%d root=%s" %
                      (len(g.rules), len(g.abbrevs), g.root_rule.name))
    return g

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_check(args) -> int:
    from .errors import InternalError
    from .peg import GrammarRunner, Trace

    try:
        flags = Trace.parse(args.trace) if args.trace else Trace.NONE
        g = _load(args.grammar, args.debug)
    except InternalError as e:
        _eprint("[GRAMMAR ERROR]", str(e))
        return 2
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    runner = GrammarRunner(g, flags=flags, log=sys.stdout, strict_alternatives=args.strict)
    failed = 0
    for path in args.files:
        try:
            res = runner.run_file(path)
        except InternalError as e:
            _eprint("[INTERNAL ERROR]", str(e))
            return 2
        except OSError as e:
            _eprint("[ERROR]", type(e).__name__, str(e))
            return 2

        if res.ok:
            print(f"[OK] {path}")
            if args.debug:
                _eprint(f"[DEBUG] {path}: lines={res.line} chars={res.length}")
            continue

        failed += 1
        _eprint(f"[PARSE FAILED] {path}:{res.line} ({res.offset}/{res.length} chars consumed)")
        for d in res.diagnostics:
            _eprint("  " + str(d))
    return 1 if failed else 0


def cmd_rules(args) -> int:
    from .grammar.first import nullable_rules
    try:
        g = _load(args.grammar, args.debug)
    except Exception as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    nullable = set(nullable_rules(g.rules))
    for i, r in enumerate(g.rules):
        mark = "*" if i == g.root else " "
        first = " ".join(str(lit) for lit in r.body.first) or "(none)"
        null = " [nullable]" if r.name in nullable else ""
        print(f"{mark}{i:3d}: {r.name:<16} {first}{null}")
    return 0


# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="grammatchc", description="grammatch grammar conformance checker")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="입력 파일이 문법에 맞는지 검사합니다")
    p_check.add_argument("grammar", help="문법 위치 (module:attr)")
    p_check.add_argument("files", nargs="+", help="검사할 입력 파일")
    p_check.add_argument("-T", "--trace", default="", help="트레이스 범주 (advance,match,token,rule|all)")
    p_check.add_argument("--strict", action="store_true", help="선택된 분기의 실제 결과를 alternative 결과로 전파")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_rules = sub.add_parser("rules", help="룰 목록과 FIRST 리터럴을 출력합니다")
    p_rules.add_argument("grammar", help="문법 위치 (module:attr)")
    p_rules.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_rules.set_defaults(func=cmd_rules)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
