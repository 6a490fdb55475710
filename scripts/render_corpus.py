from __future__ import annotations

import argparse

from pentiment import compact, render
from pentiment.testing import generate_cases


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="render_corpus")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=20)
    ap.add_argument("--compact", action="store_true")
    ap.add_argument("--color", action="store_true")
    args = ap.parse_args(argv)

    for case in generate_cases(seed=args.seed, count=args.count):
        print(f"=== {case.source.name}")
        if args.compact:
            print(compact.format_diagnostic(case.report))
        else:
            print(render.format_diagnostic(case.report, case.source, colors=args.color))
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
