from __future__ import annotations

import argparse
import json
import os
import sys
import time

from setblocks._config import LOG_LEVELS
from setblocks._laws import LAWS, LawResult, check_laws
from setblocks._log import setup_logger
from setblocks._strategies import ELEMENT_KINDS, element_strategy
from setblocks._term import bold, dim, force_color, green, red, status_label
from setblocks._util import _ensure_dir, _now_iso


def _print_result_line(r: LawResult, *, verbose: bool = False) -> None:
    # Pad the raw status, then colorize, so ANSI codes don't break alignment
    pad = " " * (5 - len(r.status))
    timing = "  " + dim(f"({r.duration_s:.1f}s)") if r.duration_s >= 0.05 else ""
    name = bold(f"{r.law:<28}")
    print(f"  {pad}{status_label(r.status)}  {name}{timing}")

    if not verbose:
        return
    print(f"         {dim(r.details.get('description', ''))}")
    ce = r.details.get("counterexample")
    if ce:
        print(f"         kwargs: {json.dumps(ce['kwargs'], default=str)}")
        print(f"         error:  {ce['error']}")
    elif "error" in r.details:
        print(f"         error:  {r.details['error']}")


def _print_summary(results: list[LawResult], total_s: float, out_dir: str | None) -> None:
    passed = sum(1 for r in results if r.status == "pass")
    failed = len(results) - passed

    parts: list[str] = []
    if passed:
        parts.append(green(f"{passed} passed"))
    if failed:
        parts.append(red(f"{failed} failed"))

    summary = ", ".join(parts) if parts else "no laws"
    timing = dim(f"({total_s:.1f}s total)")
    location = dim(f"JSON report in {out_dir}/") if out_dir else ""
    print(f"\n{summary}  {timing}  {location}".rstrip())


def _write_report(out_dir: str, elements: str, results: list[LawResult]) -> None:
    _ensure_dir(out_dir)
    report = {
        "timestamp": _now_iso(),
        "elements": elements,
        "laws": [r.to_json() for r in results],
    }
    with open(os.path.join(out_dir, "laws.json"), "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, default=str)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="setblocks", description="Check the laws of the set block operations.")
    p.add_argument("--elements", choices=sorted(ELEMENT_KINDS), default="int", help="Element type of generated sets")
    p.add_argument("--law", action="append", choices=sorted(LAWS), help="Only check this law (repeatable)")
    p.add_argument("--max-examples", type=int, default=100, help="Examples generated per law")
    p.add_argument("--out", default=".setblocks", help="Output directory for the JSON report")
    p.add_argument("--no-report", action="store_true", help="Do not write the JSON report")
    p.add_argument("-v", "--verbose", action="store_true", help="Show descriptions and counterexamples")
    p.add_argument("-q", "--quiet", action="store_true", help="Only print summary and exit code")
    p.add_argument("--json", action="store_true", help="Output results as JSON array to stdout")
    p.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    p.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default=None,
        help="Log level (default: $SETBLOCKS_LOG_LEVEL or WARNING)",
    )
    args = p.parse_args(argv)

    if args.no_color:
        force_color(False)
    setup_logger(args.log_level)

    json_mode = args.json

    def on_result(r: LawResult) -> None:
        if not json_mode and not args.quiet:
            _print_result_line(r, verbose=args.verbose)

    if args.max_examples < 1:
        print("error: --max-examples must be at least 1", file=sys.stderr)
        return 2

    t_start = time.monotonic()
    results = check_laws(
        element_strategy(ELEMENT_KINDS[args.elements]),
        max_examples=args.max_examples,
        laws=args.law,
        on_result=on_result,
    )
    total_s = time.monotonic() - t_start

    out_dir = None if args.no_report else args.out
    if out_dir is not None:
        _write_report(out_dir, args.elements, results)

    failed = any(r.status != "pass" for r in results)
    if json_mode:
        print(json.dumps([r.to_json() for r in results], indent=2, default=str))
        return 1 if failed else 0

    _print_summary(results, total_s, out_dir)
    return 1 if failed else 0
