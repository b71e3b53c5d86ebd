#!/usr/bin/env python3
"""
CLI wrapper that benchmarks the schema merger implementations with hyperfine.

Suites:
  full    - bun, go, zig (10 warmup runs)       [default]
  others  - bun, go (1 run, no warmup)
  micro   - zig (1 warmup run)

Usage:
  python bench_cli.py
  python bench_cli.py --suite others
  python bench_cli.py --plan bench.yaml --suite quick --dry-run
  python bench_cli.py --here            # benchmark ./main(.exe)
  python bench_cli.py --list

The exit code is hyperfine's exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from benchmarks.command import which_or_raise
from benchmarks.config import load_settings
from benchmarks.plan import BenchmarkPlan, builtin_plan, load_plan_yaml
from benchmarks.runtime import run_current_dir, run_suite
from benchmarks.targets import DEFAULT_SUITE, BenchmarkSuite


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark GraphQL schema merger executables with hyperfine.")

    parser.add_argument("--suite", help=f"Benchmark suite to run (default: {DEFAULT_SUITE})")
    parser.add_argument("--plan", help="YAML plan file replacing the built-in targets/suites")
    parser.add_argument(
        "--here",
        action="store_true",
        help="Benchmark the main.exe/main binary in the bench root instead of a suite",
    )
    parser.add_argument("--root", help="Directory containing the per-language folders (env: BENCH_ROOT)")
    parser.add_argument("--hyperfine", help="hyperfine executable (env: HYPERFINE_BIN)")
    parser.add_argument("--export-json", help="Forward --export-json <file> to hyperfine")
    parser.add_argument("--dry-run", action="store_true", help="Print the command but do not execute")
    parser.add_argument("--list", action="store_true", help="List suites and exit")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def load_plan(plan_path: Optional[str]) -> BenchmarkPlan:
    if not plan_path:
        return builtin_plan()
    try:
        return load_plan_yaml(plan_path)
    except (OSError, ValueError) as e:
        raise SystemExit(f"Invalid benchmark plan: {e}")


def choose_suite(plan: BenchmarkPlan, key: Optional[str]) -> BenchmarkSuite:
    suites: Dict[str, BenchmarkSuite] = plan.suites
    if key is None:
        key = DEFAULT_SUITE if DEFAULT_SUITE in suites else next(iter(suites), None)
    if key is None or key not in suites:
        raise SystemExit(
            f"Unknown suite '{key}'. Valid options: {', '.join(suites.keys()) or '(none)'}"
        )
    return suites[key]


def print_suites(plan: BenchmarkPlan) -> None:
    print("Available suites:")
    for key, suite in plan.suites.items():
        marker = " (default)" if key == DEFAULT_SUITE else ""
        print(f"  {key:<8} {suite.label}{marker}")
        print(f"           targets: {', '.join(suite.targets)}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    plan = load_plan(args.plan)

    if args.list:
        print_suites(plan)
        return 0

    root = Path(args.root) if args.root else settings.bench_root
    harness = args.hyperfine or settings.hyperfine_bin
    export_json = Path(args.export_json) if args.export_json else None

    if not root.is_dir():
        raise SystemExit(f"Bench root is not a directory: {root}")

    if not args.dry_run:
        try:
            harness = which_or_raise(harness)
        except FileNotFoundError as e:
            raise SystemExit(str(e))

    if args.here:
        code = run_current_dir(root=root, harness=harness, export_json=export_json, dry_run=args.dry_run)
    else:
        suite = choose_suite(plan, args.suite)
        code = run_suite(
            suite,
            root=root,
            registry=plan.targets,
            harness=harness,
            export_json=export_json,
            dry_run=args.dry_run,
        )

    if code == 0:
        print("\n✅ Benchmark completed.")
    else:
        print(f"\n⚠️ Benchmark finished with exit code {code}", file=sys.stderr)
    return code


if __name__ == "__main__":
    raise SystemExit(main())
