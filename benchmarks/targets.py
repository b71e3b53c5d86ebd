# benchmarks/targets.py
"""
Central place to define benchmark targets and benchmark suites.

- BENCHMARKS: which implementations we compare (one directory per language)
- BENCHMARK_SUITES: which harness runs we support (full, others, micro)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class BenchmarkTarget:
    """One prebuilt implementation under ``<bench_root>/<key>/``."""

    key: str
    label: str
    windows_binary: str = "main.exe"
    default_binary: str = "main"


@dataclass(frozen=True)
class HarnessMode:
    """How many warmup / measured runs the harness performs.

    ``runs=None`` lets hyperfine pick the run count itself.
    """

    warmup: int = 10
    runs: Optional[int] = None


@dataclass(frozen=True)
class BenchmarkSuite:
    key: str
    label: str
    targets: Tuple[str, ...]
    mode: HarnessMode


# NOTE: dict insertion order is the order targets appear in menus and in
# --list output. Suite target tuples carry their own (report) order.
BENCHMARKS: Dict[str, BenchmarkTarget] = {
    "bun": BenchmarkTarget(key="bun", label="Bun (TypeScript)"),
    "go": BenchmarkTarget(key="go", label="Go"),
    "zig": BenchmarkTarget(key="zig", label="Zig"),
}

BENCHMARK_SUITES: Dict[str, BenchmarkSuite] = {
    "full": BenchmarkSuite(
        key="full",
        label="All implementations, 10 warmup runs",
        targets=("bun", "go", "zig"),
        mode=HarnessMode(warmup=10),
    ),
    "others": BenchmarkSuite(
        key="others",
        label="Bun and Go, single run without warmup",
        targets=("bun", "go"),
        mode=HarnessMode(warmup=0, runs=1),
    ),
    "micro": BenchmarkSuite(
        key="micro",
        label="Zig only, 1 warmup run",
        targets=("zig",),
        mode=HarnessMode(warmup=1),
    ),
}

DEFAULT_SUITE = "full"

# Single-executable mode (benchmark the binary in the current directory).
CURRENT_DIR_MODE = HarnessMode(warmup=10)

__all__ = [
    "BENCHMARKS",
    "BENCHMARK_SUITES",
    "BenchmarkSuite",
    "BenchmarkTarget",
    "CURRENT_DIR_MODE",
    "DEFAULT_SUITE",
    "HarnessMode",
]
