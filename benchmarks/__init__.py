"""
Benchmark driver for the GraphQL schema merger implementations.

Currently includes:
- targets: the built-in registry of implementations and suites.
- resolve / command: executable resolution and hyperfine command assembly.
- runtime: run_suite() to hand a suite to hyperfine.
- plan: optional YAML plan files.
"""

from .command import build_harness_args, build_harness_command, command_str
from .resolve import BenchmarkEntry, resolve_entries, resolve_executable
from .runtime import run_current_dir, run_suite
from .targets import BENCHMARK_SUITES, BENCHMARKS, DEFAULT_SUITE

__all__ = [
    "BENCHMARKS",
    "BENCHMARK_SUITES",
    "BenchmarkEntry",
    "DEFAULT_SUITE",
    "build_harness_args",
    "build_harness_command",
    "command_str",
    "resolve_entries",
    "resolve_executable",
    "run_current_dir",
    "run_suite",
]
