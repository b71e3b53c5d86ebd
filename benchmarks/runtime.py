# benchmarks/runtime.py
"""Run a benchmark suite through the external harness.

The harness inherits our stdout/stderr so its live progress and report show
up unchanged, and its exit code is returned as-is. We never inspect harness
output or retry.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional

from benchmarks.command import (
    DEFAULT_HARNESS,
    build_harness_command,
    build_single_command,
    command_str,
)
from benchmarks.resolve import ExistsFn, resolve_current_dir, resolve_entries
from benchmarks.targets import (
    BENCHMARKS,
    CURRENT_DIR_MODE,
    BenchmarkSuite,
    BenchmarkTarget,
    HarnessMode,
)

logger = logging.getLogger(__name__)

Runner = Callable[[List[str], Path], int]


def _subprocess_runner(cmd: List[str], cwd: Path) -> int:
    result = subprocess.run(cmd, cwd=str(cwd))
    return result.returncode


def run_command(
    cmd: List[str],
    *,
    cwd: Path,
    dry_run: bool = False,
    runner: Optional[Runner] = None,
) -> int:
    """Print and run *cmd* in *cwd*; return the child exit code."""
    print("  Command :", command_str(cmd))
    if dry_run:
        print("  (dry-run: not executing)")
        return 0

    runner = runner or _subprocess_runner
    code = runner(cmd, Path(cwd))
    logger.debug("harness exited with %s", code)
    return code


def build_suite_command(
    suite: BenchmarkSuite,
    *,
    root: Path = Path("."),
    registry: Optional[Dict[str, BenchmarkTarget]] = None,
    harness: str = DEFAULT_HARNESS,
    export_json: Optional[Path] = None,
    exists: Optional[ExistsFn] = None,
) -> List[str]:
    entries = resolve_entries(
        suite.targets,
        root=root,
        registry=BENCHMARKS if registry is None else registry,
        exists=exists,
    )
    for entry in entries:
        logger.debug("resolved %s -> %s", entry.name, entry.path)
    return build_harness_command(entries, suite.mode, harness=harness, export_json=export_json)


def run_suite(
    suite: BenchmarkSuite,
    *,
    root: Path = Path("."),
    registry: Optional[Dict[str, BenchmarkTarget]] = None,
    harness: str = DEFAULT_HARNESS,
    export_json: Optional[Path] = None,
    dry_run: bool = False,
    runner: Optional[Runner] = None,
) -> int:
    cmd = build_suite_command(
        suite,
        root=root,
        registry=registry,
        harness=harness,
        export_json=export_json,
    )

    print("\n🚀 Running benchmark")
    print(f"  Suite   : {suite.key} ({suite.label})")
    print(f"  Targets : {', '.join(suite.targets)}")
    return run_command(cmd, cwd=root, dry_run=dry_run, runner=runner)


def run_current_dir(
    *,
    root: Path = Path("."),
    mode: HarnessMode = CURRENT_DIR_MODE,
    harness: str = DEFAULT_HARNESS,
    export_json: Optional[Path] = None,
    dry_run: bool = False,
    runner: Optional[Runner] = None,
) -> int:
    """Benchmark the ``main.exe`` / ``main`` binary that lives in *root*."""
    exe = resolve_current_dir(root=root)
    cmd = build_single_command(exe, mode, harness=harness, export_json=export_json)

    print("\n🚀 Running benchmark")
    print(f"  Executable : {Path(root) / exe}")
    return run_command(cmd, cwd=root, dry_run=dry_run, runner=runner)
