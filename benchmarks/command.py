"""benchmarks/command.py

Harness command assembly shared by every benchmark suite.

This module deliberately avoids executing anything. It provides:

* :func:`which_or_raise` - resolve the harness executable across environments.
* :func:`build_harness_args` - the flat argument list for hyperfine.
* :func:`build_harness_command` - executable + arguments.
* :func:`command_str` - a printable rendering of a command.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from benchmarks.resolve import BenchmarkEntry
from benchmarks.targets import HarnessMode


DEFAULT_HARNESS = "hyperfine"


def harness_fallbacks(bin_name: str) -> List[Path]:
    """Install locations that are commonly missing from PATH (``cargo install``)."""
    cargo_bin = Path.home() / ".cargo" / "bin"
    return [cargo_bin / bin_name, cargo_bin / f"{bin_name}.exe"]


def which_or_raise(bin_name: str, fallbacks: Optional[Sequence[Path]] = None) -> str:
    """Locate the harness executable and return its path.

    ``bin_name`` may be a bare name (searched on PATH) or a path. When PATH
    has no match, *fallbacks* (default: :func:`harness_fallbacks`) are tried.
    """
    found = shutil.which(bin_name)
    if found:
        return found

    candidates = harness_fallbacks(bin_name) if fallbacks is None else list(fallbacks)
    for p in candidates:
        if p.is_file() and os.access(str(p), os.X_OK):
            return str(p)

    raise FileNotFoundError(
        f"Harness '{bin_name}' not found on PATH or in: {', '.join(str(p) for p in candidates) or '(none)'}.\n"
        f"Install hyperfine (https://github.com/sharkdp/hyperfine) or set HYPERFINE_BIN."
    )


def quote_path(path: str) -> str:
    # hyperfine runs each command through a shell, which strips the quotes.
    return f'"{path}"'


def mode_args(mode: HarnessMode) -> List[str]:
    args: List[str] = []
    if mode.runs is not None:
        args += ["--runs", str(mode.runs)]
    args += ["--warmup", str(mode.warmup)]
    return args


def build_harness_args(
    entries: Sequence[BenchmarkEntry],
    mode: HarnessMode,
    *,
    export_json: Optional[Path] = None,
) -> List[str]:
    """Build hyperfine arguments: mode flags, then ``-n <name> "<path>"`` per entry.

    Entry order is kept as given; hyperfine reports commands in that order.
    """
    args = mode_args(mode)
    if export_json is not None:
        args += ["--export-json", str(export_json)]
    for entry in entries:
        args += ["-n", entry.name, quote_path(entry.path)]
    return args


def build_harness_command(
    entries: Sequence[BenchmarkEntry],
    mode: HarnessMode,
    *,
    harness: str = DEFAULT_HARNESS,
    export_json: Optional[Path] = None,
) -> List[str]:
    return [harness, *build_harness_args(entries, mode, export_json=export_json)]


def build_single_command(
    executable: str,
    mode: HarnessMode,
    *,
    harness: str = DEFAULT_HARNESS,
    export_json: Optional[Path] = None,
) -> List[str]:
    """Command for benchmarking one unnamed executable (no ``-n`` label)."""
    args = mode_args(mode)
    if export_json is not None:
        args += ["--export-json", str(export_json)]
    return [harness, *args, quote_path(executable)]


def command_str(cmd: Sequence[str]) -> str:
    return " ".join(cmd)
