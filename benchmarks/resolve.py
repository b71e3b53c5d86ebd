"""benchmarks.resolve

Resolve benchmark targets to executable paths.

Each implementation is built into its own directory (``bun/``, ``go/``,
``zig/``). On Windows the build produces ``main.exe``; elsewhere ``main``.
We prefer the Windows binary whenever it exists and otherwise fall back to
the default name *without* checking that it exists: a missing binary is
reported by hyperfine when it tries to run it.

Paths are returned relative to the bench root because the harness runs with
``cwd=<bench_root>`` and prints them in its report.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from benchmarks.targets import BENCHMARKS, BenchmarkTarget


ExistsFn = Callable[[Path], bool]


@dataclass(frozen=True)
class BenchmarkEntry:
    """A benchmark name and the executable path handed to the harness."""

    name: str
    path: str


def _default_exists(p: Path) -> bool:
    return p.exists()


def resolve_executable(
    target: BenchmarkTarget,
    *,
    root: Path = Path("."),
    exists: Optional[ExistsFn] = None,
) -> str:
    """Return ``<key>/<binary>`` for *target*, preferring the Windows binary."""
    exists = exists or _default_exists
    binary = (
        target.windows_binary
        if exists(Path(root) / target.key / target.windows_binary)
        else target.default_binary
    )
    # Forward slashes keep the command string identical across platforms.
    return f"{target.key}/{binary}"


def resolve_entries(
    keys: Iterable[str],
    *,
    root: Path = Path("."),
    registry: Optional[Dict[str, BenchmarkTarget]] = None,
    exists: Optional[ExistsFn] = None,
) -> List[BenchmarkEntry]:
    """Resolve target keys in order. Unknown keys raise ``ValueError``."""
    registry = BENCHMARKS if registry is None else registry

    entries: List[BenchmarkEntry] = []
    for key in keys:
        target = registry.get(key)
        if target is None:
            raise ValueError(
                f"Unknown benchmark target '{key}'. "
                f"Valid options: {', '.join(sorted(registry.keys()))}"
            )
        entries.append(
            BenchmarkEntry(name=key, path=resolve_executable(target, root=root, exists=exists))
        )
    return entries


def resolve_current_dir(
    *,
    root: Path = Path("."),
    windows_binary: str = "main.exe",
    default_binary: str = "main",
    exists: Optional[ExistsFn] = None,
) -> str:
    """Resolve the binary living directly in *root* (single-executable mode).

    The name comes back as ``./<binary>`` so the harness shell runs the local
    file instead of searching PATH.
    """
    exists = exists or _default_exists
    binary = windows_binary if exists(Path(root) / windows_binary) else default_binary
    return f"./{binary}"
