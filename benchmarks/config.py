"""benchmarks.config

Environment-driven settings for the benchmark driver.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory. Existing environment variables win over
``.env`` entries, and CLI flags win over both.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from benchmarks.command import DEFAULT_HARNESS


ENV_PATH = Path(".env")


@dataclass(frozen=True)
class BenchSettings:
    hyperfine_bin: str = DEFAULT_HARNESS
    bench_root: Path = Path(".")


def load_settings(
    *,
    env: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[Path] = ENV_PATH,
) -> BenchSettings:
    if env is None:
        if dotenv_path is not None and Path(dotenv_path).exists():
            load_dotenv(dotenv_path, override=False)
        env = os.environ

    return BenchSettings(
        hyperfine_bin=env.get("HYPERFINE_BIN") or DEFAULT_HARNESS,
        bench_root=Path(env.get("BENCH_ROOT") or "."),
    )
