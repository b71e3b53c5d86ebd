"""benchmarks.plan

Optional YAML plan format for benchmark runs.

Why this exists
---------------
The built-in registry in :mod:`benchmarks.targets` covers the implementations
that live in this repository. A plan file lets you benchmark a different set
of directories (or change warmup/run counts) without editing code:

.. code-block:: yaml

    targets:
      bun: {label: Bun}
      rust: {label: Rust, default_binary: gqlmerge}
    suites:
      quick:
        label: Quick comparison
        targets: [bun, rust]
        warmup: 3
        runs: 5

Design goals
------------
- Be permissive: omitted fields fall back to the registry defaults.
- Fail fast on references to unknown targets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from benchmarks.targets import (
    BENCHMARK_SUITES,
    BENCHMARKS,
    BenchmarkSuite,
    BenchmarkTarget,
    HarnessMode,
)


@dataclass(frozen=True)
class BenchmarkPlan:
    targets: Dict[str, BenchmarkTarget] = field(default_factory=dict)
    suites: Dict[str, BenchmarkSuite] = field(default_factory=dict)

    # ----------------------------
    # Conversions
    # ----------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "targets": {
                key: {
                    "label": t.label,
                    "windows_binary": t.windows_binary,
                    "default_binary": t.default_binary,
                }
                for key, t in self.targets.items()
            },
            "suites": {
                key: {
                    "label": s.label,
                    "targets": list(s.targets),
                    "warmup": s.mode.warmup,
                    "runs": s.mode.runs,
                }
                for key, s in self.suites.items()
            },
        }

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "BenchmarkPlan":
        raw = _mapping(raw, "plan")

        targets: Dict[str, BenchmarkTarget] = {}
        for key, t_raw in _mapping(raw.get("targets"), "targets").items():
            t_raw = _mapping(t_raw, f"target '{key}'")
            targets[str(key)] = BenchmarkTarget(
                key=str(key),
                label=str(t_raw.get("label") or key),
                windows_binary=str(t_raw.get("windows_binary") or "main.exe"),
                default_binary=str(t_raw.get("default_binary") or "main"),
            )

        suites: Dict[str, BenchmarkSuite] = {}
        for key, s_raw in _mapping(raw.get("suites"), "suites").items():
            s_raw = _mapping(s_raw, f"suite '{key}'")
            names_raw = s_raw.get("targets") or []
            if not isinstance(names_raw, list):
                raise ValueError(f"Suite '{key}': targets must be a list")
            names = tuple(str(x) for x in names_raw)
            if not names:
                raise ValueError(f"Suite '{key}' must list at least one target")
            unknown = [n for n in names if n not in targets]
            if unknown:
                raise ValueError(f"Suite '{key}' references unknown targets: {', '.join(unknown)}")

            suites[str(key)] = BenchmarkSuite(
                key=str(key),
                label=str(s_raw.get("label") or key),
                targets=names,
                mode=_parse_mode(str(key), s_raw),
            )

        return BenchmarkPlan(targets=targets, suites=suites)


def _mapping(value: Any, what: str) -> Dict[str, Any]:
    """Treat a missing section as empty; anything but a mapping is an error."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _parse_mode(suite_key: str, raw: Dict[str, Any]) -> HarnessMode:
    try:
        warmup = int(raw.get("warmup", 10))
        runs_raw = raw.get("runs")
        runs: Optional[int] = None if runs_raw is None else int(runs_raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Suite '{suite_key}': warmup/runs must be integers ({e})") from e

    if warmup < 0:
        raise ValueError(f"Suite '{suite_key}': warmup must be >= 0 (got {warmup})")
    if runs is not None and runs < 1:
        raise ValueError(f"Suite '{suite_key}': runs must be >= 1 (got {runs})")
    return HarnessMode(warmup=warmup, runs=runs)


def builtin_plan() -> BenchmarkPlan:
    return BenchmarkPlan(targets=dict(BENCHMARKS), suites=dict(BENCHMARK_SUITES))


# ----------------------------
# YAML IO
# ----------------------------

def load_plan_yaml(path: str | Path) -> BenchmarkPlan:
    """Load a benchmark plan from YAML."""
    import yaml
    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(f"Benchmark plan not found: {p}")
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"Benchmark plan YAML must be a mapping/object at top level: {p}")
    return BenchmarkPlan.from_dict(raw)


def dump_plan_yaml(path: str | Path, plan: BenchmarkPlan) -> Path:
    """Write a benchmark plan YAML to the given path."""
    import yaml
    p = Path(path).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    text = yaml.safe_dump(
        plan.to_dict(),
        sort_keys=False,
        default_flow_style=False,
        width=120,
    )
    p.write_text(text, encoding="utf-8")
    return p
