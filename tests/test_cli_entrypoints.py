import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]
BENCH_CLI = REPO_ROOT / "bench_cli.py"
MERGE_CLI = REPO_ROOT / "merge_schema.py"


def run_cli(args, *, cwd: Path) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    for var in ("HYPERFINE_BIN", "BENCH_ROOT", "GQLMERGE_DEFINITIONS_DIR", "GQLMERGE_OUTPUT", "GQLMERGE_EXTENSION"):
        env.pop(var, None)
    env["PYTHONIOENCODING"] = "utf-8"
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, *[str(a) for a in args]],
        cwd=str(cwd),
        env=env,
        text=True,
        encoding="utf-8",
        capture_output=True,
    )


class TestBenchCLI(unittest.TestCase):
    def test_default_suite_dry_run(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "go").mkdir()
            (root / "go" / "main.exe").write_text("", encoding="utf-8")

            result = run_cli([BENCH_CLI, "--dry-run"], cwd=root)

        self.assertEqual(0, result.returncode, result.stderr)
        self.assertIn(
            'hyperfine --warmup 10 -n bun "bun/main" -n go "go/main.exe" -n zig "zig/main"',
            result.stdout,
        )

    def test_unknown_suite_fails(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            result = run_cli([BENCH_CLI, "--dry-run", "--suite", "nope"], cwd=Path(td))
        self.assertNotEqual(0, result.returncode)
        self.assertIn("Unknown suite", result.stderr)

    def test_malformed_plan_fails_with_one_line_message(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "bad.yaml").write_text("targets: {bun: [\n", encoding="utf-8")
            result = run_cli([BENCH_CLI, "--plan", "bad.yaml", "--dry-run"], cwd=root)

        self.assertNotEqual(0, result.returncode)
        self.assertIn("Invalid benchmark plan", result.stderr)
        self.assertNotIn("Traceback", result.stderr)

    def test_here_runs_the_local_binary(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            result = run_cli([BENCH_CLI, "--here", "--dry-run"], cwd=Path(td))

        self.assertEqual(0, result.returncode, result.stderr)
        self.assertIn('hyperfine --warmup 10 "./main"', result.stdout)

    def test_list_suites(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            result = run_cli([BENCH_CLI, "--list"], cwd=Path(td))
        self.assertEqual(0, result.returncode, result.stderr)
        for key in ("full", "others", "micro"):
            self.assertIn(key, result.stdout)


class TestMergeCLI(unittest.TestCase):
    def test_defaults_merge_graphql_definitions(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            defs = root / "graphql-definitions"
            defs.mkdir()
            (defs / "a.graphql").write_text("type A { x: Int }", encoding="utf-8")
            (defs / "b.graphql").write_text("type A { y: String }", encoding="utf-8")

            result = run_cli([MERGE_CLI], cwd=root)

            self.assertEqual(0, result.returncode, result.stderr)
            self.assertEqual(
                "type A {\n  x: Int\n  y: String\n}\n",
                (root / "python.generated.graphql").read_text(encoding="utf-8"),
            )

    def test_conflict_exits_non_zero_without_output(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            defs = root / "defs"
            defs.mkdir()
            (defs / "a.graphql").write_text("type A { x: Int }", encoding="utf-8")
            (defs / "b.graphql").write_text("enum A { X }", encoding="utf-8")

            result = run_cli([MERGE_CLI, "--input-dir", defs, "--output", root / "out.graphql"], cwd=root)

            self.assertEqual(1, result.returncode)
            self.assertIn("Unable to merge", result.stderr)
            self.assertFalse((root / "out.graphql").exists())

    def test_undecodable_fragment_exits_with_one_line_message(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            defs = root / "graphql-definitions"
            defs.mkdir()
            (defs / "a.graphql").write_bytes(b"type A { x: Int }\xff")

            result = run_cli([MERGE_CLI], cwd=root)

            self.assertEqual(1, result.returncode)
            self.assertIn("not valid UTF-8", result.stderr)
            self.assertNotIn("Traceback", result.stderr)
            self.assertFalse((root / "python.generated.graphql").exists())

    def test_missing_directory_exits_non_zero(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            result = run_cli([MERGE_CLI], cwd=Path(td))
        self.assertEqual(1, result.returncode)
        self.assertIn("not found", result.stderr)


if __name__ == "__main__":
    unittest.main()
