import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from typing import List
from unittest import mock

from benchmarks.runtime import (
    build_suite_command,
    run_command,
    run_current_dir,
    run_suite,
)
from benchmarks.targets import BENCHMARK_SUITES


class FakeRunner:
    def __init__(self, code: int = 0) -> None:
        self.code = code
        self.calls: List[tuple] = []

    def __call__(self, cmd: List[str], cwd: Path) -> int:
        self.calls.append((list(cmd), cwd))
        return self.code


class TestBenchmarkRuntime(unittest.TestCase):
    def test_build_suite_command_prefers_windows_binary(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "go").mkdir()
            (root / "go" / "main.exe").write_text("", encoding="utf-8")

            cmd = build_suite_command(BENCHMARK_SUITES["others"], root=root)
            self.assertEqual(
                [
                    "hyperfine",
                    "--runs",
                    "1",
                    "--warmup",
                    "0",
                    "-n",
                    "bun",
                    '"bun/main"',
                    "-n",
                    "go",
                    '"go/main.exe"',
                ],
                cmd,
            )

    def test_exit_code_is_passed_through(self) -> None:
        runner = FakeRunner(code=3)
        with tempfile.TemporaryDirectory() as td, redirect_stdout(io.StringIO()):
            code = run_suite(BENCHMARK_SUITES["micro"], root=Path(td), runner=runner)

        self.assertEqual(3, code)
        self.assertEqual(1, len(runner.calls))
        cmd, cwd = runner.calls[0]
        self.assertEqual(["hyperfine", "--warmup", "1", "-n", "zig", '"zig/main"'], cmd)
        self.assertEqual(Path(td), cwd)

    def test_dry_run_does_not_execute(self) -> None:
        runner = FakeRunner(code=9)
        buf = io.StringIO()
        with tempfile.TemporaryDirectory() as td, redirect_stdout(buf):
            code = run_suite(BENCHMARK_SUITES["full"], root=Path(td), dry_run=True, runner=runner)

        self.assertEqual(0, code)
        self.assertEqual([], runner.calls)
        self.assertIn(
            'hyperfine --warmup 10 -n bun "bun/main" -n go "go/main" -n zig "zig/main"',
            buf.getvalue(),
        )

    def test_default_runner_inherits_streams(self) -> None:
        with mock.patch("benchmarks.runtime.subprocess.run") as run, redirect_stdout(io.StringIO()):
            run.return_value = mock.Mock(returncode=2)
            code = run_command(["hyperfine", "x"], cwd=Path("bench"))

        self.assertEqual(2, code)
        run.assert_called_once_with(["hyperfine", "x"], cwd="bench")

    def test_run_current_dir(self) -> None:
        runner = FakeRunner()
        with tempfile.TemporaryDirectory() as td, redirect_stdout(io.StringIO()):
            (Path(td) / "main.exe").write_text("", encoding="utf-8")
            code = run_current_dir(root=Path(td), runner=runner)

        self.assertEqual(0, code)
        self.assertEqual(["hyperfine", "--warmup", "10", '"./main.exe"'], runner.calls[0][0])


if __name__ == "__main__":
    unittest.main()
